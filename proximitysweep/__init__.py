"""
proximitysweep
==============
Unordered proximity matching for full-text within() predicates.

Given the sorted positions of each query term in a document field,
decides whether one occurrence of every term fits inside a window of
``distance`` positions, in any order. A streaming min-heap sweep
advances the term furthest behind until the window closes or is
provably impossible.

Usage:
    from proximitysweep import UnorderedEvaluator

    ev = UnorderedEvaluator({"body"}, 2, {}, ["quick", "brown", "fox"])
    ev.evaluate([[1], [2], [3]])   # True: 3 - 1 <= 2
"""

from .cursor import OffsetCursor
from .evaluator import TermFrequencyList, UnorderedEvaluator, WithinPredicate, parse_within
from .sweep import ProximitySweep, exhaustive_match

__version__ = "0.1.0"
__all__ = [
    "OffsetCursor",
    "ProximitySweep",
    "exhaustive_match",
    "TermFrequencyList",
    "UnorderedEvaluator",
    "WithinPredicate",
    "parse_within",
]
