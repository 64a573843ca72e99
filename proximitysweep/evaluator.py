"""
UnorderedEvaluator — entry point for content:within(...) predicates
"""

import logging
import re
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Sequence

from .cursor import as_offset_array
from .sweep import ProximitySweep, check_distance

logger = logging.getLogger(__name__)


class TermFrequencyList:
    """
    Occurrence positions of one term in one document, per field.

    >>> tfl = TermFrequencyList.from_positions({"body": [4, 1]})
    >>> tfl.offsets("body")
    [1, 4]
    >>> tfl.offsets("title") is None
    True
    """

    def __init__(self) -> None:
        self._by_field: Dict[str, List[int]] = {}

    @classmethod
    def from_positions(cls, positions: Mapping[str, Iterable[int]]) -> "TermFrequencyList":
        tfl = cls()
        for field, offsets in positions.items():
            tfl.add(field, offsets)
        return tfl

    def add(self, field: str, offsets: Iterable[int]) -> None:
        merged = list(self._by_field.get(field, [])) + list(offsets)
        self._by_field[field] = as_offset_array(merged).tolist()

    def offsets(self, field: str) -> Optional[List[int]]:
        found = self._by_field.get(field)
        return list(found) if found is not None else None

    def fields(self) -> List[str]:
        return sorted(self._by_field)

    def __repr__(self) -> str:
        return f"TermFrequencyList({self._by_field})"


class UnorderedEvaluator:
    """
    Evaluates within(distance, term1, term2, ...) for one document.

    Returns True if the terms occur, in any order, within ``distance``
    positions of each other. For the phrase "the quick brown fox",
    within(2, 'quick', 'brown', 'fox') is True because 3 - 1 <= 2, and
    within(1, 'quick', 'brown', 'fox') is False.

    Parameters
    ----------
    fields : iterable of str
        Fields the offsets are drawn from. Each field is evaluated on
        its own; offsets from different fields are never combined.
    distance : int
        Maximum acceptable distance between the terms.
    term_offset_map : mapping of str -> TermFrequencyList
        Occurrence data for the current document.
    terms : sequence of str
        Query terms. A repeated term needs that many distinct
        occurrences unless ``allow_shared_occurrences`` is set.

    The evaluator holds no per-call state, so one instance can serve
    many documents and threads as long as each call gets its own
    offset lists.
    """

    def __init__(
        self,
        fields: Iterable[str],
        distance: int,
        term_offset_map: Optional[Mapping[str, TermFrequencyList]],
        terms: Sequence[str],
        allow_shared_occurrences: bool = False,
    ) -> None:
        self.fields: FrozenSet[str] = frozenset(fields)
        self.distance = check_distance(distance)
        self.term_offset_map = term_offset_map if term_offset_map is not None else {}
        self.terms = tuple(terms)
        self.allow_shared_occurrences = allow_shared_occurrences
        if not self.terms:
            raise ValueError("At least one term is required.")

    def evaluate(self, offsets: Sequence[Optional[Iterable[int]]]) -> bool:
        """
        Evaluate one offset list per term slot in an unordered way.

        Returns True if a window within ``distance`` covers one
        occurrence of every term.
        """
        sweep = ProximitySweep(
            self.distance,
            self.terms,
            offsets,
            allow_shared_occurrences=self.allow_shared_occurrences,
        )
        return sweep.find_match()

    def field_offsets(self, field: str) -> List[Optional[List[int]]]:
        out: List[Optional[List[int]]] = []
        for term in self.terms:
            tfl = self.term_offset_map.get(term)
            out.append(tfl.offsets(field) if tfl is not None else None)
        return out

    def evaluate_fields(self) -> bool:
        """Evaluate every field in ``fields``; True on the first field that matches."""
        for field in sorted(self.fields):
            if self.evaluate(self.field_offsets(field)):
                logger.debug("within(%d, %s) matched in field %r", self.distance, self.terms, field)
                return True
        return False

    def __repr__(self) -> str:
        return (
            f"UnorderedEvaluator(fields={sorted(self.fields)}, distance={self.distance}, "
            f"terms={list(self.terms)})"
        )


# ---------------------------------------------------------------------------
# within(...) parsing
# ---------------------------------------------------------------------------

_WITHIN_RE = re.compile(r"^\s*(?:content\s*:\s*)?within\s*\((?P<args>.*)\)\s*$", re.IGNORECASE | re.DOTALL)
_QUOTED = r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\""
_QUOTED_RE = re.compile(_QUOTED)
_ARG_RE = re.compile(r"\s*(" + _QUOTED + r"|[^,]+?)\s*(?:,|$)")
_IDENT_RE = re.compile(r"^[A-Za-z_][\w.]*$")

TERM_OFFSET_MAP_ARG = "termOffsetMap"


def _split_args(args: str) -> List[str]:
    out = []
    pos = 0
    while pos < len(args):
        m = _ARG_RE.match(args, pos)
        if m is None or m.end() == pos:
            raise ValueError(f"Cannot parse within() arguments: {args!r}")
        arg = m.group(1)
        # quotes are only valid around a whole argument
        if ("'" in arg or '"' in arg) and not _QUOTED_RE.fullmatch(arg):
            raise ValueError(f"Malformed within() argument: {arg!r}")
        out.append(arg)
        pos = m.end()
    return out


def _unquote(arg: str) -> str:
    if len(arg) >= 2 and arg[0] == arg[-1] and arg[0] in "'\"":
        return re.sub(r"\\(.)", r"\1", arg[1:-1])
    raise ValueError(f"Expected a quoted term, got {arg!r}")


class WithinPredicate(NamedTuple):
    distance: int
    terms: tuple
    fields: FrozenSet[str] = frozenset()

    def evaluator(
        self,
        term_offset_map: Mapping[str, TermFrequencyList],
        default_fields: Iterable[str] = (),
        allow_shared_occurrences: bool = False,
    ) -> UnorderedEvaluator:
        fields = self.fields or frozenset(default_fields)
        return UnorderedEvaluator(
            fields,
            self.distance,
            term_offset_map,
            self.terms,
            allow_shared_occurrences=allow_shared_occurrences,
        )


def parse_within(text: str) -> WithinPredicate:
    """
    Parse a within() predicate.

    Accepts ``within(2, 'quick', 'brown', 'fox')`` and the longer form
    ``content:within(body, 2, termOffsetMap, 'quick', 'brown')`` with an
    optional leading field name and an optional termOffsetMap argument.

    >>> parse_within("content:within(body, 2, termOffsetMap, 'a', 'b')")
    WithinPredicate(distance=2, terms=('a', 'b'), fields=frozenset({'body'}))
    """
    m = _WITHIN_RE.match(text)
    if m is None:
        raise ValueError(f"Not a within() predicate: {text!r}")
    args = _split_args(m.group("args"))

    fields: FrozenSet[str] = frozenset()
    if args and _IDENT_RE.match(args[0]) and args[0] != TERM_OFFSET_MAP_ARG:
        fields = frozenset([args.pop(0)])

    if not args or not re.fullmatch(r"\d+", args[0]):
        raise ValueError(f"within() needs a non-negative integer distance: {text!r}")
    distance = int(args.pop(0))

    if args and args[0] == TERM_OFFSET_MAP_ARG:
        args.pop(0)

    terms = tuple(_unquote(a) for a in args)
    if not terms:
        raise ValueError(f"within() needs at least one term: {text!r}")
    return WithinPredicate(distance, terms, fields)
