"""
ProximitySweep — unordered within(distance, ...) matching over offset cursors
"""

import heapq
import logging
from collections import Counter
from itertools import combinations, product
from numbers import Integral
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cursor import OffsetCursor, as_offset_array

logger = logging.getLogger(__name__)


def check_distance(distance: int) -> int:
    if isinstance(distance, bool) or not isinstance(distance, Integral):
        raise ValueError(f"distance must be an integer, got {distance!r}.")
    if distance < 0:
        raise ValueError(f"distance must be non-negative, got {distance}.")
    return int(distance)


def term_multiplicity(terms: Sequence[str], allow_shared_occurrences: bool = False) -> Dict[str, int]:
    """Number of distinct occurrences each term needs to supply."""
    if allow_shared_occurrences:
        return {t: 1 for t in terms}
    return dict(Counter(terms))


def _check_counts(terms: Sequence[str], term_offsets: Sequence) -> bool:
    """False when there are too few offset lists, ValueError when too many."""
    if len(terms) > len(term_offsets):
        logger.debug(
            "%d terms but only %d offset lists; no match possible",
            len(terms), len(term_offsets),
        )
        return False
    if len(terms) < len(term_offsets):
        raise ValueError(
            f"Fewer terms ({len(terms)}) than offset lists received ({len(term_offsets)})."
        )
    return True


class ProximitySweep:
    """
    Decide whether one occurrence per term fits in a window of ``distance``.

    Keeps one OffsetCursor per distinct term in a min-heap keyed by the
    cursor's current offset, plus the largest offset currently held by
    any cursor (``global_max``). Each step pops the cursor furthest
    behind. If the gap to ``global_max`` is small enough the window is
    found; if even that cursor's last offset cannot close the gap there
    is no match; otherwise the cursor advances and goes back on the heap.

    Parameters
    ----------
    distance : int
        Maximum allowed ``max - min`` over the chosen offsets.
    terms : sequence of str
        Query terms in slot order. Repeats are allowed.
    term_offsets : sequence of (sequence of int or None)
        One offset list per slot of ``terms``. Never modified.
    allow_shared_occurrences : bool
        When False (default) a term repeated n times needs n distinct
        occurrences. When True a single occurrence satisfies every
        repetition.

    Raises
    ------
    ValueError
        If more offset lists than terms are supplied, or distance is
        negative.

    Example
    -------
    >>> ProximitySweep(2, ["quick", "brown", "fox"], [[1], [2], [3]]).find_match()
    True
    >>> ProximitySweep(1, ["quick", "brown", "fox"], [[1], [2], [3]]).find_match()
    False
    """

    def __init__(
        self,
        distance: int,
        terms: Sequence[str],
        term_offsets: Iterable[Optional[Iterable[int]]],
        allow_shared_occurrences: bool = False,
    ) -> None:
        self.distance = check_distance(distance)
        self.terms: List[str] = list(terms)
        self.allow_shared_occurrences = allow_shared_occurrences

        self.cursors: Dict[str, OffsetCursor] = {}
        self.global_max: int = -1
        self._heap: List[Tuple[int, int, OffsetCursor]] = []
        self._result: Optional[bool] = None

        term_offsets = list(term_offsets)
        if not _check_counts(self.terms, term_offsets):
            return

        needed = term_multiplicity(self.terms, allow_shared_occurrences)
        for term, offsets in zip(self.terms, term_offsets):
            if offsets is None:
                self._abandon(term, "has no offset list")
                return
            # first list seen for a term is canonical
            if term in self.cursors:
                continue
            cursor = OffsetCursor(term, offsets, multiplicity=needed[term])
            if cursor.exhausted:
                self._abandon(term, f"has {len(cursor)} offsets, needs {needed[term]}")
                return
            self.cursors[term] = cursor
            self._heap.append((cursor.current, len(self._heap), cursor))
            if cursor.current_high > self.global_max:
                self.global_max = cursor.current_high

        heapq.heapify(self._heap)

    def _abandon(self, term: str, reason: str) -> None:
        logger.debug("Offset list for %r %s; no match possible", term, reason)
        self.cursors.clear()
        self._heap.clear()

    def find_match(self) -> bool:
        if self._result is None:
            self._result = self._sweep()
            logger.debug("%r -> %s", self, self._result)
        return self._result

    def _sweep(self) -> bool:
        if not self._heap or len(set(self.terms)) > len(self._heap):
            return False

        heap = self._heap
        while True:
            _, order, cursor = heapq.heappop(heap)
            if self.global_max - cursor.current <= self.distance:
                return True

            # even the last offset of the furthest-behind cursor is too far
            if self.global_max - cursor.series_max > self.distance:
                return False

            nxt = cursor.advance()
            if nxt is None:
                return False

            if cursor.current_high > self.global_max:
                self.global_max = cursor.current_high

            heapq.heappush(heap, (nxt, order, cursor))

    def __repr__(self) -> str:
        return (
            f"ProximitySweep(distance={self.distance}, global_max={self.global_max}, "
            f"queue={sorted(c for _, _, c in self._heap)})"
        )


def exhaustive_match(
    distance: int,
    terms: Sequence[str],
    term_offsets: Iterable[Optional[Iterable[int]]],
    allow_shared_occurrences: bool = False,
) -> bool:
    """
    Brute-force answer to the same question as ProximitySweep.

    Tries every combination of occurrences, so only suitable for small
    inputs. Follows the same argument rules as ProximitySweep.
    """
    distance = check_distance(distance)
    terms = list(terms)
    term_offsets = list(term_offsets)
    if not terms or not _check_counts(terms, term_offsets):
        return False

    needed = term_multiplicity(terms, allow_shared_occurrences)
    canonical: Dict[str, List[int]] = {}
    for term, offsets in zip(terms, term_offsets):
        if offsets is None:
            return False
        if term not in canonical:
            canonical[term] = as_offset_array(offsets).tolist()

    choices = []
    for term, offsets in canonical.items():
        blocks = list(combinations(offsets, needed[term]))
        if not blocks:
            return False
        choices.append(blocks)

    for pick in product(*choices):
        chosen = [o for block in pick for o in block]
        if max(chosen) - min(chosen) <= distance:
            return True
    return False
