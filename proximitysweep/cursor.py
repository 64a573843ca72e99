"""
OffsetCursor — forward-only cursor over one term's occurrence positions
"""

from typing import Iterable, Optional

import numpy as np


def as_offset_array(offsets: Iterable[int]) -> np.ndarray:
    """
    Private, read-only, ascending int64 copy of an offset sequence.

    Raises ValueError for anything that is not a flat sequence of
    non-negative integers.
    """
    arr = np.asarray(list(offsets))
    if arr.ndim != 1:
        raise ValueError(f"Offsets must be one-dimensional, got shape {arr.shape}.")
    if arr.size == 0:
        out = np.zeros(0, dtype=np.int64)
        out.flags.writeable = False
        return out
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Offsets must be integers, got dtype {arr.dtype}.")
    if arr.min() < 0:
        raise ValueError(f"Offsets must be non-negative, got {int(arr.min())}.")
    out = np.sort(arr.astype(np.int64))
    out.flags.writeable = False
    return out


class OffsetCursor:
    """
    Cursor over the sorted occurrence positions of a single term.

    The cursor never mutates the sequence it reads. Advancing moves an
    index forward; positions already passed are gone for this cursor.

    Parameters
    ----------
    term : str
    offsets : iterable of int
        Positions of the term in one field. Copied and sorted.
    multiplicity : int
        How many distinct occurrences the cursor holds at once. A term
        repeated twice in a query needs two different positions, so its
        cursor holds a block of two consecutive occurrences: ``current``
        is the low end of the block and ``current_high`` the high end.

    Example
    -------
    >>> c = OffsetCursor("fox", [3, 8])
    >>> c.current, c.series_max
    (3, 8)
    >>> c.advance()
    8
    >>> c.advance() is None
    True
    """

    __slots__ = ("term", "multiplicity", "_offsets", "_pos")

    def __init__(self, term: str, offsets: Iterable[int], multiplicity: int = 1) -> None:
        if multiplicity < 1:
            raise ValueError(f"multiplicity must be >= 1, got {multiplicity}.")
        self.term = term
        self.multiplicity = multiplicity
        self._offsets = as_offset_array(offsets)
        self._pos = 0

    @property
    def series_max(self) -> Optional[int]:
        """Largest offset of the original sequence; fixed for the cursor's life."""
        if self._offsets.size == 0:
            return None
        return int(self._offsets[-1])

    @property
    def exhausted(self) -> bool:
        return self._pos + self.multiplicity > self._offsets.size

    @property
    def current(self) -> Optional[int]:
        if self.exhausted:
            return None
        return int(self._offsets[self._pos])

    @property
    def current_high(self) -> Optional[int]:
        if self.exhausted:
            return None
        return int(self._offsets[self._pos + self.multiplicity - 1])

    @property
    def remaining(self) -> int:
        return max(0, int(self._offsets.size) - self._pos)

    def advance(self) -> Optional[int]:
        if not self.exhausted:
            self._pos += 1
        return self.current

    def __lt__(self, other: "OffsetCursor") -> bool:
        # Exhausted cursors sort last.
        a, b = self.current, other.current
        if a is None or b is None:
            return a is not None and b is None
        return (a, self.term) < (b, other.term)

    def __len__(self) -> int:
        return int(self._offsets.size)

    def __repr__(self) -> str:
        return (
            f"OffsetCursor({self.term!r}, current={self.current}, "
            f"series_max={self.series_max}, remaining={self.remaining})"
        )
