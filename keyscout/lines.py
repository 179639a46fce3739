# keyscout/lines.py
"""Offset to line-number mapping over precomputed line starts."""
from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List

__all__ = ("LineMapper", "map_lines")


class LineMapper:
    """
    Maps character offsets of *text* to 1-based line numbers.

    A line ends at ``\\n`` (so ``\\r\\n`` counts once); a lone ``\\r`` is not
    a boundary. Lookups are a binary search over the line starts.
    """

    def __init__(self, text: str) -> None:
        starts = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._starts: List[int] = starts
        self._length = len(text)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def line_of(self, offset: int) -> int:
        if offset <= 0:
            return 1
        return bisect_right(self._starts, min(offset, self._length))


def map_lines(text: str, offsets: Iterable[int]) -> List[int]:
    """Return the line number of every offset in *offsets*."""
    mapper = LineMapper(text)
    return [mapper.line_of(o) for o in offsets]
