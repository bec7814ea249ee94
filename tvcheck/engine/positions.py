"""
Offset and line/column conversion for the tvcheck engine.

Every rule, the serializer and the edit applier resolve positions through
``PositionIndex`` so that reported ranges line up with the exact text
snapshot that was analyzed. Lines and columns are 0-based.
"""

import re
from bisect import bisect_right
from itertools import accumulate
from typing import List, Optional, Tuple

LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PositionIndex:
    """Line table for one text snapshot."""

    def __init__(self, text: str):
        self.text = text
        # Lines end at "\r\n", "\r" or "\n"
        self._line_starts: List[int] = [0]
        self._line_ends: List[int] = []
        for match in LINE_BREAK.finditer(text):
            self._line_ends.append(match.start())
            self._line_starts.append(match.end())
        self._line_ends.append(len(text))
        # Byte start of each character; only needed once text leaves ASCII
        self._byte_starts: Optional[List[int]] = None
        if not text.isascii():
            widths = [len(char.encode("utf-8")) for char in text]
            self._byte_starts = [0] + list(accumulate(widths))

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self.text)))

    def offset_to_line_column(self, offset: int) -> Tuple[int, int]:
        """Convert a character offset to (line, column), both 0-based."""
        offset = self._clamp(offset)
        line = bisect_right(self._line_starts, offset) - 1
        return line, offset - self._line_starts[line]

    def line_column_to_offset(self, line: int, column: int) -> int:
        """Convert (line, column), both 0-based, to a character offset."""
        if line < 0:
            return 0
        if line >= len(self._line_starts):
            return len(self.text)
        line_start = self._line_starts[line]
        line_end = self._line_ends[line]
        return line_start + max(0, min(column, line_end - line_start))

    def byte_to_offset(self, byte: int) -> int:
        """Map a UTF-8 byte offset (as the parser reports it) to a character offset."""
        if self._byte_starts is None:
            return self._clamp(byte)
        if byte <= 0:
            return 0
        if byte >= self._byte_starts[-1]:
            return len(self.text)
        return bisect_right(self._byte_starts, byte) - 1

    def offset_to_byte(self, offset: int) -> int:
        offset = self._clamp(offset)
        if self._byte_starts is None:
            return offset
        return self._byte_starts[offset]


def offset_to_line_column(text: str, offset: int) -> Tuple[int, int]:
    """Convert ``offset`` in ``text`` to a 0-based (line, column) pair."""
    return PositionIndex(text).offset_to_line_column(offset)
