"""
Byte-pattern search over the effective contents of a buffer.
"""

import enum
import logging
from typing import List, Optional

from ..core.buffer import Buffer
from ..core.exceptions import EmptyPatternError, PatternEncodingError
from .hex_utils import parse_hex_string

logger = logging.getLogger(__name__)


class SearchMode(enum.Enum):
    """How a search pattern string is turned into a needle."""
    TEXT = 'text'
    HEX = 'hex'


class SearchResult:
    """Represents a search result with position and match information."""

    def __init__(self, position: int, length: int, match: bytes):
        self.position = position
        self.length = length
        self.match = match

    @property
    def end(self) -> int:
        """Offset of the last matched byte (inclusive)."""
        return self.position + self.length - 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return (self.position, self.length, self.match) == (other.position, other.length, other.match)

    def __repr__(self) -> str:
        return f"SearchResult(position={self.position}, length={self.length}, match={self.match!r})"


def build_needle(pattern: str, mode: SearchMode) -> bytes:
    """
    Encode a search pattern as bytes.

    Args:
        pattern (str): Text to encode as UTF-8, or hex digits (e.g. 'FF 00 A3')
        mode (SearchMode): How to interpret the pattern

    Raises:
        HexParseError: If a hex pattern is malformed
        PatternEncodingError: If text cannot be encoded as UTF-8
        EmptyPatternError: If the pattern yields no bytes
    """

    if mode is SearchMode.HEX:
        needle = parse_hex_string(pattern)
    elif mode is SearchMode.TEXT:
        try:
            needle = pattern.encode('utf-8')
        except UnicodeEncodeError as e:
            raise PatternEncodingError(f"Search text {pattern!r} is not valid UTF-8 text") from e
    else:
        raise ValueError(f"Unknown search mode: {mode!r}")

    if not needle:
        raise EmptyPatternError("Search pattern is empty")

    return needle


class SearchEngine:
    """Finds byte sequences in a buffer, including unsaved edits. Never wraps around."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer

    def _result(self, data: bytes, pos: int, needle: bytes) -> Optional[SearchResult]:
        if pos < 0:
            logger.debug("Pattern %s not found", needle.hex())
            return None

        logger.debug("Pattern %s found at %d", needle.hex(), pos)
        return SearchResult(pos, len(needle), data[pos:pos + len(needle)])

    def find_forward(self, needle: bytes, from_offset: int = 0) -> Optional[SearchResult]:
        """
        Find the first match starting at or after from_offset.

        Returns:
            Optional[SearchResult]: The match, or None if the needle does not occur
        """

        if not needle:
            raise EmptyPatternError("Search pattern is empty")

        data = self.buffer.materialize()
        pos = data.find(needle, max(0, from_offset))

        return self._result(data, pos, needle)

    def find_backward(self, needle: bytes, from_offset: Optional[int] = None) -> Optional[SearchResult]:
        """
        Find the nearest match starting at or before from_offset.

        Args:
            needle (bytes): Bytes to look for
            from_offset (int): Highest start offset to consider. Defaults to the
                               last offset where the needle still fits.
        """

        if not needle:
            raise EmptyPatternError("Search pattern is empty")

        data = self.buffer.materialize()
        last_start = len(data) - len(needle)

        if from_offset is None or from_offset > last_start:
            from_offset = last_start

        if from_offset < 0:
            return self._result(data, -1, needle)

        pos = data.rfind(needle, 0, from_offset + len(needle))

        return self._result(data, pos, needle)

    def find_next(self, pattern: str, mode: SearchMode = SearchMode.TEXT,
                  start_pos: int = 0) -> Optional[SearchResult]:
        """Encode a pattern and search forward from start_pos."""

        needle = build_needle(pattern, mode)

        return self.find_forward(needle, start_pos)

    def find_previous(self, pattern: str, mode: SearchMode = SearchMode.TEXT,
                      start_pos: Optional[int] = None) -> Optional[SearchResult]:
        """Encode a pattern and search backward from start_pos."""

        needle = build_needle(pattern, mode)

        return self.find_backward(needle, start_pos)

    def find_all(self, pattern: str, mode: SearchMode = SearchMode.TEXT,
                 start_pos: int = 0) -> List[SearchResult]:
        """
        Find all occurrences of a pattern, overlapping matches included.

        Returns:
            List[SearchResult]: All search results found, in ascending order
        """

        needle = build_needle(pattern, mode)

        data = self.buffer.materialize()
        results = []
        pos = data.find(needle, max(0, start_pos))

        while pos >= 0:
            results.append(SearchResult(pos, len(needle), data[pos:pos + len(needle)]))
            pos = data.find(needle, pos + 1)

        return results
