"""
Exception types raised by the binary editing engine.
"""


class HexEditError(Exception):
    """Base class for all editing engine errors."""


class OffsetOutOfRangeError(HexEditError, IndexError):
    """Raised when an offset falls outside the buffer."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(f"Offset {offset} out of range for buffer of length {length}")
        self.offset = offset
        self.length = length


class HexParseError(HexEditError, ValueError):
    """Raised when a hex string cannot be parsed into bytes."""


class EmptyPatternError(HexEditError, ValueError):
    """Raised when a search is requested with an empty needle."""


class ReadOnlyError(HexEditError):
    """Raised when an edit is attempted on a read-only session."""


class PatternEncodingError(HexEditError, ValueError):
    """Raised when a text pattern cannot be encoded as UTF-8."""
