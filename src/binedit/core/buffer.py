"""
Buffer module for overlay-based binary data editing.

The buffer keeps the loaded bytes immutable and records edits in a sparse
overlay keyed by offset. Reads combine both, so the original content is
always available for comparison until the buffer is committed.
"""

import logging
from typing import Dict, List, Optional

from .exceptions import OffsetOutOfRangeError

logger = logging.getLogger(__name__)


class Buffer:
    """Sparse overlay view over an immutable byte sequence."""

    def __init__(self, initial_data: bytes = b'') -> None:
        self.original = bytes(initial_data)
        self.overlay: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self.original)

    @property
    def length(self) -> int:
        """Number of bytes in the buffer. Fixed for the life of a load."""
        return len(self.original)

    def load(self, data: bytes) -> None:
        """Replace the original bytes and drop every pending edit."""

        self.original = bytes(data)
        self.overlay = {}
        logger.debug("Buffer loaded with %d bytes", len(self.original))

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset < len(self.original):
            raise OffsetOutOfRangeError(offset, len(self.original))

    def get_byte(self, offset: int) -> int:
        """Get the effective byte at an offset."""

        self._check_offset(offset)
        value = self.overlay.get(offset)
        if value is None:
            return self.original[offset]

        return value

    def original_byte(self, offset: int) -> int:
        """Get the byte at an offset as it was loaded, ignoring edits."""

        self._check_offset(offset)
        return self.original[offset]

    def set_byte(self, offset: int, value: int) -> None:
        """
        Store a replacement byte in the overlay.

        The value is masked to 0-255. The entry is written even when it equals
        the original byte; use revert_byte to restore without leaving an entry.
        """

        self._check_offset(offset)
        self.overlay[offset] = value & 0xFF

    def revert_byte(self, offset: int, value: int) -> None:
        """Restore a previous value, removing the overlay entry if it matches the original."""

        self._check_offset(offset)
        value &= 0xFF

        if value == self.original[offset]:
            self.overlay.pop(offset, None)
            return

        self.overlay[offset] = value

    def is_modified(self, offset: int) -> bool:
        """Check whether an offset has an overlay entry."""
        return offset in self.overlay

    def modified_count(self) -> int:
        """Number of offsets with pending edits."""
        return len(self.overlay)

    def modified_offsets(self) -> List[int]:
        """Sorted list of offsets with pending edits."""
        return sorted(self.overlay)

    def materialize(self) -> bytes:
        """Build the complete effective byte sequence without changing state."""

        data = bytearray(self.original)
        for offset, value in self.overlay.items():
            data[offset] = value

        return bytes(data)

    def commit(self, data: Optional[bytes] = None) -> None:
        """
        Compact the overlay into the original bytes.

        Args:
            data: Previously materialized bytes to adopt. If None, the buffer is
                  materialized first.
        """

        if data is None:
            data = self.materialize()

        if len(data) != len(self.original):
            raise ValueError("Committed data must match the buffer length")

        self.original = bytes(data)
        self.overlay = {}

    def get_range(self, start: int, length: int) -> bytes:
        """Get up to `length` effective bytes starting at `start`."""

        start = max(0, start)
        end = min(start + length, len(self.original))
        if start >= end:
            return b''

        data = bytearray(self.original[start:end])
        for offset, value in self.overlay.items():
            if start <= offset < end:
                data[offset - start] = value

        return bytes(data)

    def rebase(self, data: bytes) -> None:
        """
        Adopt saved bytes as the original while keeping edits made since.

        Overlay entries that equal the new original byte are dropped.
        """

        if len(data) != len(self.original):
            raise ValueError("Rebased data must match the buffer length")

        self.original = bytes(data)
        self.overlay = {
            offset: value for offset, value in self.overlay.items() if value != data[offset]
        }
