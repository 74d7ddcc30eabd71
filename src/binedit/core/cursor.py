"""
Cursor, nibble entry and selection handling for the hex editor.

The cursor is the only component that issues edits against the buffer. Every
keystroke is recorded in the history before it is applied, so a single undo
reverts exactly one nibble (hex mode) or one character (ascii mode).
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .buffer import Buffer
from .exceptions import ReadOnlyError
from .history import EditHistory
from ..utils.hex_utils import parse_hex_digit

logger = logging.getLogger(__name__)


class EditMode(enum.Enum):
    HEX = 'hex'
    ASCII = 'ascii'


class NibbleParity(enum.Enum):
    """Which half of the current byte the next hex digit replaces."""
    HIGH_PENDING = 'high'
    LOW_PENDING = 'low'


@dataclass(frozen=True)
class Selection:
    """Inclusive offset range."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, offset: object) -> bool:
        return isinstance(offset, int) and self.start <= offset <= self.end


class EditCursor:
    """Tracks the edit position, nibble parity, edit mode and selection."""

    def __init__(self, buffer: Buffer, history: EditHistory, read_only: bool = False) -> None:
        self.buffer = buffer
        self.history = history
        self.read_only = read_only
        self.position = 0
        self.parity = NibbleParity.HIGH_PENDING
        self.mode = EditMode.HEX
        self.selection: Optional[Selection] = None

    def reset(self) -> None:
        """Return to the state of a freshly loaded buffer. The edit mode is kept."""

        self.position = 0
        self.parity = NibbleParity.HIGH_PENDING
        self.selection = None

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self.buffer) - 1))

    def move_cursor(self, delta: int) -> int:
        """Move by delta bytes, clamped to the buffer. Starts a fresh byte for nibble entry."""

        self.position = self._clamp(self.position + delta)
        self.parity = NibbleParity.HIGH_PENDING

        return self.position

    def move_to(self, offset: int) -> int:
        """Move to an absolute offset, clamped to the buffer."""

        return self.move_cursor(offset - self.position)

    def set_mode(self, mode: EditMode) -> None:
        self.mode = mode
        self.parity = NibbleParity.HIGH_PENDING

    def toggle_mode(self) -> EditMode:
        """Switch between hex and ascii entry."""

        self.set_mode(EditMode.ASCII if self.mode is EditMode.HEX else EditMode.HEX)
        return self.mode

    def _apply(self, new_value: int) -> None:
        old_value = self.buffer.get_byte(self.position)
        self.history.record(self.position, old_value, new_value)
        self.buffer.set_byte(self.position, new_value)

    def _check_writable(self) -> None:
        if self.read_only:
            raise ReadOnlyError("Buffer is read-only")

    def edit_digit(self, digit: int) -> int:
        """
        Enter one hex digit at the cursor.

        The first digit replaces the high nibble and keeps the cursor in place;
        the second replaces the low nibble and advances the cursor.

        Returns:
            int: The new value of the edited byte
        """

        self._check_writable()

        if self.mode is not EditMode.HEX:
            raise ValueError("Hex digits can only be entered in hex mode")

        if not 0 <= digit <= 0xF:
            raise ValueError(f"Hex digit must be between 0 and 15, got {digit}")

        current = self.buffer.get_byte(self.position)

        if self.parity is NibbleParity.HIGH_PENDING:
            new_value = (digit << 4) | (current & 0x0F)
            self._apply(new_value)
            self.parity = NibbleParity.LOW_PENDING
            return new_value

        new_value = (current & 0xF0) | digit
        self._apply(new_value)
        self.move_cursor(1)

        return new_value

    def edit_char(self, char: str) -> int:
        """Write a character's code at the cursor and advance."""

        self._check_writable()

        if self.mode is not EditMode.ASCII:
            raise ValueError("Characters can only be entered in ascii mode")

        if len(char) != 1:
            raise ValueError("Expected a single character")

        new_value = ord(char) & 0xFF
        self._apply(new_value)
        self.move_cursor(1)

        return new_value

    def edit_key(self, key: str) -> bool:
        """
        Feed a single keystroke to the active edit mode.

        Returns:
            bool: True if the key was consumed as an edit
        """

        if self.mode is EditMode.HEX:
            digit = parse_hex_digit(key)
            if digit is None:
                return False

            self.edit_digit(digit)
            return True

        if len(key) != 1 or ord(key) > 0xFF:
            return False

        self.edit_char(key)
        return True

    def select(self, start: int, end: int) -> Optional[Selection]:
        """Set an explicit selection. Bounds are normalized and clamped to the buffer."""

        if not len(self.buffer):
            self.selection = None
            return None

        start, end = sorted((self._clamp(start), self._clamp(end)))
        self.selection = Selection(start, end)

        return self.selection

    def clear_selection(self) -> None:
        self.selection = None

    def selection_length(self) -> Optional[int]:
        if self.selection is None:
            return None

        return len(self.selection)
