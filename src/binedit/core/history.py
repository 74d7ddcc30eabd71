"""
Undo/redo history for single-byte edits.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .buffer import Buffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UndoEntry:
    """Represents one recorded byte substitution."""
    offset: int
    old_value: int
    new_value: int


class EditHistory:
    """LIFO undo/redo log applied against a Buffer. Stacks are unbounded."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer
        self.undo_stack: Deque[UndoEntry] = deque()
        self.redo_stack: Deque[UndoEntry] = deque()
        # Bumped by every change to buffer contents made through the history.
        self.version = 0

    def record(self, offset: int, old_value: int, new_value: int) -> UndoEntry:
        """Push an edit onto the undo stack and invalidate the redo stack."""

        entry = UndoEntry(offset, old_value & 0xFF, new_value & 0xFF)
        self.undo_stack.append(entry)
        self.redo_stack.clear()
        self.version += 1

        logger.debug("Recorded edit at %d: %02X -> %02X", offset, entry.old_value, entry.new_value)
        return entry

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo(self) -> Optional[UndoEntry]:
        """Undo the last edit. Returns None if there is nothing to undo."""

        if not self.undo_stack:
            logger.debug("Nothing to undo")
            return None

        entry = self.undo_stack.pop()
        self.redo_stack.append(entry)

        # Drops the overlay entry when the old value is the loaded byte.
        self.buffer.revert_byte(entry.offset, entry.old_value)
        self.version += 1

        return entry

    def redo(self) -> Optional[UndoEntry]:
        """Redo the last undone edit. Returns None if there is nothing to redo."""

        if not self.redo_stack:
            logger.debug("Nothing to redo")
            return None

        entry = self.redo_stack.pop()
        self.undo_stack.append(entry)
        self.buffer.set_byte(entry.offset, entry.new_value)
        self.version += 1

        return entry

    def clear(self) -> None:
        """Discard both stacks."""

        self.undo_stack.clear()
        self.redo_stack.clear()
