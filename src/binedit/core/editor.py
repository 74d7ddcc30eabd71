"""
Editing session combining buffer, history, cursor and search.

A HexEditor is an explicitly constructed, caller-owned object. Several can
coexist; none of them share state. I/O stays outside the session: bytes come
in through load/load_async and leave through a caller supplied sink on save.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Final, Optional, Tuple

from .buffer import Buffer
from .cursor import EditCursor, EditMode, NibbleParity, Selection
from .history import EditHistory, UndoEntry
from ..utils.hex_utils import format_byte, format_offset, format_size, parse_offset
from ..utils.search import SearchEngine, SearchMode, SearchResult, build_needle

logger = logging.getLogger(__name__)

DEFAULT_BYTES_PER_ROW: Final[int] = 16
DEFAULT_ROWS_PER_PAGE: Final[int] = 32
UNTITLED_NAME: Final[str] = "untitled"


@dataclass(frozen=True)
class EditorOptions:
    """Layout and access options for an editing session."""
    bytes_per_row: int = DEFAULT_BYTES_PER_ROW
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    read_only: bool = False

    def __post_init__(self) -> None:
        if self.bytes_per_row <= 0:
            raise ValueError("bytes_per_row must be positive")
        if self.rows_per_page <= 0:
            raise ValueError("rows_per_page must be positive")

    @property
    def bytes_per_page(self) -> int:
        return self.bytes_per_row * self.rows_per_page


@dataclass(frozen=True)
class EditorStatus:
    """Snapshot of the information a status bar shows."""
    name: str
    length: int
    size: str
    percent: int
    modified_count: int
    cursor_offset: str
    cursor_value: Optional[str]
    selection_length: Optional[int]


class HexEditor:
    """Binary editing session."""

    def __init__(self, options: Optional[EditorOptions] = None) -> None:
        self.options = options or EditorOptions()
        self.buffer = Buffer()
        self.history = EditHistory(self.buffer)
        self.cursor = EditCursor(self.buffer, self.history, read_only=self.options.read_only)
        self.search_engine = SearchEngine(self.buffer)
        self.name = UNTITLED_NAME
        self.offset = 0
        self._load_generation = 0

    def load(self, data: bytes, name: Optional[str] = None) -> None:
        """Replace the session contents with new bytes."""

        self._load_generation += 1
        self._apply_load(data, name)

    def _apply_load(self, data: bytes, name: Optional[str]) -> None:
        self.buffer.load(data)
        self.history.clear()
        self.cursor.reset()
        self.offset = 0
        self.name = name or UNTITLED_NAME

        logger.info("Loaded %s (%s)", self.name, format_size(len(self.buffer)))

    async def load_async(self, fetch: Callable[[], Awaitable[bytes]],
                         name: Optional[str] = None) -> bool:
        """
        Load bytes produced by an asynchronous fetch.

        A load started later supersedes this one: if another load begins while
        fetch is pending, the bytes returned here are discarded. If fetch raises,
        the exception propagates and the current contents are left untouched.

        Returns:
            bool: True if the fetched bytes were applied
        """

        self._load_generation += 1
        generation = self._load_generation

        data = await fetch()

        if generation != self._load_generation:
            logger.info("Discarding stale load of %s", name or UNTITLED_NAME)
            return False

        self._apply_load(data, name)
        return True

    def save(self, sink: Callable[[bytes], object]) -> Optional[bytes]:
        """
        Hand the edited bytes to a sink and commit them.

        Nothing happens if there are no edits. If the sink raises, the edits and
        history are kept and the exception propagates.

        Returns:
            Optional[bytes]: The saved bytes, or None if there was nothing to save
        """

        if not self.buffer.modified_count():
            return None

        data = self.buffer.materialize()
        sink(data)
        self._commit(data)

        return data

    async def save_async(self, sink: Callable[[bytes], Awaitable[object]]) -> Optional[bytes]:
        """
        Like save, awaiting an asynchronous sink before committing.

        Edits made while the sink is pending stay pending (and undoable) on
        top of the saved bytes. If a load happens while the sink is pending,
        the saved bytes belong to the replaced file and nothing is committed.
        """

        if not self.buffer.modified_count():
            return None

        generation = self._load_generation
        version = self.history.version
        name = self.name

        data = self.buffer.materialize()
        await sink(data)

        if generation != self._load_generation:
            logger.info("Saved %s but not committing: a newer load replaced it", name)
            return data

        if version != self.history.version:
            self.buffer.rebase(data)
            logger.info("Saved %s (%s); keeping %d newer edits",
                        name, format_size(len(data)), self.buffer.modified_count())
            return data

        self._commit(data)

        return data

    def _commit(self, data: bytes) -> None:
        self.buffer.commit(data)
        self.history.clear()

        logger.info("Saved %s (%s)", self.name, format_size(len(data)))

    # Editing

    def edit_digit(self, digit: int) -> int:
        value = self.cursor.edit_digit(digit)
        self.scroll_to_cursor()
        return value

    def edit_char(self, char: str) -> int:
        value = self.cursor.edit_char(char)
        self.scroll_to_cursor()
        return value

    def edit_key(self, key: str) -> bool:
        consumed = self.cursor.edit_key(key)
        if consumed:
            self.scroll_to_cursor()
        return consumed

    def undo(self) -> Optional[UndoEntry]:
        return self.history.undo()

    def redo(self) -> Optional[UndoEntry]:
        return self.history.redo()

    def toggle_mode(self) -> EditMode:
        return self.cursor.toggle_mode()

    # Navigation

    @property
    def position(self) -> int:
        return self.cursor.position

    @property
    def parity(self) -> NibbleParity:
        return self.cursor.parity

    @property
    def selection(self) -> Optional[Selection]:
        return self.cursor.selection

    def move_cursor(self, delta: int) -> int:
        """Move the cursor by delta bytes, keeping it in view."""

        self.cursor.move_cursor(delta)
        self._follow_cursor()
        return self.cursor.position

    def move_rows(self, rows: int) -> int:
        return self.move_cursor(rows * self.options.bytes_per_row)

    def move_row_start(self) -> int:
        row_start = (self.cursor.position // self.options.bytes_per_row) * self.options.bytes_per_row
        return self.move_cursor(row_start - self.cursor.position)

    def move_row_end(self) -> int:
        row_start = (self.cursor.position // self.options.bytes_per_row) * self.options.bytes_per_row
        return self.move_cursor(row_start + self.options.bytes_per_row - 1 - self.cursor.position)

    def move_to_start(self) -> int:
        self.cursor.move_to(0)
        self.offset = 0
        return self.cursor.position

    def move_to_end(self) -> int:
        self.cursor.move_to(len(self.buffer) - 1)
        self.offset = self._row_start(max(0, len(self.buffer) - 1))
        return self.cursor.position

    def go_to(self, text: str) -> bool:
        """
        Move the cursor to an offset typed by the user.

        Accepts decimal or 0x-prefixed hex. Invalid or out of range input
        leaves the session unchanged.
        """

        offset = parse_offset(text)
        if offset is None or offset >= len(self.buffer):
            logger.warning("Ignoring invalid offset %r", text)
            return False

        self.cursor.move_to(offset)
        self.scroll_to_cursor()
        return True

    def select(self, start: int, end: int) -> Optional[Selection]:
        return self.cursor.select(start, end)

    def clear_selection(self) -> None:
        self.cursor.clear_selection()

    # Viewport

    def _row_start(self, offset: int) -> int:
        return (offset // self.options.bytes_per_row) * self.options.bytes_per_row

    def _follow_cursor(self) -> None:
        """Scroll by the minimum amount that keeps the cursor on the page."""

        page = self.options.bytes_per_page
        position = self.cursor.position

        if position < self.offset:
            self.offset = self._row_start(position)
        elif position >= self.offset + page:
            self.offset = self._row_start(position - page + self.options.bytes_per_row)

    def scroll_to_cursor(self) -> None:
        """Put the cursor's row at the top of the page if it is not visible."""

        page = self.options.bytes_per_page
        position = self.cursor.position

        if position < self.offset or position >= self.offset + page:
            self.offset = self._row_start(position)

    def scroll_page(self, direction: int) -> int:
        """
        Scroll by whole pages and pull the cursor into the new page.

        Returns:
            int: The new viewport offset
        """

        page = self.options.bytes_per_page
        max_offset = max(0, len(self.buffer) - page)
        self.offset = max(0, min(self.offset + direction * page, max_offset))

        position = max(self.offset, min(self.cursor.position, self.offset + page - 1))
        self.cursor.move_to(position)

        return self.offset

    def visible_range(self) -> Tuple[int, int]:
        """Half-open range of offsets shown on the current page."""

        end = min(self.offset + self.options.bytes_per_page, len(self.buffer))
        return self.offset, max(self.offset, end)

    # Search

    def _select_match(self, result: Optional[SearchResult]) -> Optional[SearchResult]:
        if result is None:
            return None

        self.cursor.move_to(result.position)
        self.cursor.select(result.position, result.end)
        self.scroll_to_cursor()

        return result

    def search_next(self, pattern: str, mode: SearchMode = SearchMode.TEXT) -> Optional[SearchResult]:
        """Find the next match after the cursor and select it."""

        needle = build_needle(pattern, mode)
        result = self.search_engine.find_forward(needle, self.cursor.position + 1)
        return self._select_match(result)

    def search_previous(self, pattern: str, mode: SearchMode = SearchMode.TEXT) -> Optional[SearchResult]:
        """Find the nearest match before the cursor and select it."""

        needle = build_needle(pattern, mode)
        start = self.cursor.position - 1
        if start < 0:
            return None

        result = self.search_engine.find_backward(needle, start)
        return self._select_match(result)

    # Status

    def status(self) -> EditorStatus:
        length = len(self.buffer)
        percent = round(self.offset / length * 100) if length else 0
        value = format_byte(self.buffer.get_byte(self.cursor.position)) if length else None

        return EditorStatus(
            name=self.name,
            length=length,
            size=format_size(length),
            percent=percent,
            modified_count=self.buffer.modified_count(),
            cursor_offset=format_offset(self.cursor.position),
            cursor_value=value,
            selection_length=self.cursor.selection_length(),
        )
