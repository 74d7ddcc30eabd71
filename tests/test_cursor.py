import pytest

from binedit import (
    Buffer,
    EditCursor,
    EditHistory,
    EditMode,
    NibbleParity,
    OffsetOutOfRangeError,
    ReadOnlyError,
    Selection,
)


def make_cursor(data: bytes = b"\x00\x01\x02\x03", read_only: bool = False) -> EditCursor:
    buf = Buffer(data)
    return EditCursor(buf, EditHistory(buf), read_only=read_only)


def test_nibble_entry_scenario() -> None:
    cursor = make_cursor()
    cursor.move_cursor(2)
    assert cursor.parity is NibbleParity.HIGH_PENDING

    assert cursor.edit_digit(0xA) == 0xA2
    assert cursor.buffer.get_byte(2) == 0xA2
    assert cursor.position == 2
    assert cursor.parity is NibbleParity.LOW_PENDING

    assert cursor.edit_digit(0x5) == 0xA5
    assert cursor.buffer.get_byte(2) == 0xA5
    assert cursor.position == 3
    assert cursor.parity is NibbleParity.HIGH_PENDING


def test_each_nibble_is_undone_separately() -> None:
    cursor = make_cursor()
    cursor.move_to(2)
    cursor.edit_digit(0xA)
    cursor.edit_digit(0x5)
    buf, history = cursor.buffer, cursor.history

    history.undo()
    assert buf.get_byte(2) == 0xA2
    assert buf.is_modified(2)

    history.undo()
    assert buf.get_byte(2) == 0x02
    assert not buf.is_modified(2)

    history.redo()
    history.redo()
    assert buf.get_byte(2) == 0xA5


def test_navigation_resets_parity() -> None:
    cursor = make_cursor()
    cursor.edit_digit(0xF)
    assert cursor.parity is NibbleParity.LOW_PENDING

    cursor.move_cursor(0)
    assert cursor.parity is NibbleParity.HIGH_PENDING

    cursor.edit_digit(0x1)
    assert cursor.buffer.get_byte(0) == 0x10


def test_move_cursor_clamps() -> None:
    cursor = make_cursor()

    assert cursor.move_cursor(-5) == 0
    assert cursor.move_cursor(100) == 3
    assert cursor.move_to(1) == 1


def test_low_nibble_on_last_byte_stays_in_bounds() -> None:
    cursor = make_cursor()
    cursor.move_to(3)
    cursor.edit_digit(0x1)
    cursor.edit_digit(0x2)

    assert cursor.buffer.get_byte(3) == 0x12
    assert cursor.position == 3
    assert cursor.parity is NibbleParity.HIGH_PENDING


def test_edit_char_writes_code_and_advances() -> None:
    cursor = make_cursor()
    cursor.set_mode(EditMode.ASCII)

    assert cursor.edit_char("A") == 0x41
    assert cursor.edit_char("B") == 0x42

    assert cursor.buffer.materialize() == b"AB\x02\x03"
    assert cursor.position == 2

    cursor.history.undo()
    assert cursor.buffer.get_byte(1) == 0x01
    assert cursor.buffer.get_byte(0) == 0x41


def test_mode_mismatch_raises() -> None:
    cursor = make_cursor()

    with pytest.raises(ValueError):
        cursor.edit_char("A")

    cursor.toggle_mode()
    with pytest.raises(ValueError):
        cursor.edit_digit(1)


def test_invalid_digit_raises() -> None:
    with pytest.raises(ValueError):
        make_cursor().edit_digit(16)


def test_edit_key_dispatches_by_mode() -> None:
    cursor = make_cursor()

    assert cursor.edit_key("f")
    assert cursor.edit_key("e")
    assert not cursor.edit_key("z")
    assert cursor.buffer.get_byte(0) == 0xFE

    cursor.toggle_mode()
    assert cursor.mode is EditMode.ASCII
    assert cursor.edit_key("z")
    assert not cursor.edit_key("€")
    assert cursor.buffer.get_byte(1) == ord("z")


def test_read_only_refuses_edits() -> None:
    cursor = make_cursor(read_only=True)

    with pytest.raises(ReadOnlyError):
        cursor.edit_digit(1)
    assert cursor.buffer.modified_count() == 0
    assert not cursor.history.can_undo()


def test_empty_buffer() -> None:
    cursor = make_cursor(b"")

    assert cursor.move_cursor(3) == 0
    with pytest.raises(OffsetOutOfRangeError):
        cursor.edit_digit(1)
    assert cursor.select(0, 4) is None


def test_selection_is_explicit() -> None:
    cursor = make_cursor()

    assert cursor.select(3, 1) == Selection(1, 3)
    assert cursor.selection_length() == 3
    assert 2 in cursor.selection

    cursor.move_cursor(1)
    assert cursor.selection == Selection(1, 3)

    cursor.clear_selection()
    assert cursor.selection is None
    assert cursor.selection_length() is None


def test_selection_is_clamped() -> None:
    cursor = make_cursor()

    assert cursor.select(-3, 40) == Selection(0, 3)
