from binedit import Buffer, EditHistory, UndoEntry


def make_history(data: bytes = b"\x00\x01\x02\x03") -> EditHistory:
    return EditHistory(Buffer(data))


def apply(history: EditHistory, offset: int, value: int) -> None:
    history.record(offset, history.buffer.get_byte(offset), value)
    history.buffer.set_byte(offset, value)


def test_undo_redo_round_trip() -> None:
    history = make_history()
    buf = history.buffer

    apply(history, 1, 0xFF)
    assert buf.get_byte(1) == 0xFF
    assert buf.modified_count() == 1

    assert history.undo() == UndoEntry(1, 0x01, 0xFF)
    assert buf.get_byte(1) == 0x01
    assert buf.modified_count() == 0

    assert history.redo() == UndoEntry(1, 0x01, 0xFF)
    assert buf.get_byte(1) == 0xFF
    assert buf.modified_count() == 1


def test_empty_stacks_report_nothing() -> None:
    history = make_history()

    assert history.undo() is None
    assert history.redo() is None
    assert not history.can_undo()
    assert not history.can_redo()


def test_undo_is_lifo() -> None:
    history = make_history()
    buf = history.buffer

    apply(history, 0, 0x10)
    apply(history, 0, 0x20)

    history.undo()
    assert buf.get_byte(0) == 0x10
    assert buf.is_modified(0)

    history.undo()
    assert buf.get_byte(0) == 0x00
    assert not buf.is_modified(0)


def test_record_clears_redo() -> None:
    history = make_history()

    apply(history, 2, 0x44)
    history.undo()
    assert history.can_redo()

    apply(history, 3, 0x55)
    assert not history.can_redo()
    assert history.redo() is None


def test_redo_writes_overlay_even_when_equal_to_original() -> None:
    history = make_history()
    buf = history.buffer

    apply(history, 0, 0x00)
    history.undo()
    assert not buf.is_modified(0)

    history.redo()
    assert buf.is_modified(0)
    assert buf.get_byte(0) == 0x00


def test_clear_discards_both_stacks() -> None:
    history = make_history()
    apply(history, 0, 0x01)
    apply(history, 1, 0x02)
    history.undo()

    history.clear()

    assert not history.can_undo()
    assert not history.can_redo()


def test_history_depth_is_unbounded() -> None:
    history = make_history(bytes(1))
    for value in range(500):
        apply(history, 0, value & 0xFF)

    assert len(history.undo_stack) == 500


def test_version_counts_content_changes() -> None:
    history = make_history()

    apply(history, 0, 0x10)
    history.undo()
    history.redo()
    assert history.version == 3

    history.undo()
    history.undo()
    assert history.version == 4
