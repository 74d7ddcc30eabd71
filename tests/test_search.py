import pytest

from binedit import (
    Buffer,
    EmptyPatternError,
    HexEditError,
    HexParseError,
    PatternEncodingError,
    SearchEngine,
    SearchMode,
    SearchResult,
    build_needle,
)

SCENARIO = bytes([0x10, 0x20, 0x30, 0x40, 0x20, 0x30])


def make_engine(data: bytes = SCENARIO) -> SearchEngine:
    return SearchEngine(Buffer(data))


def test_find_forward_scenario() -> None:
    engine = make_engine()
    needle = bytes([0x20, 0x30])

    assert engine.find_forward(needle, 0).position == 1
    assert engine.find_forward(needle, 2).position == 4
    assert engine.find_forward(needle, 5) is None


def test_find_backward_scenario() -> None:
    engine = make_engine()
    needle = bytes([0x20, 0x30])

    assert engine.find_backward(needle, 5).position == 4
    assert engine.find_backward(needle, 3).position == 1
    assert engine.find_backward(needle, 0) is None
    assert engine.find_backward(needle).position == 4


def test_search_sees_unsaved_edits() -> None:
    engine = make_engine()
    engine.buffer.set_byte(1, 0x99)

    result = engine.find_forward(bytes([0x20, 0x30]), 0)

    assert result == SearchResult(4, 2, b"\x20\x30")
    assert engine.find_forward(b"\x10\x99", 0).position == 0


def test_needle_longer_than_remaining_buffer() -> None:
    engine = make_engine()

    assert engine.find_forward(SCENARIO + b"\x00", 0) is None
    assert engine.find_backward(SCENARIO + b"\x00") is None
    assert engine.find_forward(b"\x20\x30", 6) is None


def test_search_does_not_wrap() -> None:
    engine = make_engine(b"\xAA\x00\x00\x00")

    assert engine.find_forward(b"\xAA", 1) is None
    assert make_engine(b"\x00\x00\xAA").find_backward(b"\xAA", 1) is None


def test_match_reports_range() -> None:
    result = make_engine().find_forward(b"\x30\x40", 0)

    assert result.position == 2
    assert result.length == 2
    assert result.end == 3
    assert result.match == b"\x30\x40"


def test_empty_needle_is_refused() -> None:
    engine = make_engine()

    with pytest.raises(EmptyPatternError):
        engine.find_forward(b"", 0)
    with pytest.raises(EmptyPatternError):
        engine.find_backward(b"")
    with pytest.raises(EmptyPatternError):
        engine.find_next("", SearchMode.TEXT)
    with pytest.raises(EmptyPatternError):
        build_needle("   ", SearchMode.HEX)


def test_malformed_hex_pattern_fails_to_parse() -> None:
    engine = make_engine()

    with pytest.raises(HexParseError):
        engine.find_next("1", SearchMode.HEX)
    with pytest.raises(HexParseError):
        build_needle("zz", SearchMode.HEX)


def test_build_needle_modes() -> None:
    assert build_needle("20 30", SearchMode.HEX) == b"\x20\x30"
    assert build_needle("héllo", SearchMode.TEXT) == "héllo".encode("utf-8")


def test_find_next_and_previous_with_patterns() -> None:
    engine = make_engine(b"xx PNG yy PNG")

    assert engine.find_next("PNG", SearchMode.TEXT).position == 3
    assert engine.find_next("504E47", SearchMode.HEX, 4).position == 10
    assert engine.find_previous("PNG", SearchMode.TEXT, 9).position == 3


def test_find_all_includes_overlapping_matches() -> None:
    engine = make_engine(b"\xAA\xAA\xAA\x00\xAA\xAA")

    positions = [r.position for r in engine.find_all("AA AA", SearchMode.HEX)]

    assert positions == [0, 1, 4]
    assert [r.position for r in engine.find_all("AAAA", SearchMode.HEX, 2)] == [4]


def test_unencodable_text_pattern_is_refused() -> None:
    engine = make_engine()

    with pytest.raises(PatternEncodingError):
        build_needle("\udcff", SearchMode.TEXT)
    with pytest.raises(HexEditError):
        engine.find_next("ab\udcff", SearchMode.TEXT)


def test_default_mode_is_text() -> None:
    engine = make_engine(b"\xAB xAB")

    assert engine.find_next("AB").position == 3
    assert engine.find_previous("AB").position == 3
    assert [r.position for r in engine.find_all("AB")] == [3]
