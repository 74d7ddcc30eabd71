"""
Utility functions for hex string and offset handling.
"""

from typing import Final, Optional

from ..core.exceptions import HexParseError

HEX_DIGITS: Final[str] = '0123456789ABCDEFabcdef'
SIZE_UNITS: Final[tuple] = ('B', 'KB', 'MB', 'GB')


def parse_hex_string(hex_str: str) -> bytes:
    """
    Parse a hex string into bytes.

    Args:
        hex_str (str): String of hex values (e.g. "FF 00 A5"). Whitespace is ignored.

    Returns:
        bytes: Parsed bytes

    Raises:
        HexParseError: If the string has an odd number of digits or a non-hex character
    """

    clean_str = ''.join(hex_str.split())

    bad = [c for c in clean_str if c not in HEX_DIGITS]
    if bad:
        raise HexParseError(f"Invalid hex character {bad[0]!r} in {hex_str!r}")

    if len(clean_str) % 2:
        raise HexParseError(f"Hex string {hex_str!r} has an odd number of digits")

    return bytes.fromhex(clean_str)


def parse_hex_digit(char: str) -> Optional[int]:
    """Return the value of a single hex digit character, or None."""

    if len(char) != 1 or char not in HEX_DIGITS:
        return None

    return int(char, 16)


def parse_offset(text: str) -> Optional[int]:
    """
    Parse a user supplied offset.

    Accepts decimal ("4096") or hex with a 0x prefix ("0x1000").

    Returns:
        int: The offset, or None if the text is not a valid non-negative number
    """

    text = text.strip()
    if not text:
        return None

    try:
        if text.lower().startswith('0x'):
            value = int(text[2:], 16)
        else:
            value = int(text, 10)
    except ValueError:
        return None

    if value < 0:
        return None

    return value


def format_offset(offset: int, width: int = 8, prefix: str = '0x') -> str:
    """
    Format a byte offset as a hex string.

    Args:
        offset (int): Byte offset to format
        width (int): Number of hex digits to use
        prefix (str): Text placed before the digits

    Returns:
        str: Formatted hex string
    """

    return f"{prefix}{offset:0{width}X}"


def format_byte(value: int) -> str:
    return f"{value & 0xFF:02X}"


def ascii_char(value: int) -> str:
    """Printable ASCII character for a byte, '.' otherwise."""
    return chr(value) if 32 <= value <= 126 else '.'


def format_size(size: int) -> str:
    """Format a byte count with a binary unit and two decimals, e.g. '1.50 KB'."""

    value = float(size)
    unit_index = 0

    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    return f"{value:.2f} {SIZE_UNITS[unit_index]}"
