"""
Utility package for hex parsing, formatting and byte search.
"""

from .hex_utils import (
    parse_hex_string,
    parse_hex_digit,
    parse_offset,
    format_offset,
    format_byte,
    format_size,
    ascii_char
)
from .search import SearchEngine, SearchMode, SearchResult, build_needle

__all__ = [
    'parse_hex_string',
    'parse_hex_digit',
    'parse_offset',
    'format_offset',
    'format_byte',
    'format_size',
    'ascii_char',
    'SearchEngine',
    'SearchMode',
    'SearchResult',
    'build_needle'
]
