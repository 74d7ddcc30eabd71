"""
Binary buffer editing engine with undo/redo, nibble entry and byte search.
"""

from .core import (
    Buffer,
    EditCursor,
    EditHistory,
    EditMode,
    EditorOptions,
    EditorStatus,
    HexEditor,
    NibbleParity,
    Selection,
    UndoEntry,
)
from .core.exceptions import (
    EmptyPatternError,
    HexEditError,
    HexParseError,
    OffsetOutOfRangeError,
    PatternEncodingError,
    ReadOnlyError,
)
from .utils import SearchEngine, SearchMode, SearchResult, build_needle

__version__ = "0.1.0"

__all__ = [
    'Buffer',
    'EditCursor',
    'EditHistory',
    'EditMode',
    'EditorOptions',
    'EditorStatus',
    'HexEditor',
    'NibbleParity',
    'Selection',
    'UndoEntry',
    'EmptyPatternError',
    'HexEditError',
    'HexParseError',
    'OffsetOutOfRangeError',
    'PatternEncodingError',
    'ReadOnlyError',
    'SearchEngine',
    'SearchMode',
    'SearchResult',
    'build_needle',
]
