"""
Core package for the binary editing engine.

This package implements the overlay Buffer, the EditHistory undo/redo log,
the EditCursor that turns keystrokes into recorded edits, and the HexEditor
session that ties them together with search and viewport handling.
"""

from .buffer import Buffer
from .history import EditHistory, UndoEntry
from .cursor import EditCursor, EditMode, NibbleParity, Selection
from .editor import EditorOptions, EditorStatus, HexEditor

__all__ = [
    'Buffer',
    'EditHistory',
    'UndoEntry',
    'EditCursor',
    'EditMode',
    'NibbleParity',
    'Selection',
    'EditorOptions',
    'EditorStatus',
    'HexEditor',
]
