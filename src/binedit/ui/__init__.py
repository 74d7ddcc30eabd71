"""
UI package for presenting buffer contents.

This package implements the text hex dump used by the command line tool.
"""

from .dump import HexDumpRenderer

__all__ = ['HexDumpRenderer']
