"""
Text hex dump rendering of a buffer using Pygments.
"""

from typing import Final, List, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import HexdumpLexer

from ..core.buffer import Buffer
from ..utils.hex_utils import ascii_char

GROUP_SIZE: Final[int] = 8
ADDRESS_WIDTH: Final[int] = 8


class HexDumpRenderer:
    """Renders rows of effective buffer bytes in `hexdump -C` layout."""

    def __init__(self, buffer: Buffer, bytes_per_row: int = 16, rows_per_page: int = 32,
                 color: bool = True) -> None:
        if bytes_per_row <= 0 or rows_per_page <= 0:
            raise ValueError("bytes_per_row and rows_per_page must be positive")

        self.buffer = buffer
        self.bytes_per_row = bytes_per_row
        self.rows_per_page = rows_per_page
        self.color = color
        self.lexer = HexdumpLexer()
        self.formatter = TerminalFormatter()

    def format_row(self, offset: int) -> str:
        """Format the row starting at offset."""

        data = self.buffer.get_range(offset, self.bytes_per_row)

        hex_parts: List[str] = []
        for i, byte in enumerate(data):
            if i and i % GROUP_SIZE == 0:
                hex_parts.append('')
            hex_parts.append(f"{byte:02x}")

        # Pad short rows so the ascii column lines up.
        groups = (self.bytes_per_row - 1) // GROUP_SIZE
        hex_width = self.bytes_per_row * 3 - 1 + groups
        hex_str = ' '.join(hex_parts).ljust(hex_width)
        ascii_str = ''.join(ascii_char(b) for b in data)

        return f"{offset:0{ADDRESS_WIDTH}x}  {hex_str}  |{ascii_str}|"

    def render_rows(self, offset: int, rows: int) -> List[str]:
        """Format up to `rows` rows from the row containing offset."""

        start = (max(0, offset) // self.bytes_per_row) * self.bytes_per_row
        lines = []

        for row in range(rows):
            row_offset = start + row * self.bytes_per_row
            if row_offset >= len(self.buffer):
                break
            lines.append(self.format_row(row_offset))

        return lines

    def render_page(self, offset: int = 0, color: Optional[bool] = None) -> str:
        """Render one page of rows, colourized when enabled."""

        text = '\n'.join(self.render_rows(offset, self.rows_per_page))
        if text:
            text += '\n'

        use_color = self.color if color is None else color
        if not use_color or not text:
            return text

        return highlight(text, self.lexer, self.formatter)

    def modified_offsets(self) -> List[int]:
        """Offsets a view should mark as edited."""
        return self.buffer.modified_offsets()
