"""
Command line entry point for binedit.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.editor import EditorOptions, HexEditor
from .core.exceptions import HexEditError
from .ui.dump import HexDumpRenderer
from .utils.hex_utils import format_offset, parse_hex_string, parse_offset
from .utils.search import SearchMode

logger = logging.getLogger(__name__)


def _offset_arg(text: str) -> int:
    value = parse_offset(text)
    if value is None:
        raise argparse.ArgumentTypeError(f"invalid offset: {text!r}")
    return value


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""

    parser = argparse.ArgumentParser(
        prog="binedit",
        description="binedit - Inspect, search and patch binary files"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    dump = subparsers.add_parser("dump", help="Print a page of the file as a hex dump")
    dump.add_argument("file", help="File to read")
    dump.add_argument("--offset", type=_offset_arg, default=0, help="Start offset (decimal or 0x hex)")
    dump.add_argument("--rows", type=_positive_int, default=32, help="Rows per page")
    dump.add_argument("--bytes-per-row", type=_positive_int, default=16, help="Bytes per row")
    dump.add_argument("--no-color", action="store_true", help="Disable highlighting")

    find = subparsers.add_parser("find", help="Find a byte pattern")
    find.add_argument("file", help="File to search")
    find.add_argument("pattern", help="Text, or hex bytes with --hex (e.g. 'FF 00 A3')")
    find.add_argument("--hex", action="store_true", help="Interpret the pattern as hex bytes")
    find.add_argument("--backward", action="store_true", help="Report the nearest match at or before --from")
    find.add_argument("--from", dest="start", type=_offset_arg, default=None, help="Offset to search from")

    patch = subparsers.add_parser("patch", help="Overwrite bytes at an offset")
    patch.add_argument("file", help="File to patch")
    patch.add_argument("offset", type=_offset_arg, help="Offset of the first byte to replace")
    patch.add_argument("data", help="Replacement bytes as hex (e.g. 'DE AD BE EF')")
    patch.add_argument("-o", "--output", help="Write the result here instead of in place")

    return parser


def _open(path: str, options: Optional[EditorOptions] = None) -> HexEditor:
    editor = HexEditor(options)
    with open(path, 'rb') as f:
        editor.load(f.read(), name=path)
    return editor


def cmd_dump(args: argparse.Namespace) -> int:
    options = EditorOptions(bytes_per_row=args.bytes_per_row, rows_per_page=args.rows)
    editor = _open(args.file, options)

    renderer = HexDumpRenderer(
        editor.buffer,
        bytes_per_row=options.bytes_per_row,
        rows_per_page=options.rows_per_page,
        color=not args.no_color and sys.stdout.isatty(),
    )
    sys.stdout.write(renderer.render_page(args.offset))
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    editor = _open(args.file, EditorOptions(read_only=True))
    mode = SearchMode.HEX if args.hex else SearchMode.TEXT
    engine = editor.search_engine

    if args.backward:
        result = engine.find_previous(args.pattern, mode, args.start)
        results = [result] if result else []
    else:
        results = engine.find_all(args.pattern, mode, args.start or 0)

    for result in results:
        print(format_offset(result.position))

    return 0 if results else 1


def cmd_patch(args: argparse.Namespace) -> int:
    data = parse_hex_string(args.data)
    editor = _open(args.file)

    if args.offset + len(data) > len(editor.buffer):
        raise HexEditError(
            f"Patch of {len(data)} bytes at {format_offset(args.offset)} "
            f"extends past end of file ({len(editor.buffer)} bytes)"
        )

    editor.cursor.move_to(args.offset)
    for value in data:
        editor.edit_digit(value >> 4)
        editor.edit_digit(value & 0x0F)

    output = args.output or args.file

    def write(content: bytes) -> None:
        with open(output, 'wb') as f:
            f.write(content)

    if editor.save(write) is None and args.output:
        # Unchanged content still goes to a separate output file.
        write(editor.buffer.materialize())

    logger.info("Patched %d bytes at %s into %s", len(data), format_offset(args.offset), output)
    return 0


COMMANDS = {
    "dump": cmd_dump,
    "find": cmd_find,
    "patch": cmd_patch,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except (HexEditError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
