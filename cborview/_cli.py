"""cborview command-line interface.

Usage:
    echo '83 01 02 03' | python3 -m cborview show
    python3 -m cborview show --input item.hex --offsets
    python3 -m cborview show --raw --input item.cbor --size
    python3 -m cborview version
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import (
    CborError,
    __version__,
    bytes_from_hex_text,
    from_bytes,
    render_text,
)
from ._constants import DEFAULT_MAX_DEPTH, MAX_DEPTH_ENV


def _default_max_depth() -> int:
    raw = os.environ.get(MAX_DEPTH_ENV)
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        return int(raw)
    except ValueError:
        print("cborview: ignoring non-integer {}={!r}".format(MAX_DEPTH_ENV, raw),
              file=sys.stderr)
        return DEFAULT_MAX_DEPTH


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cborview",
        description="cborview — decode CBOR items and print them as an indented tree",
    )
    sub = parser.add_subparsers(dest="command")

    # ── show ──
    show_p = sub.add_parser("show", help="Decode one item and print it")
    show_p.add_argument("--input", "-i", metavar="FILE",
                        help="Read from FILE instead of stdin")
    show_p.add_argument("--raw", action="store_true",
                        help="Input is binary, not hex text")
    show_p.add_argument("--offsets", action="store_true",
                        help="Prefix every item with its byte offset")
    show_p.add_argument("--size", action="store_true",
                        help="Also print the root item's size in bytes")
    show_p.add_argument("--max-depth", type=int, default=_default_max_depth(),
                        metavar="N",
                        help="Nesting limit (default %(default)s, env {})".format(MAX_DEPTH_ENV))
    show_p.add_argument("--verbose", "-v", action="store_true",
                        help="Log decoder diagnostics to stderr")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read input bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("cborview: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _cmd_show(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.raw:
        data = raw
    else:
        data = bytes_from_hex_text(raw.decode("utf-8", errors="replace"))

    root = from_bytes(data, max_depth=args.max_depth)
    print(render_text(root, show_offsets=args.offsets, max_depth=args.max_depth))
    if args.size:
        print("root size: {} bytes".format(root.size()))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"cborview {__version__}")
        return

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s: %(levelname)s: %(message)s")

    try:
        _cmd_show(args)
    except CborError as e:
        print(f"cborview: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"cborview: bad hex input: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"cborview: cannot read input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
