"""cborview renderer — turn a decoded Node tree into indented text.

render() returns a list of fragments; join them for display.  Layout:

    [
        1,
        h'01 02 03',
        {
            "a" => 32("x"),
            "b" => [_],
        },
    ]

Byte strings are speculatively decoded as embedded items (a common way of
nesting encoded values) and shown expanded when that succeeds.  Rendering
never fails on a tree produced by the decoder.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from ._constants import DEFAULT_MAX_DEPTH, HEX_DUMP_WIDTH, INDENT
from ._core import Kind, Node, float_width, from_bytes, type_of
from ._errors import CborError

log = logging.getLogger(__name__)

NO_VALUE_MARKER = "!! no associated value"

_LITERALS = {
    Kind.TRUE: "true",
    Kind.FALSE: "false",
    Kind.NULL: "null",
    Kind.UNDEFINED: "undefined",
}


def render(node: Node, indent_level: int = 0, *,
           show_offsets: bool = False,
           max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> List[str]:
    """Render `node` as text fragments.

    `indent_level` is the nesting level of the line the node starts on; the
    first fragment carries no indentation of its own, continuation lines do.
    With show_offsets=True each item is prefixed by `@<offset> `.
    """
    out: List[str] = []
    _render_into(out, node, indent_level, 0, show_offsets, max_depth)
    return out


def render_text(node: Node, indent_level: int = 0, *,
                show_offsets: bool = False,
                max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> str:
    return "".join(render(node, indent_level,
                          show_offsets=show_offsets, max_depth=max_depth))


def hex_dump(data: bytes, indent_level: int = 0) -> List[str]:
    """Raw bytes as h'..', one HEX_DUMP_WIDTH-byte line each when long."""
    if len(data) <= HEX_DUMP_WIDTH:
        return ["h'{}'".format(data.hex(" "))]
    out = ["h'\n"]
    inner = INDENT * (indent_level + 1)
    for i in range(0, len(data), HEX_DUMP_WIDTH):
        out.append(inner + data[i:i + HEX_DUMP_WIDTH].hex(" ") + "\n")
    out.append(INDENT * indent_level + "'")
    return out


# ── Per-kind rendering ───────────────────────────────────────
# `depth` counts every level of nesting including tags and byte-string
# expansions; indent_level only grows where a new line is started.

def _render_into(out: List[str], node: Node, indent_level: int, depth: int,
                 show_offsets: bool, max_depth: Optional[int]) -> None:
    if show_offsets:
        out.append("@{} ".format(node.start_offset))

    kind = type_of(node)
    if kind is Kind.UINT:
        out.append(str(node.argument))
    elif kind is Kind.NINT:
        # Major type 1 stores -1 - n, so argument 0 is -1.
        out.append(str(-1 - node.argument))
    elif kind is Kind.BSTR:
        _render_bstr(out, node, indent_level, depth, show_offsets, max_depth)
    elif kind is Kind.TSTR:
        text = node.payload().decode("utf-8", errors="replace")
        out.append(json.dumps(text, ensure_ascii=False))
    elif kind is Kind.ARRAY:
        _render_array(out, node, indent_level, depth, show_offsets, max_depth)
    elif kind is Kind.MAP:
        _render_map(out, node, indent_level, depth, show_offsets, max_depth)
    elif kind is Kind.TAG:
        if not node.children:
            raise AssertionError(
                "unreachable: tag at offset {} wraps no item".format(node.start_offset))
        out.append("{}(".format(node.argument))
        _render_into(out, node.children[0], indent_level, depth + 1,
                     show_offsets, max_depth)
        out.append(")")
    elif kind is Kind.FLOAT:
        out.append("float{}(...)".format(float_width(node)))
    elif kind is Kind.SIMPLE:
        out.append("simple({})".format(node.argument))
    else:
        out.append(_LITERALS[kind])


def _expand(payload: bytes, depth: int, max_depth: Optional[int]) -> Optional[Node]:
    """Decode a byte string's contents as one embedded item, or None."""
    remaining = None if max_depth is None else max_depth - depth - 1
    if remaining is not None and remaining < 0:
        return None
    try:
        return from_bytes(payload, max_depth=remaining)
    except CborError as e:
        log.debug("byte string is not an embedded item (%s), dumping raw", e.code)
        return None


def _render_bstr(out: List[str], node: Node, indent_level: int, depth: int,
                 show_offsets: bool, max_depth: Optional[int]) -> None:
    payload = node.payload()
    nested = _expand(payload, depth, max_depth)
    if nested is None:
        out.extend(hex_dump(payload, indent_level))
        return
    out.append("bstr({}) expands to:\n".format(len(payload)))
    out.append(INDENT * (indent_level + 1))
    _render_into(out, nested, indent_level + 1, depth + 1, show_offsets, max_depth)


def _render_array(out: List[str], node: Node, indent_level: int, depth: int,
                  show_offsets: bool, max_depth: Optional[int]) -> None:
    opener = "[_" if node.is_indefinite else "["
    if not node.children:
        out.append(opener + "]")
        return
    out.append(opener + "\n")
    inner = INDENT * (indent_level + 1)
    for child in node.children:
        out.append(inner)
        _render_into(out, child, indent_level + 1, depth + 1, show_offsets, max_depth)
        out.append(",\n")
    out.append(INDENT * indent_level + "]")


def _render_map(out: List[str], node: Node, indent_level: int, depth: int,
                show_offsets: bool, max_depth: Optional[int]) -> None:
    opener = "{_" if node.is_indefinite else "{"
    children = node.children
    if not children:
        out.append(opener + "}")
        return
    out.append(opener + "\n")
    inner = INDENT * (indent_level + 1)
    for i in range(0, len(children) - 1, 2):
        out.append(inner)
        _render_into(out, children[i], indent_level + 1, depth + 1, show_offsets, max_depth)
        out.append(" => ")
        _render_into(out, children[i + 1], indent_level + 1, depth + 1,
                     show_offsets, max_depth)
        out.append(",\n")

    # Only an indefinite map cut short by its break can leave a key unpaired.
    if len(children) % 2:
        log.debug("map at offset %d ends with an unpaired key", node.start_offset)
        out.append(inner)
        _render_into(out, children[-1], indent_level + 1, depth + 1, show_offsets, max_depth)
        out.append(" => " + NO_VALUE_MARKER + ",\n")
    out.append(INDENT * indent_level + "}")
