"""cborview core — Node tree, recursive-descent decoder, classification.

Every data item decodes to one Node that remembers where it sits in the
source buffer and how many bytes it spans:

    size = header + body + sum(child sizes) + tail

so the next sibling always starts at `node.end_offset` without re-scanning.
Containers keep their items as children:

    array   elements in order
    map     key, value, key, value, ...  (even positions are keys)
    tag     exactly one wrapped item
    indefinite byte/text string   its definite-length chunks

Indefinite-length items end at a break marker (0xff).  Internally the
decoder hands the break back as a sentinel rather than an exception, so
container loops stop on it without try/except; only a break that lands
somewhere a value is required becomes an error.
"""

from __future__ import annotations

import enum
import logging
import struct
from typing import Any, List, NamedTuple, Optional, Tuple

from ._constants import (
    AI_INDEFINITE,
    ARGUMENT_WIDTHS,
    DEFAULT_MAX_DEPTH,
    FLOAT_WIDTHS,
    MAJOR_ARRAY,
    MAJOR_BSTR,
    MAJOR_MAP,
    MAJOR_NINT,
    MAJOR_SIMPLE,
    MAJOR_TAG,
    MAJOR_TSTR,
    MAJOR_UINT,
    NO_INDEFINITE_FORM,
    RESERVED_INFO,
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_ONE_BYTE,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
)
from ._errors import (
    BreakSymbol,
    DepthLimitExceeded,
    IllegalIndefiniteLength,
    InvalidChunk,
    ReservedAdditionalInfo,
    TooFewBytes,
    TooManyBytes,
    UnexpectedBreak,
)

log = logging.getLogger(__name__)

_STRING_MAJORS = (MAJOR_BSTR, MAJOR_TSTR)

# Big-endian argument layouts, keyed by argument width in bytes.
_ARG_FORMATS = {1: ">B", 2: ">H", 4: ">I", 8: ">Q"}

# Returned by _decode_one() in place of a Node when it reads a break.
_BREAK = object()


class Kind(enum.Enum):
    """What a node means, derived from (major type, additional info)."""

    UINT = "uint"
    NINT = "nint"
    BSTR = "bstr"
    TSTR = "tstr"
    ARRAY = "array"
    MAP = "map"
    TAG = "tag"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    UNDEFINED = "undefined"
    FLOAT = "float"
    SIMPLE = "simple"


class Node(NamedTuple):
    """One decoded data item and its subtree.  Immutable."""

    major_type: int
    additional_info: int
    argument: int
    start_offset: int
    header_byte_count: int
    body_bytes: bytes = b""
    tail_byte_count: int = 0
    children: Tuple["Node", ...] = ()

    def size(self) -> int:
        """Total bytes this item and its descendants occupy."""
        return (self.header_byte_count
                + len(self.body_bytes)
                + sum(child.size() for child in self.children)
                + self.tail_byte_count)

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.size()

    @property
    def is_indefinite(self) -> bool:
        return self.additional_info == AI_INDEFINITE

    @property
    def kind(self) -> Kind:
        return type_of(self)

    def payload(self) -> bytes:
        """String contents, with indefinite-length chunks joined.

        Empty for anything that is not a byte or text string.
        """
        if self.major_type not in _STRING_MAJORS:
            return b""
        if self.is_indefinite:
            return b"".join(chunk.body_bytes for chunk in self.children)
        return self.body_bytes


# ── Classification ────────────────────────────────────────────

_MAJOR_KINDS = {
    MAJOR_UINT: Kind.UINT,
    MAJOR_NINT: Kind.NINT,
    MAJOR_BSTR: Kind.BSTR,
    MAJOR_TSTR: Kind.TSTR,
    MAJOR_ARRAY: Kind.ARRAY,
    MAJOR_MAP: Kind.MAP,
    MAJOR_TAG: Kind.TAG,
}

_SIMPLE_KINDS = {
    SIMPLE_FALSE: Kind.FALSE,
    SIMPLE_TRUE: Kind.TRUE,
    SIMPLE_NULL: Kind.NULL,
    SIMPLE_UNDEFINED: Kind.UNDEFINED,
}


def type_of(node: Node) -> Kind:
    """Classify a node.

    The decoder rejects every header that would fall through here, so
    reaching the end means the node was not built by decode().
    """
    major, ai = node.major_type, node.additional_info
    kind = _MAJOR_KINDS.get(major)
    if kind is not None:
        return kind
    if major == MAJOR_SIMPLE:
        if ai in _SIMPLE_KINDS:
            return _SIMPLE_KINDS[ai]
        if ai in FLOAT_WIDTHS:
            return Kind.FLOAT
        if ai < SIMPLE_FALSE or ai == SIMPLE_ONE_BYTE:
            return Kind.SIMPLE
    raise AssertionError(
        "unreachable: no kind for major type {} additional info {}".format(major, ai))


def float_width(node: Node) -> int:
    """Bit width (16, 32 or 64) of a FLOAT node.  KeyError for anything else."""
    return FLOAT_WIDTHS[node.additional_info]


# ── Decoding ──────────────────────────────────────────────────

def _read_argument(buf: bytes, start: int, ai: int) -> Tuple[int, int]:
    """Resolve the argument of the header at `start`; return (argument, next offset)."""
    off = start + 1
    width = ARGUMENT_WIDTHS.get(ai)
    if width is None:
        # 0..23 literal, or 31 (indefinite) which carries no argument bytes.
        return ai, off
    available = len(buf) - off
    if width > available:
        raise TooFewBytes(start, width - available)
    return struct.unpack_from(_ARG_FORMATS[width], buf, off)[0], off + width


def _decode_one(buf: bytes, off: int, depth: int,
                max_depth: Optional[int]) -> Tuple[Any, int]:
    """Decode one item at `off`; return (Node or _BREAK, offset just past it)."""
    if max_depth is not None and depth > max_depth:
        raise DepthLimitExceeded(off, max_depth)
    if off >= len(buf):
        raise TooFewBytes(off, 1)

    start = off
    major = buf[start] >> 5
    ai = buf[start] & 0x1F

    if ai in RESERVED_INFO:
        raise ReservedAdditionalInfo(start, ai)
    if ai == AI_INDEFINITE:
        if major in NO_INDEFINITE_FORM:
            raise IllegalIndefiniteLength(start)
        if major == MAJOR_SIMPLE:
            return _BREAK, start + 1

    argument, off = _read_argument(buf, start, ai)
    header = off - start

    if ai == AI_INDEFINITE:
        return _decode_indefinite(buf, start, major, header, depth, max_depth)

    if major in _STRING_MAJORS:
        available = len(buf) - off
        if argument > available:
            raise TooFewBytes(start, argument - available)
        body = bytes(buf[off:off + argument])
        return Node(major, ai, argument, start, header, body), off + argument

    if major == MAJOR_ARRAY:
        child_count = argument
    elif major == MAJOR_MAP:
        child_count = 2 * argument
    elif major == MAJOR_TAG:
        child_count = 1
    else:
        child_count = 0

    # No preallocation: the count is untrusted and may be up to 2**64-1.
    children: List[Node] = []
    for _ in range(child_count):
        child_start = off
        child, off = _decode_one(buf, off, depth + 1, max_depth)
        if child is _BREAK:
            raise UnexpectedBreak(child_start)
        children.append(child)

    return Node(major, ai, argument, start, header, b"", 0, tuple(children)), off


def _decode_indefinite(buf: bytes, start: int, major: int, header: int,
                       depth: int, max_depth: Optional[int]) -> Tuple[Node, int]:
    """Read items until the break; the break is this node's one-byte tail."""
    off = start + header
    children: List[Node] = []
    while True:
        child, off = _decode_one(buf, off, depth + 1, max_depth)
        if child is _BREAK:
            break
        # Chunks of an indefinite string are definite strings of the same type.
        if major in _STRING_MAJORS and (child.major_type != major or child.is_indefinite):
            raise InvalidChunk(child.start_offset, child.major_type)
        children.append(child)

    return Node(major, AI_INDEFINITE, AI_INDEFINITE, start, header, b"", 1,
                tuple(children)), off


def decode(buf: bytes, start: int = 0, *,
           max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> Node:
    """Decode the single data item that begins at `start`.

    Bytes after the item are ignored; `node.end_offset` says where the next
    one would begin.  Offsets in the returned tree and in any raised error
    are absolute positions in `buf`.

    Raises BreakSymbol if `start` points at a break marker, and any other
    CborError on malformed input.  max_depth=None disables the nesting limit.
    """
    node, _end = _decode_one(buf, start, 0, max_depth)
    if node is _BREAK:
        raise BreakSymbol(start)
    return node


def from_bytes(buf: bytes, *,
               max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> Node:
    """Decode a buffer that must hold exactly one data item."""
    try:
        root = decode(buf, 0, max_depth=max_depth)
    except BreakSymbol as e:
        raise UnexpectedBreak(e.offset) from None

    extra = len(buf) - root.size()
    if extra > 0:
        raise TooManyBytes(extra)
    log.debug("decoded %d byte(s): root %s with %d child(ren)",
              len(buf), root.kind.value, len(root.children))
    return root
