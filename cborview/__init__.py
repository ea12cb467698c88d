"""cborview — decode CBOR items into an offset-annotated tree and print them.

Quick start:
    >>> from cborview import from_bytes, render_text
    >>> root = from_bytes(bytes.fromhex("9f01820203ff"))
    >>> root.size(), len(root.children), root.tail_byte_count
    (6, 2, 1)
    >>> print(render_text(root))
    [_
        1,
        [
            2,
            3,
        ],
    ]

Byte strings whose contents are themselves a valid item are shown expanded:
    >>> print(render_text(from_bytes(bytes.fromhex("4483010203"))))
    bstr(4) expands to:
        [
            1,
            2,
            3,
        ]
"""

from __future__ import annotations

from ._constants import DEFAULT_MAX_DEPTH
from ._core import Kind, Node, decode, float_width, from_bytes, type_of
from ._errors import (
    ERR_BREAK,
    ERR_ILLEGAL_INDEFINITE,
    ERR_INVALID_CHUNK,
    ERR_LIMIT_DEPTH,
    ERR_RESERVED_INFO,
    ERR_TOO_FEW_BYTES,
    ERR_TOO_MANY_BYTES,
    ERR_UNEXPECTED_BREAK,
    BreakSymbol,
    CborError,
    DepthLimitExceeded,
    IllegalIndefiniteLength,
    InvalidChunk,
    ReservedAdditionalInfo,
    TooFewBytes,
    TooManyBytes,
    UnexpectedBreak,
)
from ._hexinput import bytes_from_hex_text, read_hex_file
from ._render import NO_VALUE_MARKER, hex_dump, render, render_text

__version__ = "0.1.0"

__all__ = [
    # Decoding
    "Node",
    "Kind",
    "decode",
    "from_bytes",
    "type_of",
    "float_width",
    "DEFAULT_MAX_DEPTH",
    # Rendering
    "render",
    "render_text",
    "hex_dump",
    "NO_VALUE_MARKER",
    # Input helpers
    "bytes_from_hex_text",
    "read_hex_file",
    # Exceptions
    "CborError",
    "TooFewBytes",
    "TooManyBytes",
    "ReservedAdditionalInfo",
    "IllegalIndefiniteLength",
    "BreakSymbol",
    "UnexpectedBreak",
    "InvalidChunk",
    "DepthLimitExceeded",
    # Error codes
    "ERR_TOO_FEW_BYTES",
    "ERR_TOO_MANY_BYTES",
    "ERR_RESERVED_INFO",
    "ERR_ILLEGAL_INDEFINITE",
    "ERR_BREAK",
    "ERR_UNEXPECTED_BREAK",
    "ERR_INVALID_CHUNK",
    "ERR_LIMIT_DEPTH",
]
