"""cborview constants — major types, additional-info markers, and limits.

Every data item starts with one header byte: the top three bits select the
major type, the low five bits carry the additional info.  RFC 8949 §3.
"""

from __future__ import annotations

# ── Major types (top 3 bits of the header byte) ──────────────
MAJOR_UINT: int = 0
MAJOR_NINT: int = 1
MAJOR_BSTR: int = 2
MAJOR_TSTR: int = 3
MAJOR_ARRAY: int = 4
MAJOR_MAP: int = 5
MAJOR_TAG: int = 6
MAJOR_SIMPLE: int = 7  # simple values, floats, and the break marker

# ── Additional info (low 5 bits) ─────────────────────────────
# 0..23 are the argument itself.  24..27 announce a big-endian argument
# of 1, 2, 4 or 8 bytes.  28..30 are reserved.  31 means "indefinite
# length" on strings and containers, and is the break marker on major 7.
AI_INDEFINITE: int = 31
ARGUMENT_WIDTHS = {24: 1, 25: 2, 26: 4, 27: 8}
RESERVED_INFO = frozenset((28, 29, 30))

# Majors with no indefinite-length form.  AI 31 on these is malformed.
NO_INDEFINITE_FORM = frozenset((MAJOR_UINT, MAJOR_NINT, MAJOR_TAG))

# ── Major 7 assignments ──────────────────────────────────────
SIMPLE_FALSE: int = 20
SIMPLE_TRUE: int = 21
SIMPLE_NULL: int = 22
SIMPLE_UNDEFINED: int = 23
SIMPLE_ONE_BYTE: int = 24  # simple value in the following byte
FLOAT_WIDTHS = {25: 16, 26: 32, 27: 64}

# ── Limits and layout ────────────────────────────────────────
# Nesting deeper than this is reported as ERR_LIMIT_DEPTH.  Must stay well
# below sys.getrecursionlimit(): each level costs up to two decoder frames
# and two renderer frames.
DEFAULT_MAX_DEPTH: int = 256
MAX_DEPTH_ENV: str = "CBORVIEW_MAX_DEPTH"

HEX_DUMP_WIDTH: int = 16  # bytes per line of a byte-string dump
INDENT: str = "    "
