"""cborview error codes and exception classes.

Decoding is fail-fast: the first malformed byte aborts the whole decode and
the exception raised describes it.  Every exception carries one of the
ERR_* codes below in `.code`, and the byte offset where the problem was
detected in `.offset` (None when there is no single offset to blame).
"""

from __future__ import annotations

from typing import Optional

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the CLI prints these verbatim.

ERR_TOO_FEW_BYTES: str = "ERR_TOO_FEW_BYTES"            # truncated header, argument or body
ERR_TOO_MANY_BYTES: str = "ERR_TOO_MANY_BYTES"          # trailing bytes after the root item
ERR_RESERVED_INFO: str = "ERR_RESERVED_INFO"            # additional info 28, 29 or 30
ERR_ILLEGAL_INDEFINITE: str = "ERR_ILLEGAL_INDEFINITE"  # AI 31 on an int or tag
ERR_BREAK: str = "ERR_BREAK"                            # break marker where a value was asked for
ERR_UNEXPECTED_BREAK: str = "ERR_UNEXPECTED_BREAK"      # break outside an indefinite container
ERR_INVALID_CHUNK: str = "ERR_INVALID_CHUNK"            # bad chunk inside an indefinite string
ERR_LIMIT_DEPTH: str = "ERR_LIMIT_DEPTH"                # nesting exceeds max_depth


class CborError(Exception):
    """Base class for every decoding error.

    The `.code` attribute is one of the ERR_* strings above.
    """

    code: str = ""

    def __init__(self, msg: str, offset: Optional[int] = None) -> None:
        super().__init__(msg)
        self.offset = offset


class TooFewBytes(CborError):
    """Fewer bytes remain than the item at `offset` needs.

    `missing` is the exact deficit, so a caller holding a partial buffer
    knows how much more input to wait for.
    """

    code = ERR_TOO_FEW_BYTES

    def __init__(self, offset: int, missing: int) -> None:
        super().__init__(
            "item at offset {} needs {} more byte(s)".format(offset, missing),
            offset,
        )
        self.missing = missing


class TooManyBytes(CborError):
    code = ERR_TOO_MANY_BYTES

    def __init__(self, extra: int) -> None:
        super().__init__("{} byte(s) left over after the root item".format(extra))
        self.extra = extra


class ReservedAdditionalInfo(CborError):
    code = ERR_RESERVED_INFO

    def __init__(self, offset: int, value: int) -> None:
        super().__init__(
            "reserved additional info {} at offset {}".format(value, offset),
            offset,
        )
        self.value = value


class IllegalIndefiniteLength(CborError):
    code = ERR_ILLEGAL_INDEFINITE

    def __init__(self, offset: int) -> None:
        super().__init__(
            "indefinite length not allowed for item at offset {}".format(offset),
            offset,
        )


class BreakSymbol(CborError):
    """The break marker (0xff) was found where a data item was asked for.

    Only raised by the public decode() when pointed straight at a break;
    indefinite-length containers consume their own breaks.
    """

    code = ERR_BREAK

    def __init__(self, offset: int) -> None:
        super().__init__("break marker at offset {}".format(offset), offset)


class UnexpectedBreak(CborError):
    code = ERR_UNEXPECTED_BREAK

    def __init__(self, offset: int) -> None:
        super().__init__(
            "break marker at offset {} outside an indefinite-length item".format(offset),
            offset,
        )


class InvalidChunk(CborError):
    """A chunk of an indefinite-length string is not a definite string
    of the same major type."""

    code = ERR_INVALID_CHUNK

    def __init__(self, offset: int, major_type: int) -> None:
        super().__init__(
            "invalid chunk (major type {}) at offset {}".format(major_type, offset),
            offset,
        )
        self.major_type = major_type


class DepthLimitExceeded(CborError):
    code = ERR_LIMIT_DEPTH

    def __init__(self, offset: int, limit: int) -> None:
        super().__init__(
            "nesting deeper than {} at offset {}".format(limit, offset),
            offset,
        )
        self.limit = limit
