"""Hex text → bytes for the command line.

Input files hold hex digits with whatever separators make them readable:
spaces, newlines, commas, colons.  Everything that is not a hex digit is
dropped before conversion.
"""

from __future__ import annotations

import re

_NOT_HEX = re.compile(r"[^0-9a-fA-F]")


def bytes_from_hex_text(text: str) -> bytes:
    digits = _NOT_HEX.sub("", text)
    if len(digits) % 2:
        raise ValueError("odd number of hex digits ({})".format(len(digits)))
    return bytes.fromhex(digits)


def read_hex_file(path: str) -> bytes:
    with open(path, "r", encoding="utf-8") as f:
        return bytes_from_hex_text(f.read())
