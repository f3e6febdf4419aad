from __future__ import annotations

import string
import struct
from collections.abc import Sequence

"""Dataset signature: an order-sensitive hash of the header names.

Rows never participate, so re-uploading an updated export with the same
columns yields the same signature and saved charts re-attach to it.

The hash is the classic 32-bit `h = h * 31 + unit` over the UTF-16 code
units of the headers joined with "|", rendered as abs(h) in base 36. It
matches signatures already stored by the browser build of the app. It is
not collision resistant; a collision only misattaches a chart list.
"""

__all__ = [
    "hash_headers",
]

_SEPARATOR = "|"
_DIGITS = string.digits + string.ascii_lowercase


def _utf16_units(text: str) -> list[int]:
    data = text.encode("utf-16-le")
    return [unit for (unit,) in struct.iter_unpack("<H", data)]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    out: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def hash_headers(headers: Sequence[str]) -> str:
    """Return the signature for a header sequence. Pure and deterministic."""
    h = 0
    for unit in _utf16_units(_SEPARATOR.join(headers)):
        h = _to_int32(h * 31 + unit)
    return _base36(abs(h))
