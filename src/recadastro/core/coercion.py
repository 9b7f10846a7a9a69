"""
Coercion of raw column values into typed values.

Legacy schemas disagree about column types: the same "year" or "security
code" column is ``NUMBER`` in one database, ``VARCHAR`` in another and
sometimes ``NULL``. Every raw value that crosses from a query row into
resolver logic passes through one of these functions, so a single failure
policy governs the whole cascade:

- numeric input is narrowed directly (fractions truncate toward zero);
- text input is stripped and parsed as a base-10 integer;
- anything unparsable, out of range, non-finite or ``None`` is *absent*
  (``None``), never an exception.

Dispatch is by :func:`functools.singledispatch` over the closed
:data:`RawValue` union.

Examples:
    >>> to_int(2025)
    2025
    >>> to_int(" 2025 ")
    2025
    >>> to_int("abc") is None
    True
    >>> to_long(Decimal("3304557"))
    3304557
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from functools import singledispatch
from typing import Union

# Everything a DB-API driver hands back for the columns we read.
RawValue = Union[int, float, Decimal, str, bytes, None]

INT_MIN, INT_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]{1,20}", re.ASCII)


@singledispatch
def _integer(raw: object) -> int | None:
    return None


@_integer.register
def _(raw: int) -> int | None:
    return int(raw)


@_integer.register
def _(raw: float) -> int | None:
    if not math.isfinite(raw):
        return None
    return int(raw)


@_integer.register
def _(raw: Decimal) -> int | None:
    if not raw.is_finite():
        return None
    return int(raw)


@_integer.register
def _(raw: str) -> int | None:
    text = raw.strip()
    if not _INTEGER_TEXT.fullmatch(text):
        return None
    return int(text)


@_integer.register
def _(raw: bytes) -> int | None:
    try:
        return _integer(raw.decode("utf-8"))
    except UnicodeDecodeError:
        return None


def _bounded(value: int | None, low: int, high: int) -> int | None:
    if value is None or not low <= value <= high:
        return None
    return value


def to_int(raw: RawValue | object) -> int | None:
    """Coerce to a 32-bit integer, or ``None`` when that is not possible."""
    return _bounded(_integer(raw), INT_MIN, INT_MAX)


def to_long(raw: RawValue | object) -> int | None:
    """Coerce to a 64-bit integer, or ``None`` when that is not possible."""
    return _bounded(_integer(raw), LONG_MIN, LONG_MAX)


def to_str(raw: RawValue | object) -> str | None:
    """Coerce to text. ``None`` stays ``None``; bytes are decoded as UTF-8."""
    if raw is None:
        return None
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    return str(raw)


__all__ = [
    "RawValue",
    "to_int",
    "to_long",
    "to_str",
]
