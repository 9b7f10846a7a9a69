"""
Reading the legacy session attributes.

The legacy web layer stored two attributes per session: ``login`` (text) and
``informacoesusuario``, whose shape depended on which screen populated it: a
bare number, a numeric string, or a row-like mapping. ``extract_user_code``
accepts that closed set of shapes.

Examples:
    >>> extract_user_code(42)
    42
    >>> extract_user_code(" 42 ")
    42
    >>> extract_user_code({"codigoUsuario": "17"})
    17
    >>> extract_user_code(["17"]) is None
    True
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from functools import partial
from typing import Any

from recadastro.core.cascade import first_present
from recadastro.core.coercion import to_int, to_str

LOGIN_ATTRIBUTE = "login"
USER_INFO_ATTRIBUTE = "informacoesusuario"

# Probed in this order; the first key whose value coerces wins.
USER_CODE_KEYS = ("codigo", "codigoUsuario", "id", "codigo_usr")


def _from_number(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    return to_int(value)


def _from_text(value: Any) -> int | None:
    return to_int(value) if isinstance(value, str) else None


def _from_mapping(value: Any) -> int | None:
    if not isinstance(value, Mapping):
        return None
    return first_present(*(partial(to_int, value.get(key)) for key in USER_CODE_KEYS if key in value))


_PROBES: tuple[Callable[[Any], int | None], ...] = (_from_number, _from_text, _from_mapping)


def extract_user_code(value: Any) -> int | None:
    """User code carried by a ``informacoesusuario`` value, or None."""
    if value is None:
        return None
    return first_present(*(partial(probe, value) for probe in _PROBES))


def extract_login(value: Any) -> str | None:
    """The ``login`` attribute as text."""
    return to_str(value)


__all__ = [
    "LOGIN_ATTRIBUTE",
    "USER_INFO_ATTRIBUTE",
    "USER_CODE_KEYS",
    "extract_user_code",
    "extract_login",
]
