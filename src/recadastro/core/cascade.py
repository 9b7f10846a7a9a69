"""
Combinators for fallback cascades.

A resolver is written as a list of small stage functions, each returning an
optional value, and one of these combinators decides which result wins.
Keeping the precedence rule in the combinator (instead of in nested
try/except blocks) makes every rule visible at the call site:

=====================  ==================================================
Combinator             Rule
=====================  ==================================================
``guarded``            stage failure becomes ``default`` (logged)
``first_present``      first non-None result wins, later stages skipped
``first_nonempty``     first non-empty sequence wins, later stages skipped
``last_present``       last non-None value of an iterable wins
=====================  ==================================================

Examples:
    >>> first_present(lambda: None, lambda: 2025, lambda: 1 / 0)
    2025
    >>> last_present([2021, None, 2023], initial=2020)
    2023
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from recadastro.core.logging import get_logger
from recadastro.core.result import Err, try_result

T = TypeVar("T")

logger = get_logger(__name__)


def guarded(stage: Callable[[], T], *, default: T, event: str, **log_fields: Any) -> T:
    """Run ``stage``; on any exception log ``event`` at debug level and return ``default``."""
    result = try_result(stage)
    if isinstance(result, Err):
        logger.debug(event, error=str(result.error), error_type=type(result.error).__name__, **log_fields)
    return result.unwrap_or(default)


def first_present(*stages: Callable[[], T | None]) -> T | None:
    """Evaluate stages in order and return the first non-None result."""
    for stage in stages:
        value = stage()
        if value is not None:
            return value
    return None


def first_nonempty(*stages: Callable[[], Sequence[T]]) -> tuple[T, ...]:
    """Evaluate stages in order and return the first non-empty result as a tuple."""
    for stage in stages:
        rows = stage()
        if rows:
            return tuple(rows)
    return ()


def last_present(values: Iterable[T | None], initial: T) -> T:
    """Fold ``values`` keeping the last non-None one (``initial`` if none)."""
    current = initial
    for value in values:
        if value is not None:
            current = value
    return current


__all__ = [
    "guarded",
    "first_present",
    "first_nonempty",
    "last_present",
]
