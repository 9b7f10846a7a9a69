"""
Result envelope for explicit success/failure handling.

Provides ``Ok[T]`` / ``Err[T]`` so a resolver stage can report "this failed"
as a value instead of an exception. The cascade combinators in
:mod:`recadastro.core.cascade` are built on :func:`try_result`.

Architecture:
    ::

        ┌─────────────────┬─────────────────┬──────────────────────┐
        │     Ok[T]       │     Err[T]      │     Utilities        │
        ├─────────────────┼─────────────────┼──────────────────────┤
        │ • value: T      │ • error: Exc    │ • try_result()       │
        │ • map()         │ • map()  (noop) │ • from_optional()    │
        │ • unwrap()      │ • unwrap_or()   │                      │
        └─────────────────┴─────────────────┴──────────────────────┘

Examples:
    >>> try_result(lambda: int("2025")).unwrap()
    2025
    >>> try_result(lambda: int("abc")).unwrap_or(0)
    0

Tags:
    result-pattern, error-handling, recadastro
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from recadastro.core.errors import RecadastroError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result carrying the exception that caused it."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.error, RecadastroError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(f: Callable[[], T]) -> Result[T]:
    """Execute a zero-argument callable and wrap its outcome.

    Any ``Exception`` becomes ``Err``; the return value becomes ``Ok``.

    Args:
        f: Zero-argument callable that may raise exceptions

    Returns:
        Ok[T] if f() succeeds, Err[T] with the exception if f() raises
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


def from_optional(value: T | None, error: Exception) -> Result[T]:
    """Convert an optional value into a Result (None becomes ``Err(error)``)."""
    if value is None:
        return Err(error)
    return Ok(value)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
    "from_optional",
]
