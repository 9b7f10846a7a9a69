"""
Structured error types for recadastro.

Provides a small hierarchy of typed errors with a category, structured
context and cause chaining. Infrastructure code (executors, repositories,
the connection factory) raises these; resolver stages catch them and turn
them into "no value" so nothing propagates to callers.

Manifesto:
    - **Typed hierarchy:** Database failures and configuration failures are
      different things, even if the resolvers treat them the same way.
    - **Rich context:** Errors carry the query name, table and parameters so
      a debug log line is enough to diagnose a legacy schema mismatch.
    - **Error chaining:** The driver exception is preserved as ``cause``.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                    RecadastroError                        │
        │             (category, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │  DatabaseError             ConfigError                    │
        │  (DATABASE)                (CONFIG)                       │
        │     │                         │                           │
        │  QueryError                UnsupportedDatabaseError       │
        │     │                                                     │
        │  AmbiguousResultError                                     │
        │  DatabaseConnectionError                                  │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = QueryError("no such table: usuarios").with_context(query="usuario.anobase")
    >>> err.category
    <ErrorCategory.DATABASE: 'DATABASE'>
    >>> err.context.query
    'usuario.anobase'

Tags:
    errors, exceptions, error-hierarchy, recadastro
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used for classification and log routing."""

    DATABASE = "DATABASE"
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Known fields are first-class attributes; anything else lands in
    ``metadata``.
    """

    query: str | None = None
    table: str | None = None
    params: tuple[Any, ...] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.query is not None:
            result["query"] = self.query
        if self.table is not None:
            result["table"] = self.table
        if self.params is not None:
            result["params"] = list(self.params)
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


class RecadastroError(Exception):
    """
    Base exception for all recadastro errors.

    Subclasses set ``default_category``. ``cause`` is chained as
    ``__cause__`` so tracebacks keep the original driver exception.

    Examples:
        >>> try:
        ...     raise ConnectionError("ORA-12541: TNS:no listener")
        ... except ConnectionError as e:
        ...     error = DatabaseConnectionError("legacy database unreachable", cause=e)
        >>> error.cause
        ConnectionError('ORA-12541: TNS:no listener')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RecadastroError:
        """Add context to this error (fluent API).

        Usage:
            raise QueryError("failed").with_context(query="instituicoes.por_login")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(RecadastroError):
    """Database operation errors."""

    default_category = ErrorCategory.DATABASE


class QueryError(DatabaseError):
    """A query could not be executed (bad SQL, missing table or column)."""


class AmbiguousResultError(QueryError):
    """A single-row lookup returned more than one row."""

    def __init__(self, query: str, row_count: int, message: str | None = None):
        super().__init__(
            message or f"Expected at most one row from '{query}', got {row_count}",
            context=ErrorContext(query=query, metadata={"row_count": row_count}),
        )
        self.row_count = row_count


class DatabaseConnectionError(DatabaseError):
    """The legacy database could not be reached."""


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RecadastroError):
    """Configuration errors."""

    default_category = ErrorCategory.CONFIG


class UnsupportedDatabaseError(ConfigError):
    """The configured database backend has no known SQL dialect."""

    def __init__(self, backend: str, message: str | None = None):
        super().__init__(
            message or f"Unsupported legacy database type: {backend}",
            context=ErrorContext(metadata={"backend": backend}),
        )
        self.backend = backend


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RecadastroError",
    "DatabaseError",
    "QueryError",
    "AmbiguousResultError",
    "DatabaseConnectionError",
    "ConfigError",
    "UnsupportedDatabaseError",
]
