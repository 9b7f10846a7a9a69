"""SQL dialect abstraction for the legacy databases.

The same recadastramento tables live on Oracle in some deployments and on
SQL Server in others (and on SQLite in tests). The handful of SQL fragments
that differ between them are generated here so that query builders never
reference a specific backend.

Architecture::

    Query builders:
    ┌────────────────────────────────────────────────────────────────┐
    │  f"WHERE {d.length('codigosec')} = 7"                           │
    │  params = (d.bind_date(today), ...)                             │
    └────────────────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌──────────┐ ┌──────────────┐ ┌──────────┐ ┌──────────────┐
    │ SQLite   │ │ PostgreSQL   │ │  Oracle  │ │  SQL Server  │
    │ ?        │ │ %s           │ │ :1, :2   │ │ ?            │
    │ LENGTH   │ │ LENGTH       │ │ LENGTH   │ │ LEN          │
    │ ISO text │ │ date         │ │ date     │ │ date         │
    └──────────┘ └──────────────┘ └──────────┘ └──────────────┘

Examples:
    >>> d = get_dialect("mssql")
    >>> d.length("codigosec")
    'LEN(codigosec)'
    >>> get_dialect("oracle").placeholders(2)
    ':1, :2'

Guardrails:
    ❌ DON'T: Write ``LEN(...)`` or ``LENGTH(...)`` directly in a query builder
    ✅ DO: Use ``dialect.length(...)``

Tags:
    dialect, sql, portability, oracle, sqlserver, recadastro
"""

from __future__ import annotations

from datetime import date
from typing import Any, Protocol, runtime_checkable

from recadastro.core.errors import UnsupportedDatabaseError


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a SQL fragment or a bind value valid for the
    target database.
    """

    @property
    def name(self) -> str:
        """Dialect name (e.g. ``'oracle'``)."""
        ...

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index)."""
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list."""
        ...

    def length(self, expr: str) -> str:
        """Character length of ``expr``."""
        ...

    def bind_date(self, value: date) -> Any:
        """Bind value for a calendar date."""
        ...


class SQLiteDialect:
    """SQLite: ``?`` placeholders; dates stored and compared as ISO text."""

    @property
    def name(self) -> str:
        return "sqlite"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def length(self, expr: str) -> str:
        return f"LENGTH({expr})"

    def bind_date(self, value: date) -> Any:
        return value.isoformat()


class PostgreSQLDialect:
    """PostgreSQL: ``%s`` placeholders (psycopg format style)."""

    @property
    def name(self) -> str:
        return "postgresql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def length(self, expr: str) -> str:
        return f"LENGTH({expr})"

    def bind_date(self, value: date) -> Any:
        return value


class OracleDialect:
    """Oracle: ``:1, :2`` numbered placeholders (python-oracledb)."""

    @property
    def name(self) -> str:
        return "oracle"

    def placeholder(self, index: int) -> str:
        return f":{index + 1}"

    def placeholders(self, count: int) -> str:
        return ", ".join(f":{i + 1}" for i in range(count))

    def length(self, expr: str) -> str:
        return f"LENGTH({expr})"

    def bind_date(self, value: date) -> Any:
        return value


class SQLServerDialect:
    """SQL Server: ``?`` placeholders (pyodbc); ``LEN`` instead of ``LENGTH``."""

    @property
    def name(self) -> str:
        return "mssql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def length(self, expr: str) -> str:
        return f"LEN({expr})"

    def bind_date(self, value: date) -> Any:
        return value


# =========================================================================
# Registry / Factory
# =========================================================================

_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),
    "oracle": OracleDialect(),
    "mssql": SQLServerDialect(),
    "sqlserver": SQLServerDialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Accepts the legacy ``tipobanco`` values (``'oracle'``, ``'sqlserver'``)
    as well as SQLAlchemy backend names (``'mssql'``, ``'postgresql'``).

    Raises:
        UnsupportedDatabaseError: If ``db_type`` is not recognised.
    """
    key = db_type.lower()
    if key not in _DIALECTS:
        raise UnsupportedDatabaseError(db_type)
    return _DIALECTS[key]


def dialect_for_url(url: str) -> Dialect:
    """Pick the dialect for a SQLAlchemy URL (``oracle+oracledb://...`` → Oracle)."""
    from sqlalchemy.engine import make_url

    return get_dialect(make_url(url).get_backend_name())


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (lower-cased key)."""
    _DIALECTS[name.lower()] = dialect


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "OracleDialect",
    "SQLServerDialect",
    "get_dialect",
    "dialect_for_url",
    "register_dialect",
]
