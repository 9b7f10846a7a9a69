"""Base repository over a query executor and a dialect.

Provides :class:`BaseRepository`, which pairs a
:class:`~recadastro.core.protocols.QueryExecutor` with a
:class:`~recadastro.core.dialect.Dialect` so that legacy-table repositories
can build portable SQL and get the three row-shapes the legacy code relied
on.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                       BaseRepository                               │
    │                                                                    │
    │   executor: QueryExecutor  ← protocol from recadastro.core.protocols│
    │   dialect: Dialect         ← from recadastro.core.dialect           │
    │   schema: str              ← legacy schema prefix ("alunos")       │
    │                                                                    │
    │   query(descriptor)        → list[Row]                             │
    │   query_first(descriptor)  → Row | None                            │
    │   query_single(descriptor) → Row | None, raises on >1 rows         │
    │   table(name)              → "alunos.name" / "name"                │
    └────────────────────────────────────────────────────────────────────┘

``query_single`` mirrors the single-result lookups of the legacy DAOs: no
row is "absent", more than one row is an error.

Tags:
    repository, database, abstraction, portability
"""

from __future__ import annotations

from recadastro.core.dialect import Dialect, SQLiteDialect
from recadastro.core.errors import AmbiguousResultError
from recadastro.core.protocols import QueryDescriptor, QueryExecutor, Row


class BaseRepository:
    """Dialect-aware base class for read-only legacy repositories.

    Parameters:
        executor: Any object satisfying the :class:`QueryExecutor` protocol.
        dialect: SQL dialect. Defaults to :class:`SQLiteDialect`.
        schema: Schema prefix for legacy tables; empty string for none.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        dialect: Dialect | None = None,
        schema: str = "",
    ) -> None:
        self.executor = executor
        self.dialect: Dialect = dialect or SQLiteDialect()
        self.schema = schema

    def table(self, name: str) -> str:
        """Qualify ``name`` with the configured schema."""
        return f"{self.schema}.{name}" if self.schema else name

    def query(self, descriptor: QueryDescriptor) -> list[Row]:
        """Execute and return all rows."""
        return list(self.executor.query(descriptor))

    def query_first(self, descriptor: QueryDescriptor) -> Row | None:
        """Execute and return the first row (or None)."""
        rows = self.query(descriptor)
        return rows[0] if rows else None

    def query_single(self, descriptor: QueryDescriptor) -> Row | None:
        """Execute and return the only row, None for no rows.

        Raises:
            AmbiguousResultError: If more than one row comes back.
        """
        rows = self.query(descriptor)
        if len(rows) > 1:
            raise AmbiguousResultError(descriptor.name, len(rows))
        return rows[0] if rows else None

    def scalar(self, descriptor: QueryDescriptor) -> object:
        """First column of the single row, None when there is no row."""
        row = self.query_single(descriptor)
        if row is None or len(row) == 0:
            return None
        return row[0]


__all__ = [
    "BaseRepository",
]
