"""Query executors: adapters from real database handles to ``QueryExecutor``.

Query builders always emit ``?`` positional markers. Each executor rewrites
them to whatever its driver expects and wraps driver failures in
:class:`~recadastro.core.errors.QueryError`, tagged with the descriptor name.

This module provides:

* ``DbApiQueryExecutor``      -- wraps any DB-API 2.0 connection; markers are
  rewritten with ``dialect.placeholder(i)``.
* ``SQLAlchemyQueryExecutor`` -- wraps a SQLAlchemy ``Engine``; markers become
  ``:p0, :p1, ...`` for ``sqlalchemy.text()``. One pooled connection is
  checked out per query and returned on every exit path.

Tags:
    executor, db-api, sqlalchemy, adapter, recadastro
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

from recadastro.core.dialect import Dialect, SQLiteDialect
from recadastro.core.errors import QueryError
from recadastro.core.protocols import QueryDescriptor, Row


def rewrite_markers(sql: str, marker: Callable[[int], str]) -> str:
    """Replace each ``?`` outside single-quoted literals with ``marker(index)``."""
    rewritten: list[str] = []
    index = 0
    in_literal = False
    for ch in sql:
        if ch == "'":
            in_literal = not in_literal
            rewritten.append(ch)
        elif ch == "?" and not in_literal:
            rewritten.append(marker(index))
            index += 1
        else:
            rewritten.append(ch)
    return "".join(rewritten)


def _query_error(descriptor: QueryDescriptor, exc: Exception) -> QueryError:
    error = QueryError(f"Query '{descriptor.name}' failed: {exc}", cause=exc)
    error.with_context(query=descriptor.name, params=descriptor.params)
    return error


class DbApiQueryExecutor:
    """``QueryExecutor`` over a DB-API 2.0 connection.

    The connection is owned by the caller; this executor only opens and
    closes cursors.
    """

    def __init__(self, conn: Any, dialect: Dialect | None = None) -> None:
        self.conn = conn
        self.dialect: Dialect = dialect or SQLiteDialect()

    def query(self, descriptor: QueryDescriptor) -> Sequence[Row]:
        sql = rewrite_markers(descriptor.sql, self.dialect.placeholder)
        try:
            cursor = self.conn.cursor()
            try:
                cursor.execute(sql, descriptor.params)
                return [tuple(row) for row in cursor.fetchall()]
            finally:
                cursor.close()
        except Exception as exc:
            raise _query_error(descriptor, exc) from exc


class SQLAlchemyQueryExecutor:
    """``QueryExecutor`` over a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def query(self, descriptor: QueryDescriptor) -> Sequence[Row]:
        stmt = text(rewrite_markers(descriptor.sql, lambda i: f":p{i}"))
        bind = {f"p{i}": value for i, value in enumerate(descriptor.params)}
        try:
            with self.engine.connect() as conn:
                result = conn.execute(stmt, bind)
                return [tuple(row) for row in result.fetchall()]
        except Exception as exc:
            raise _query_error(descriptor, exc) from exc


__all__ = [
    "rewrite_markers",
    "DbApiQueryExecutor",
    "SQLAlchemyQueryExecutor",
]
