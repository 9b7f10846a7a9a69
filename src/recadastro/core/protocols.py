"""
Protocol definitions for recadastro.

This module is the single source of truth for the one capability the
resolution core consumes from its environment: running a read query and
getting rows back.

Manifesto:
    Resolvers depend on shape, not implementation. Anything that can turn a
    :class:`QueryDescriptor` into a sequence of index-addressable rows is a
    valid executor: a DB-API connection wrapper, a SQLAlchemy engine
    wrapper, or a test double that records what it was asked.

Architecture:
    ::

        QueryExecutor Protocol:
        ┌────────────────────────────────────────────────────────┐
        │ query(descriptor) → Sequence[Row]                       │
        │ Row[index]        → raw value (numeric | text | None)   │
        └────────────────────────────────────────────────────────┘

        Implementations (recadastro.core.executors):
        ┌────────────────────────────────────────────────────────┐
        │ DbApiQueryExecutor      → sqlite3 / oracledb / pyodbc   │
        │ SQLAlchemyQueryExecutor → any SQLAlchemy Engine         │
        └────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Let a resolver import a database driver
    ✅ DO: Depend on QueryExecutor and build SQL with a Dialect

    ❌ DON'T: Put retry or timeout logic in an executor
    ✅ DO: Let the resolver's fallback policy absorb slow or failing queries

Tags:
    protocol, query-executor, database, contracts, recadastro
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# A result row: positional access to raw column values.
Row = Sequence[Any]


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    """A named, parameterised read query.

    ``sql`` uses ``?`` positional markers; executors translate them to their
    driver's parameter style. ``name`` identifies the query in logs and
    error context (e.g. ``"usuario.anobase"``).
    """

    name: str
    sql: str
    params: tuple[Any, ...] = ()


@runtime_checkable
class QueryExecutor(Protocol):
    """Minimal synchronous read-only query capability.

    Implementations may raise any exception; callers in the resolution
    layer convert every failure into "no rows".
    """

    def query(self, descriptor: QueryDescriptor) -> Sequence[Row]:
        """Execute ``descriptor`` and return all rows."""
        ...


__all__ = [
    "Row",
    "QueryDescriptor",
    "QueryExecutor",
]
