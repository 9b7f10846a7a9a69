"""
Shared pytest fixtures for recadastro tests.

This module provides:
- A pinned clock for deterministic base-year fallbacks
- ``FakeExecutor``: scripted rows / failures per query name, with a call log
- SQLite databases laid out like the legacy schema (``alunos`` attached)

Usage:
    def test_something(make_executor, clock):
        executor = make_executor({"usuario.anobase": [(2024,)]})
        ...
"""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Callable, Iterator, Mapping, Sequence
from datetime import date
from typing import Any

import pytest
import structlog
from sqlalchemy.engine import Engine

from recadastro.core.connection import create_engine_from_settings
from recadastro.core.executors import DbApiQueryExecutor, SQLAlchemyQueryExecutor
from recadastro.core.protocols import QueryDescriptor, Row
from recadastro.core.settings import RecadastroSettings, get_settings

# Inside neither fallback window.
MID_YEAR = date(2025, 3, 10)
# Inside the user window (from Nov 7) but not the school window (from Nov 17).
EARLY_NOVEMBER = date(2025, 11, 10)
# Inside both windows.
LATE_NOVEMBER = date(2025, 11, 20)


# =============================================================================
# Fake executor
# =============================================================================


class FakeExecutor:
    """``QueryExecutor`` returning scripted rows keyed by descriptor name.

    A response that is an exception instance is raised instead of returned.
    Unscripted queries return no rows.
    """

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[QueryDescriptor] = []

    def query(self, descriptor: QueryDescriptor) -> Sequence[Row]:
        self.calls.append(descriptor)
        response = self.responses.get(descriptor.name, [])
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def names(self) -> list[str]:
        return [call.name for call in self.calls]


@pytest.fixture
def make_executor() -> Callable[..., FakeExecutor]:
    """Factory fixture: ``make_executor({"query.name": rows_or_exception})``."""
    return FakeExecutor


@pytest.fixture
def clock() -> Callable[[], date]:
    """Clock pinned to a mid-year date (no fallback window applies)."""
    return lambda: MID_YEAR


# =============================================================================
# Legacy schema on SQLite
# =============================================================================

# Untyped columns keep whatever Python type is inserted, like the legacy
# columns that hold numbers in one database and text in another.
LEGACY_DDL = (
    "CREATE TABLE usuarios (codigo INTEGER, login TEXT, anobase)",
    "CREATE TABLE instituicoes (id, nome TEXT, estado TEXT, municipio TEXT, usuario_login TEXT)",
    "CREATE TABLE alunos.parametros_sis_digitacao (ano_base, status INTEGER)",
    "CREATE TABLE alunos.parametros_sis_digitacao_ind ("
    " ano_base, status INTEGER, dt_ini_parametro TEXT, dt_fim_parametro TEXT,"
    " cod_escola INTEGER, data_movimeto_par TEXT)",
    "CREATE TABLE alunos.alu_mec_tacom (codigosec, nome TEXT, bairro TEXT, cod_titular, ano_base_exclusao)",
)


def create_legacy_schema(execute: Callable[[str], Any]) -> None:
    for statement in LEGACY_DDL:
        execute(statement)


@pytest.fixture
def legacy_conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection with ``alunos`` attached and the legacy tables created."""
    conn = sqlite3.connect(":memory:")
    conn.execute("ATTACH DATABASE ':memory:' AS alunos")
    create_legacy_schema(conn.execute)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def dbapi_executor(legacy_conn: sqlite3.Connection) -> DbApiQueryExecutor:
    return DbApiQueryExecutor(legacy_conn)


@pytest.fixture
def memory_settings() -> RecadastroSettings:
    return RecadastroSettings(database_url="sqlite:///:memory:", legacy_schema="alunos")


@pytest.fixture
def legacy_engine(memory_settings: RecadastroSettings) -> Iterator[Engine]:
    """SQLAlchemy engine over an in-memory database with the legacy tables."""
    engine = create_engine_from_settings(memory_settings)
    raw = engine.raw_connection()
    try:
        cursor = raw.cursor()
        create_legacy_schema(cursor.execute)
        cursor.close()
        raw.commit()
    finally:
        raw.close()
    yield engine
    engine.dispose()


@pytest.fixture
def sqlalchemy_executor(legacy_engine: Engine) -> SQLAlchemyQueryExecutor:
    return SQLAlchemyQueryExecutor(legacy_engine)


def _insert_rows(engine_or_conn: Any, table: str, rows: Sequence[tuple]) -> None:
    """Insert positional rows into ``table`` through a DB-API or SQLAlchemy handle."""
    if not rows:
        return
    marks = ", ".join("?" for _ in rows[0])
    sql = f"INSERT INTO {table} VALUES ({marks})"
    if isinstance(engine_or_conn, Engine):
        raw = engine_or_conn.raw_connection()
        try:
            raw.cursor().executemany(sql, rows)
            raw.commit()
        finally:
            raw.close()
    else:
        engine_or_conn.executemany(sql, rows)
        engine_or_conn.commit()


@pytest.fixture
def insert_rows() -> Callable[[Any, str, Sequence[tuple]], None]:
    """``insert_rows(handle, "alunos.alu_mec_tacom", [(...), ...])``."""
    return _insert_rows


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh settings cache, no stray RECADASTRO_* env, default structlog config."""
    for key in list(os.environ):
        if key.startswith("RECADASTRO_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
