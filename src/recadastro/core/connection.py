"""Engine factory for the legacy database.

The resolution core never opens connections itself; the caller builds an
engine here, wraps it in an executor and disposes of it when done:

::

    from recadastro.core.connection import open_executor

    with open_executor(settings) as executor:
        facade = ResolutionFacade.from_executor(executor, settings=settings)
        facade.resolve("9999", 42)
    # engine disposed here, on every exit path

Supported URLs are anything SQLAlchemy accepts whose backend has a dialect
in :mod:`recadastro.core.dialect` (``oracle``, ``mssql``, ``postgresql``,
``sqlite``).

SQLite has no schemas, so when ``legacy_schema`` is set a second database is
attached under that name on every new connection: another in-memory
database for ``sqlite:///:memory:``, or a sibling file
``<name>_<schema>.db`` next to a file database.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from recadastro.core.errors import DatabaseConnectionError, RecadastroError
from recadastro.core.executors import SQLAlchemyQueryExecutor
from recadastro.core.logging import get_logger
from recadastro.core.settings import RecadastroSettings

logger = get_logger(__name__)


def _sqlite_attach_target(database: str | None, schema: str) -> str:
    if not database or database == ":memory:":
        return ":memory:"
    path = Path(database)
    return str(path.with_name(f"{path.stem}_{schema}.db"))


def create_engine_from_settings(settings: RecadastroSettings, **kwargs: Any) -> Engine:
    """Create a SQLAlchemy engine for the configured legacy database.

    Raises:
        UnsupportedDatabaseError: If the backend has no known dialect.
    """
    settings.dialect()
    url = settings.sqlalchemy_url()

    if url.get_backend_name() != "sqlite":
        return create_engine(url, echo=settings.echo_sql, **kwargs)

    kwargs.setdefault("connect_args", {"check_same_thread": False})
    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise every checkout sees an empty database.
        kwargs.setdefault("poolclass", StaticPool)
    engine = create_engine(url, echo=settings.echo_sql, **kwargs)

    schema = settings.legacy_schema
    if schema:
        target = _sqlite_attach_target(url.database, schema)

        @event.listens_for(engine, "connect")
        def _attach_legacy_schema(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute(f"ATTACH DATABASE ? AS {schema}", (target,))
            cursor.close()

    return engine


@contextmanager
def open_executor(settings: RecadastroSettings) -> Iterator[SQLAlchemyQueryExecutor]:
    """Yield an executor bound to a fresh engine; dispose the engine afterwards.

    Raises:
        UnsupportedDatabaseError: If the backend has no known dialect.
        DatabaseConnectionError: If the engine cannot be created.
    """
    try:
        engine = create_engine_from_settings(settings)
    except RecadastroError:
        raise
    except Exception as exc:
        logger.error("database.engine_failed", error=str(exc))
        raise DatabaseConnectionError("Could not create legacy database engine", cause=exc) from exc

    try:
        yield SQLAlchemyQueryExecutor(engine)
    finally:
        engine.dispose()


__all__ = [
    "create_engine_from_settings",
    "open_executor",
]
