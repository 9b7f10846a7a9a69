"""
recadastro.core - primitives shared by the resolution layer.

Modules:
    temporal    DateWindow / MonthDay and the two base-year fallback windows
    coercion    to_int / to_long / to_str over raw column values
    cascade     guarded / first_present / first_nonempty / last_present
    protocols   QueryExecutor, QueryDescriptor, Row
    dialect     SQL fragments per backend (sqlite, postgresql, oracle, mssql)
    executors   DB-API and SQLAlchemy query executors
    repository  BaseRepository (query / query_single / table)
    errors      RecadastroError hierarchy
    result      Ok / Err / try_result
    logging     structlog configuration
    settings    RecadastroSettings (pydantic-settings)
    connection  engine factory and open_executor()
"""

from recadastro.core.coercion import to_int, to_long, to_str
from recadastro.core.errors import (
    AmbiguousResultError,
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    QueryError,
    RecadastroError,
    UnsupportedDatabaseError,
)
from recadastro.core.protocols import QueryDescriptor, QueryExecutor, Row
from recadastro.core.temporal import (
    SCHOOL_FALLBACK_WINDOW,
    USER_FALLBACK_WINDOW,
    DateWindow,
    MonthDay,
    fallback_year,
)

__all__ = [
    "to_int",
    "to_long",
    "to_str",
    "RecadastroError",
    "DatabaseError",
    "QueryError",
    "AmbiguousResultError",
    "DatabaseConnectionError",
    "ConfigError",
    "UnsupportedDatabaseError",
    "QueryDescriptor",
    "QueryExecutor",
    "Row",
    "DateWindow",
    "MonthDay",
    "fallback_year",
    "USER_FALLBACK_WINDOW",
    "SCHOOL_FALLBACK_WINDOW",
]
