"""Settings for the legacy recadastramento database.

Configuration is environment-driven (prefix ``RECADASTRO_``) with ``.env``
support through pydantic-settings. The legacy application chose between an
Oracle and a SQL Server datasource with a ``tipobanco`` switch and separate
user/password properties; here the backend is part of the SQLAlchemy URL and
the credentials can still be supplied separately.

Fields
──────
database_url       : SQLAlchemy URL (``oracle+oracledb://host/svc``, ``mssql+pyodbc://...``)
database_user      : Overrides the URL username
database_password  : Overrides the URL password
legacy_schema      : Schema that holds the legacy tables (``alunos``); "" for none
log_level          : structlog log level
json_logs          : JSON logs (True), console (False), auto-detect (None)
echo_sql           : Echo SQL through SQLAlchemy

Examples:
    >>> s = RecadastroSettings(database_url="oracle+oracledb://legado:1521/?service_name=SIS")
    >>> s.database_backend
    'oracle'
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from recadastro.core.dialect import Dialect, get_dialect

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class RecadastroSettings(BaseSettings):
    """Settings for the resolution core and its CLI."""

    model_config = SettingsConfigDict(
        env_prefix="RECADASTRO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Legacy datasource ────────────────────────────────────────
    database_url: str = "sqlite:///:memory:"
    database_user: str | None = None
    database_password: SecretStr | None = None
    legacy_schema: str = Field(
        default="alunos",
        description="Schema prefix of the legacy tables",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    echo_sql: bool = False

    @field_validator("legacy_schema")
    @classmethod
    def _schema_is_identifier(cls, value: str) -> str:
        # Interpolated into SQL text, never bound.
        if value and not _IDENTIFIER.fullmatch(value):
            raise ValueError(f"legacy_schema must be a plain SQL identifier, got {value!r}")
        return value

    def sqlalchemy_url(self) -> URL:
        """The database URL with credential overrides applied."""
        url = make_url(self.database_url)
        if self.database_user:
            url = url.set(username=self.database_user)
        if self.database_password is not None:
            url = url.set(password=self.database_password.get_secret_value())
        return url

    @property
    def database_backend(self) -> str:
        """Backend name from the URL (``oracle``, ``mssql``, ``sqlite``...)."""
        return make_url(self.database_url).get_backend_name()

    def dialect(self) -> Dialect:
        """SQL dialect for the configured backend.

        Raises:
            UnsupportedDatabaseError: For a backend without a known dialect.
        """
        return get_dialect(self.database_backend)


@lru_cache(maxsize=1)
def get_settings() -> RecadastroSettings:
    """Process-wide settings, read once from the environment."""
    return RecadastroSettings()


__all__ = [
    "RecadastroSettings",
    "get_settings",
]
