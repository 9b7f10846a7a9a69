"""Tests for the recadastro error hierarchy."""

from __future__ import annotations

import pytest

from recadastro.core.errors import (
    AmbiguousResultError,
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    QueryError,
    RecadastroError,
    UnsupportedDatabaseError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error,parents",
        [
            (QueryError("x"), (DatabaseError, RecadastroError)),
            (AmbiguousResultError("q", 2), (QueryError, DatabaseError)),
            (DatabaseConnectionError("x"), (DatabaseError,)),
            (UnsupportedDatabaseError("db2"), (ConfigError, RecadastroError)),
        ],
    )
    def test_isinstance(self, error: RecadastroError, parents: tuple[type, ...]) -> None:
        for parent in parents:
            assert isinstance(error, parent)

    def test_default_categories(self) -> None:
        assert RecadastroError("x").category is ErrorCategory.INTERNAL
        assert QueryError("x").category is ErrorCategory.DATABASE
        assert ConfigError("x").category is ErrorCategory.CONFIG

    def test_explicit_category(self) -> None:
        assert RecadastroError("x", category=ErrorCategory.VALIDATION).category is ErrorCategory.VALIDATION


class TestCause:
    def test_chained(self) -> None:
        cause = ConnectionError("ORA-12541: TNS:no listener")
        error = DatabaseConnectionError("legacy database unreachable", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause


class TestContext:
    def test_with_context_known_and_metadata(self) -> None:
        error = QueryError("failed").with_context(query="usuario.anobase", table="usuarios", attempt=2)

        assert error.context.query == "usuario.anobase"
        assert error.context.table == "usuarios"
        assert error.context.metadata == {"attempt": 2}

    def test_empty_context_dict(self) -> None:
        assert ErrorContext().to_dict() == {}


class TestToDict:
    def test_ambiguous(self) -> None:
        data = AmbiguousResultError("usuario.anobase", 3).to_dict()

        assert data["error_type"] == "AmbiguousResultError"
        assert data["category"] == "DATABASE"
        assert data["context"] == {"query": "usuario.anobase", "metadata": {"row_count": 3}}
        assert "3" in data["message"]

    def test_cause_rendered(self) -> None:
        data = QueryError("failed", cause=ValueError("bad")).to_dict()
        assert data["cause"] == "ValueError: bad"

    def test_unsupported_backend(self) -> None:
        error = UnsupportedDatabaseError("db2")
        assert error.backend == "db2"
        assert error.to_dict()["context"] == {"metadata": {"backend": "db2"}}

    def test_repr(self) -> None:
        assert repr(ConfigError("bad url")) == "ConfigError('bad url', category=CONFIG)"
