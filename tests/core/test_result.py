"""Tests for the Ok / Err result envelope."""

from __future__ import annotations

import pytest

from recadastro.core.errors import QueryError
from recadastro.core.result import Err, Ok, from_optional, try_result


class TestOk:
    def test_accessors(self) -> None:
        result = Ok(2025)
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 2025
        assert result.unwrap_or(0) == 2025

    def test_map(self) -> None:
        assert Ok(2025).map(str) == Ok("2025")

    def test_to_dict(self) -> None:
        assert Ok(1).to_dict() == {"ok": True, "value": 1}


class TestErr:
    def test_accessors(self) -> None:
        result: Err[int] = Err(ValueError("bad"))
        assert result.is_err()
        assert result.unwrap_or(0) == 0
        with pytest.raises(ValueError):
            result.unwrap()

    def test_map_is_noop(self) -> None:
        error = ValueError("bad")
        assert Err(error).map(str).error is error

    def test_to_dict_plain_exception(self) -> None:
        assert Err(ValueError("bad")).to_dict() == {
            "ok": False,
            "error": {"error_type": "ValueError", "message": "bad"},
        }

    def test_to_dict_library_error(self) -> None:
        data = Err(QueryError("failed")).to_dict()
        assert data["error"]["category"] == "DATABASE"


class TestTryResult:
    def test_success(self) -> None:
        assert try_result(lambda: 7) == Ok(7)

    def test_failure(self) -> None:
        result = try_result(lambda: int("abc"))
        assert isinstance(result, Err)
        assert isinstance(result.error, ValueError)


class TestFromOptional:
    def test_value(self) -> None:
        assert from_optional(3, LookupError("missing")) == Ok(3)

    def test_none(self) -> None:
        error = LookupError("missing")
        assert from_optional(None, error) == Err(error)
