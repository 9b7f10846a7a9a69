"""Tests for the resolution value records."""

from __future__ import annotations

import dataclasses

import pytest

from recadastro.resolution.models import BaseYearQuery, CombinedResolution, Institution


class TestInstitution:
    def test_from_mapping(self) -> None:
        inst = Institution.from_mapping({"id": "3304557", "nome": "Colégio", "estado": None, "municipio": 7})
        assert inst == Institution(3304557, "Colégio", None, "7")

    def test_from_mapping_missing_keys(self) -> None:
        assert Institution.from_mapping({}) == Institution()

    def test_as_dict(self) -> None:
        assert Institution(1, "A").as_dict() == {"id": 1, "nome": "A", "estado": None, "municipio": None}

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Institution(1).nome = "B"  # type: ignore[misc]


class TestCombinedResolution:
    def test_year_as_text(self) -> None:
        assert CombinedResolution((), 2026).as_dict() == {"instituicoes": [], "anobase": "2026"}


class TestBaseYearQuery:
    def test_defaults(self) -> None:
        assert BaseYearQuery() == BaseYearQuery(user_code=None, school_code=None)
