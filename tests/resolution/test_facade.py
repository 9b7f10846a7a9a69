"""Tests for ResolutionFacade."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

from recadastro.core.dialect import OracleDialect
from recadastro.core.settings import RecadastroSettings
from recadastro.resolution.facade import ResolutionFacade
from recadastro.resolution.models import CombinedResolution, Institution

MID_YEAR = date(2025, 3, 10)
LATE_NOVEMBER = date(2025, 11, 20)


def facade(executor, today: date = MID_YEAR, **kwargs) -> ResolutionFacade:
    return ResolutionFacade.from_executor(executor, clock=lambda: today, **kwargs)


class TestResolve:
    def test_combines_both(self, make_executor) -> None:
        executor = make_executor(
            {
                "instituicoes.por_login": [(1, "Escola A", "RJ", "Niterói")],
                "usuario.anobase": [(2024,)],
            }
        )

        result = facade(executor).resolve("0001", 10)

        assert result == CombinedResolution(institutions=(Institution(1, "Escola A", "RJ", "Niterói"),), base_year=2024)

    def test_nothing_found(self, make_executor) -> None:
        result = facade(make_executor(), LATE_NOVEMBER).resolve(None, None)
        assert result == CombinedResolution(institutions=(), base_year=2026)

    def test_paths_independent(self, make_executor) -> None:
        executor = make_executor(
            {
                "instituicoes.por_login": RuntimeError("down"),
                "instituicoes.legado_municipal": RuntimeError("down"),
                "usuario.anobase": [(2024,)],
            }
        )
        assert facade(executor).resolve("0001", 10) == CombinedResolution((), 2024)

    def test_outer_net_when_resolvers_raise(self) -> None:
        institutions = MagicMock()
        institutions.resolve.side_effect = RuntimeError("bug")
        anobase = MagicMock()
        anobase.resolve_for_user.side_effect = RuntimeError("bug")

        result = ResolutionFacade(institutions, anobase, clock=lambda: LATE_NOVEMBER).resolve("0001", 10)

        # Current calendar year, not the fallback window.
        assert result == CombinedResolution((), 2025)

    def test_outer_net_when_year_not_int(self) -> None:
        institutions = MagicMock()
        institutions.resolve.return_value = []
        anobase = MagicMock()
        anobase.resolve_for_user.return_value = None

        result = ResolutionFacade(institutions, anobase, clock=lambda: MID_YEAR).resolve("0001", 10)

        assert result.base_year == 2025

    def test_as_dict_legacy_shape(self, make_executor) -> None:
        executor = make_executor({"instituicoes.por_login": [(1, "A", "RJ", "Rio")], "usuario.anobase": [(2024,)]})

        assert facade(executor).resolve("0001", 10).as_dict() == {
            "instituicoes": [{"id": 1, "nome": "A", "estado": "RJ", "municipio": "Rio"}],
            "anobase": "2024",
        }


class TestResolveAttributes:
    def test_mapping_user_info(self, make_executor) -> None:
        executor = make_executor({"usuario.anobase": [(2024,)]})

        result = facade(executor).resolve_attributes({"login": "0001", "informacoesusuario": {"codigo": "10"}})

        assert result.base_year == 2024
        assert executor.calls[0].params == ("0001",)
        assert [c for c in executor.calls if c.name == "usuario.anobase"][0].params == (10,)

    def test_numeric_login_stringified(self, make_executor) -> None:
        executor = make_executor()
        facade(executor).resolve_attributes({"login": 9999, "informacoesusuario": 10})
        assert executor.calls[0].params == ("9999",)

    def test_missing_attributes(self, make_executor) -> None:
        executor = make_executor()
        result = facade(executor, LATE_NOVEMBER).resolve_attributes({})
        assert result == CombinedResolution((), 2026)
        assert executor.calls == []


class TestFromExecutor:
    def test_defaults(self, make_executor) -> None:
        f = ResolutionFacade.from_executor(make_executor())
        assert f.anobase.schema == "alunos"
        assert f.institutions.dialect.name == "sqlite"

    def test_settings(self, make_executor) -> None:
        settings = RecadastroSettings(
            _env_file=None, database_url="mssql+pyodbc://legado/x?driver=ODBC", legacy_schema="legado"
        )
        f = ResolutionFacade.from_executor(make_executor(), settings=settings)
        assert f.institutions.dialect.name == "mssql"
        assert f.anobase.table("parametros_sis_digitacao") == "legado.parametros_sis_digitacao"

    def test_explicit_args_win(self, make_executor) -> None:
        settings = RecadastroSettings(_env_file=None, legacy_schema="legado")
        f = ResolutionFacade.from_executor(make_executor(), settings=settings, dialect=OracleDialect(), schema="")
        assert f.anobase.dialect.name == "oracle"
        assert f.institutions.table("alu_mec_tacom") == "alu_mec_tacom"

    def test_end_to_end_sqlite(self, sqlalchemy_executor, legacy_engine, insert_rows) -> None:
        insert_rows(legacy_engine, "usuarios", [(10, "0001", "2024")])
        insert_rows(legacy_engine, "alunos.alu_mec_tacom", [("330455", "Escola Municipal", "Fonseca", 1, None)])

        result = facade(sqlalchemy_executor).resolve("0001", 10)

        assert result.as_dict() == {
            "instituicoes": [{"id": 330455, "nome": "Escola Municipal", "estado": None, "municipio": "Fonseca"}],
            "anobase": "2024",
        }
