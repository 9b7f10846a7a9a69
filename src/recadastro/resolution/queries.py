"""SQL for the legacy recadastramento tables.

Each builder returns a :class:`QueryDescriptor` with ``?`` markers. Table
names arrive already schema-qualified (see ``BaseRepository.table``);
backend differences come from the :class:`Dialect`.

Tables read:

================================  ==============================================
``usuarios``                      per-user ``anobase`` and ``login``
``instituicoes``                  canonical institutions per ``usuario_login``
``parametros_sis_digitacao``      global base-year parameter (``status = 1``)
``parametros_sis_digitacao_ind``  per-school base-year parameters with validity
``alu_mec_tacom``                 legacy student/title table (institution source)
================================  ==============================================
"""

from __future__ import annotations

from datetime import date

from recadastro.core.dialect import Dialect
from recadastro.core.protocols import QueryDescriptor

USERS_TABLE = "usuarios"
INSTITUTIONS_TABLE = "instituicoes"
GLOBAL_PARAMETERS_TABLE = "parametros_sis_digitacao"
SCHOOL_PARAMETERS_TABLE = "parametros_sis_digitacao_ind"
LEGACY_TITLES_TABLE = "alu_mec_tacom"

# Security codes of exactly this length are state-level; shorter ones are municipal.
STATE_CODE_LENGTH = 7


def user_base_year(user_code: int) -> QueryDescriptor:
    return QueryDescriptor(
        name="usuario.anobase",
        sql=f"SELECT anobase FROM {USERS_TABLE} WHERE codigo = ?",
        params=(user_code,),
    )


def user_login(user_code: int) -> QueryDescriptor:
    return QueryDescriptor(
        name="usuario.login",
        sql=f"SELECT login FROM {USERS_TABLE} WHERE codigo = ?",
        params=(user_code,),
    )


def global_parameter(table: str) -> QueryDescriptor:
    return QueryDescriptor(
        name="parametros.global",
        sql=f"SELECT COALESCE(par.ano_base, 0) FROM {table} par WHERE par.status = 1",
    )


def school_parameters(table: str, dialect: Dialect, school_code: int | None, today: date) -> QueryDescriptor:
    """Active per-school rows valid on ``today``, oldest movement first."""
    bound = dialect.bind_date(today)
    return QueryDescriptor(
        name="parametros.escola",
        sql=(
            f"SELECT pi.ano_base FROM {table} pi "
            "WHERE pi.status = 1 "
            "AND pi.dt_ini_parametro <= ? "
            "AND pi.dt_fim_parametro >= ? "
            "AND pi.cod_escola = ? "
            "ORDER BY pi.data_movimeto_par ASC"
        ),
        params=(bound, bound, school_code),
    )


def institutions_by_login(login: str) -> QueryDescriptor:
    return QueryDescriptor(
        name="instituicoes.por_login",
        sql=f"SELECT id, nome, estado, municipio FROM {INSTITUTIONS_TABLE} WHERE usuario_login = ?",
        params=(login,),
    )


def legacy_institutions(table: str, dialect: Dialect, *, state_level: bool) -> QueryDescriptor:
    """Titled, non-excluded rows of the legacy table at state or municipal level."""
    comparison = "=" if state_level else "<"
    return QueryDescriptor(
        name="instituicoes.legado_estadual" if state_level else "instituicoes.legado_municipal",
        sql=(
            f"SELECT codigosec, nome, bairro FROM {table} "
            f"WHERE {dialect.length('codigosec')} {comparison} {STATE_CODE_LENGTH} "
            "AND cod_titular IS NOT NULL "
            "AND ano_base_exclusao IS NULL "
            "ORDER BY codigosec ASC"
        ),
    )


__all__ = [
    "USERS_TABLE",
    "INSTITUTIONS_TABLE",
    "GLOBAL_PARAMETERS_TABLE",
    "SCHOOL_PARAMETERS_TABLE",
    "LEGACY_TITLES_TABLE",
    "STATE_CODE_LENGTH",
    "user_base_year",
    "user_login",
    "global_parameter",
    "school_parameters",
    "institutions_by_login",
    "legacy_institutions",
]
