"""
Institution resolution for a login.

Two sources, tried in order; the first non-empty one wins::

    login ──▶ instituicoes (usuario_login = ?)        id, nome, estado, municipio
                │ empty / failed
                ▼
              alunos.alu_mec_tacom                    codigosec, nome, bairro
                login == "9999"  → LENGTH(codigosec) = 7  (state level)
                otherwise        → LENGTH(codigosec) < 7  (municipal level)
                │ empty / failed
                ▼
              ()

The legacy table is not filtered by login: any login other than the
state-level one sees every municipal row. Legacy rows carry no state, and
``bairro`` fills ``municipio``.
"""

from __future__ import annotations

from typing import Any

from recadastro.core.cascade import first_nonempty, guarded
from recadastro.core.coercion import to_long, to_str
from recadastro.core.protocols import Row
from recadastro.core.repository import BaseRepository
from recadastro.resolution import queries
from recadastro.resolution.models import Institution, InstitutionQuery

# The one login that sees state-level institutions. Compared exactly.
STATE_LEVEL_LOGIN = "9999"


def _column(row: Row, index: int) -> Any:
    return row[index] if index < len(row) else None


def institution_from_row(row: Row) -> Institution:
    """Map an ``(id, nome, estado, municipio)`` row."""
    return Institution(
        id=to_long(_column(row, 0)),
        nome=to_str(_column(row, 1)),
        estado=to_str(_column(row, 2)),
        municipio=to_str(_column(row, 3)),
    )


def institution_from_legacy_row(row: Row) -> Institution:
    """Map a ``(codigosec, nome, bairro)`` row of the legacy table."""
    return Institution(
        id=to_long(_column(row, 0)),
        nome=to_str(_column(row, 1)),
        estado=None,
        municipio=to_str(_column(row, 2)),
    )


class InstitutionResolver(BaseRepository):
    """Lists the institutions visible to a login. Never raises."""

    def resolve(self, login: str | None) -> tuple[Institution, ...]:
        if login is None:
            return ()
        return first_nonempty(
            lambda: guarded(
                lambda: self._primary(login),
                default=[],
                event="instituicoes.primary_failed",
                login=login,
            ),
            lambda: guarded(
                lambda: self._legacy(login),
                default=[],
                event="instituicoes.legacy_failed",
                login=login,
            ),
        )

    def resolve_query(self, query: InstitutionQuery) -> tuple[Institution, ...]:
        return self.resolve(query.login)

    def _primary(self, login: str) -> list[Institution]:
        rows = self.query(queries.institutions_by_login(login))
        return [institution_from_row(row) for row in rows]

    def _legacy(self, login: str) -> list[Institution]:
        descriptor = queries.legacy_institutions(
            self.table(queries.LEGACY_TITLES_TABLE),
            self.dialect,
            state_level=login == STATE_LEVEL_LOGIN,
        )
        return [institution_from_legacy_row(row) for row in self.query(descriptor)]


__all__ = [
    "InstitutionResolver",
    "STATE_LEVEL_LOGIN",
    "institution_from_row",
    "institution_from_legacy_row",
]
