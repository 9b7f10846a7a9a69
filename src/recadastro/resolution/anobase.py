"""
Base-year (anobase) resolution.

The active base year must never be missing: every path that fails or finds
nothing ends in a value computed from today's date.

Architecture:
    ::

        resolve_for_user(user_code)
        ┌──────────────────────────────┐
        │ usuarios.anobase  (single)   │──present──▶ year
        └──────────────────────────────┘
                  │ absent / ambiguous / failed
                  ▼
        USER_FALLBACK_WINDOW (Nov 7 – Dec 31)

        resolve_for_school(school_code)
        ┌──────────────────────────────┐
        │ 1. global parameter (single) │  candidate = year or 0
        ├──────────────────────────────┤
        │ 2. school parameters valid   │  last non-null row overwrites
        │    today, by movement date   │  the candidate
        ├──────────────────────────────┤
        │ 3. candidate == 0 ?          │  SCHOOL_FALLBACK_WINDOW
        │                              │  (Nov 17 – Dec 31)
        └──────────────────────────────┘

    Each school stage is isolated: a failure in stage 1 still runs stage 2.

A stored year of exactly ``0`` is indistinguishable from "not configured" in
the school path and falls through to the computed default, as the legacy
system did.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

from recadastro.core.cascade import first_present, guarded, last_present
from recadastro.core.coercion import to_int
from recadastro.core.dialect import Dialect
from recadastro.core.logging import get_logger
from recadastro.core.protocols import QueryExecutor
from recadastro.core.repository import BaseRepository
from recadastro.core.temporal import SCHOOL_FALLBACK_WINDOW, USER_FALLBACK_WINDOW, Clock
from recadastro.resolution import queries
from recadastro.resolution.models import BaseYearQuery

logger = get_logger(__name__)

UNSET_YEAR = 0


class AnoBaseResolver(BaseRepository):
    """Resolves the base year for a user or a school. Every public method is total."""

    def __init__(
        self,
        executor: QueryExecutor,
        dialect: Dialect | None = None,
        schema: str = "",
        clock: Clock = date.today,
    ) -> None:
        super().__init__(executor, dialect, schema)
        self.clock = clock

    def resolve(self, query: BaseYearQuery) -> int:
        """Dispatch to one path: the user code wins when both codes are given."""
        if query.user_code is None and query.school_code is not None:
            return self.resolve_for_school(query.school_code)
        return self.resolve_for_user(query.user_code)

    # -- user path ---------------------------------------------------------

    def resolve_for_user(self, user_code: int | None) -> int:
        today = self.clock()
        return first_present(
            lambda: guarded(
                lambda: self._stored_user_year(user_code),
                default=None,
                event="anobase.user_lookup_failed",
                user_code=user_code,
            ),
            lambda: USER_FALLBACK_WINDOW.fallback_year(today),
        )

    def _stored_user_year(self, user_code: int | None) -> int | None:
        if user_code is None:
            return None
        year = to_int(self.scalar(queries.user_base_year(user_code)))
        if year is None:
            logger.debug("anobase.user_year_absent", user_code=user_code)
        return year

    # -- school path -------------------------------------------------------

    def resolve_for_school(self, school_code: int | None) -> int:
        today = self.clock()

        candidate = guarded(
            self._global_year,
            default=UNSET_YEAR,
            event="anobase.global_parameter_failed",
        )
        candidate = guarded(
            lambda: last_present(self._school_years(school_code, today), initial=candidate),
            default=candidate,
            event="anobase.school_parameters_failed",
            school_code=school_code,
        )

        if candidate == UNSET_YEAR:
            candidate = SCHOOL_FALLBACK_WINDOW.fallback_year(today)
            logger.debug("anobase.school_fallback", school_code=school_code, year=candidate)
        return candidate

    def _global_year(self) -> int:
        table = self.table(queries.GLOBAL_PARAMETERS_TABLE)
        year = to_int(self.scalar(queries.global_parameter(table)))
        return UNSET_YEAR if year is None else year

    def _school_years(self, school_code: int | None, today: date) -> Iterator[int | None]:
        if school_code is None:
            return iter(())
        table = self.table(queries.SCHOOL_PARAMETERS_TABLE)
        rows = self.query(queries.school_parameters(table, self.dialect, school_code, today))
        return (to_int(row[0]) if len(row) else None for row in rows)


__all__ = [
    "AnoBaseResolver",
    "UNSET_YEAR",
]
