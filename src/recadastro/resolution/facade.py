"""
ResolutionFacade - institutions and base year for one session.

The two resolutions are independent: a failure in one never changes the
other. Both resolvers are already total; the facade adds an outer net so
that even a programming error below still yields a usable answer (an empty
institution list, the current calendar year).

Examples:
    >>> facade = ResolutionFacade.from_executor(executor, settings=settings)
    >>> result = facade.resolve("9999", 42)
    >>> result.as_dict()
    {'instituicoes': [...], 'anobase': '2026'}

    From raw session attributes:

    >>> facade.resolve_attributes({"login": "0001", "informacoesusuario": {"codigo": "42"}})

Tags:
    facade, recadastro, anobase, instituicoes
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from recadastro.core.cascade import guarded
from recadastro.core.dialect import Dialect
from recadastro.core.logging import LogContext, get_logger
from recadastro.core.protocols import QueryExecutor
from recadastro.core.settings import RecadastroSettings
from recadastro.core.temporal import Clock
from recadastro.resolution.anobase import AnoBaseResolver
from recadastro.resolution.institutions import InstitutionResolver
from recadastro.resolution.models import CombinedResolution
from recadastro.resolution.session import (
    LOGIN_ATTRIBUTE,
    USER_INFO_ATTRIBUTE,
    extract_login,
    extract_user_code,
)

logger = get_logger(__name__)

DEFAULT_LEGACY_SCHEMA = "alunos"


class ResolutionFacade:
    """Combines :class:`InstitutionResolver` and :class:`AnoBaseResolver`."""

    def __init__(
        self,
        institutions: InstitutionResolver,
        anobase: AnoBaseResolver,
        clock: Clock = date.today,
    ) -> None:
        self.institutions = institutions
        self.anobase = anobase
        self.clock = clock

    @classmethod
    def from_executor(
        cls,
        executor: QueryExecutor,
        *,
        dialect: Dialect | None = None,
        schema: str | None = None,
        clock: Clock = date.today,
        settings: RecadastroSettings | None = None,
    ) -> ResolutionFacade:
        """Wire both resolvers over one executor.

        Explicit ``dialect`` and ``schema`` win over ``settings``; without
        either, the SQLite dialect and the ``alunos`` schema are used.
        """
        if settings is not None:
            dialect = dialect or settings.dialect()
            schema = settings.legacy_schema if schema is None else schema
        if schema is None:
            schema = DEFAULT_LEGACY_SCHEMA
        return cls(
            institutions=InstitutionResolver(executor, dialect, schema),
            anobase=AnoBaseResolver(executor, dialect, schema, clock=clock),
            clock=clock,
        )

    def resolve(self, login: str | None, user_code: int | None) -> CombinedResolution:
        with LogContext(login=login, user_code=user_code):
            institutions = guarded(
                lambda: tuple(self.institutions.resolve(login)),
                default=(),
                event="facade.institutions_failed",
            )
            base_year = guarded(
                lambda: self.anobase.resolve_for_user(user_code),
                default=None,
                event="facade.anobase_failed",
            )
            if not isinstance(base_year, int) or isinstance(base_year, bool):
                base_year = self.clock().year
                logger.debug("facade.anobase_current_year", year=base_year)

            logger.debug("facade.resolved", institutions=len(institutions), base_year=base_year)
            return CombinedResolution(institutions=institutions, base_year=base_year)

    def resolve_attributes(self, attributes: Mapping[str, Any]) -> CombinedResolution:
        """Resolve from legacy session attributes (``login``, ``informacoesusuario``)."""
        return self.resolve(
            extract_login(attributes.get(LOGIN_ATTRIBUTE)),
            extract_user_code(attributes.get(USER_INFO_ATTRIBUTE)),
        )


__all__ = [
    "ResolutionFacade",
    "DEFAULT_LEGACY_SCHEMA",
]
