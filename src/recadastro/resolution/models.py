"""Value records produced and consumed by the resolvers.

All records are frozen and built per call. ``Institution`` keeps degenerate
rows (every field ``None``): the legacy screens preferred a sparse entry to
a missing one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from recadastro.core.coercion import to_long, to_str


@dataclass(frozen=True, slots=True)
class Institution:
    """An institution visible to a login."""

    id: int | None = None
    nome: str | None = None
    estado: str | None = None
    municipio: str | None = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> Institution:
        """Build from a key-value row; ``id`` goes through ``to_long``."""
        return cls(
            id=to_long(row.get("id")),
            nome=to_str(row.get("nome")),
            estado=to_str(row.get("estado")),
            municipio=to_str(row.get("municipio")),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class BaseYearQuery:
    """Selector for a base-year resolution (user code or school code)."""

    user_code: int | None = None
    school_code: int | None = None


@dataclass(frozen=True, slots=True)
class InstitutionQuery:
    login: str | None = None


@dataclass(frozen=True, slots=True)
class CombinedResolution:
    """Institutions and base year for one login/user pair."""

    institutions: tuple[Institution, ...] = field(default_factory=tuple)
    base_year: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Legacy session shape: ``{"instituicoes": [...], "anobase": "2025"}``."""
        return {
            "instituicoes": [inst.as_dict() for inst in self.institutions],
            "anobase": str(self.base_year),
        }


__all__ = [
    "Institution",
    "BaseYearQuery",
    "InstitutionQuery",
    "CombinedResolution",
]
