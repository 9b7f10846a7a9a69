"""
recadastro.resolution - the fallback cascades.

Modules:
    models        Institution, BaseYearQuery, InstitutionQuery, CombinedResolution
    queries       SQL for the legacy tables
    anobase       AnoBaseResolver (user and school paths)
    institutions  InstitutionResolver (primary table, legacy table)
    users         UserLookup (login by user code)
    session       legacy session attribute extraction
    facade        ResolutionFacade
"""

from recadastro.resolution.anobase import AnoBaseResolver
from recadastro.resolution.facade import ResolutionFacade
from recadastro.resolution.institutions import STATE_LEVEL_LOGIN, InstitutionResolver
from recadastro.resolution.models import (
    BaseYearQuery,
    CombinedResolution,
    Institution,
    InstitutionQuery,
)
from recadastro.resolution.session import extract_user_code
from recadastro.resolution.users import UserLookup

__all__ = [
    "AnoBaseResolver",
    "InstitutionResolver",
    "ResolutionFacade",
    "UserLookup",
    "STATE_LEVEL_LOGIN",
    "Institution",
    "BaseYearQuery",
    "InstitutionQuery",
    "CombinedResolution",
    "extract_user_code",
]
