"""
recadastro - fallback-cascade resolution over the legacy recadastramento tables.

Packages:
    recadastro.core        coercion, date windows, cascades, executors, settings, logging
    recadastro.resolution  AnoBaseResolver, InstitutionResolver, ResolutionFacade
    recadastro.cli         ``recadastro`` command line
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
