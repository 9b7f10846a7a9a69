"""
CLI layer for recadastro.

Provides a Typer application whose commands delegate to
:mod:`recadastro.resolution`. This package handles only terminal transport:
argument parsing, coloured output and table formatting.

Entry point::

    recadastro --help
"""

from recadastro.cli.app import app

__all__ = ["app"]
