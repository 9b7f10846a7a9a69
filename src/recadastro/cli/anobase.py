"""
CLI: ``recadastro anobase`` - base-year resolution for a user or a school.
"""

from __future__ import annotations

import typer

from recadastro.cli.utils import connect, output_year
from recadastro.resolution.facade import ResolutionFacade

app = typer.Typer(no_args_is_help=True)


@app.command()
def usuario(
    codigo: int | None = typer.Option(None, "--codigo", "-c", help="User code (usuarios.codigo)"),
    database: str | None = typer.Option(None, "--database", "-d", help="SQLAlchemy database URL"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Base year for a user; falls back to the Nov 7 window."""
    with connect(database) as (executor, settings):
        facade = ResolutionFacade.from_executor(executor, settings=settings)
        year = facade.anobase.resolve_for_user(codigo)
    output_year(year, as_json=json_out, title=f"Usuário {codigo}")


@app.command()
def escola(
    codigo: int | None = typer.Option(None, "--codigo", "-c", help="School code (cod_escola)"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Base year for a school; global parameter, then school parameters, then the Nov 17 window."""
    with connect(database) as (executor, settings):
        facade = ResolutionFacade.from_executor(executor, settings=settings)
        year = facade.anobase.resolve_for_school(codigo)
    output_year(year, as_json=json_out, title=f"Escola {codigo}")
