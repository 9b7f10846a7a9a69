"""
Root Typer application for the recadastro CLI.

Every command opens the configured legacy database, runs one resolution and
prints it. No resolution logic lives here.
"""

from __future__ import annotations

import typer
from typer import Typer

from recadastro import __version__
from recadastro.cli.anobase import app as anobase_app
from recadastro.cli.utils import connect, output_institutions, output_resolution
from recadastro.resolution.facade import ResolutionFacade
from recadastro.resolution.users import UserLookup

app = Typer(
    name="recadastro",
    help="recadastro - institutions and base year from the legacy recadastramento tables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"recadastro {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """recadastro CLI - resolve institutions and base year."""


# ── Commands ─────────────────────────────────────────────────────────────

app.add_typer(anobase_app, name="anobase", help="Base-year resolution.")


@app.command()
def instituicoes(
    login: str | None = typer.Option(None, "--login", "-l", help="Login (\"9999\" for state level)"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Institutions visible to a login."""
    with connect(database) as (executor, settings):
        facade = ResolutionFacade.from_executor(executor, settings=settings)
        institutions = facade.institutions.resolve(login)
    output_institutions(institutions, as_json=json_out, title=f"Instituições ({login})")


@app.command()
def sessao(
    login: str | None = typer.Option(None, "--login", "-l", help="Login; looked up from --codigo when omitted"),
    codigo: int | None = typer.Option(None, "--codigo", "-c", help="User code"),
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Institutions and base year for a session, in the legacy response shape."""
    with connect(database) as (executor, settings):
        facade = ResolutionFacade.from_executor(executor, settings=settings)
        if login is None:
            login = UserLookup(executor, settings.dialect()).find_login(codigo)
        resolution = facade.resolve(login, codigo)
    output_resolution(resolution, as_json=json_out, title=f"Sessão {login}")
