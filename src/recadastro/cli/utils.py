"""
CLI utility helpers - settings, executor lifecycle and output formatting.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from recadastro.core.connection import open_executor
from recadastro.core.errors import RecadastroError
from recadastro.core.logging import configure_logging
from recadastro.core.protocols import QueryExecutor
from recadastro.core.settings import RecadastroSettings, get_settings
from recadastro.resolution.models import CombinedResolution, Institution

console = Console()
err_console = Console(stderr=True)


# ── Settings / connection helpers ────────────────────────────────────────


def load_settings(database: str | None = None) -> RecadastroSettings:
    """Environment settings, with ``--database`` overriding the URL."""
    settings = get_settings()
    if database:
        settings = settings.model_copy(update={"database_url": database})
    return settings


def fail(error: RecadastroError) -> None:
    """Print a library error and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


@contextmanager
def connect(database: str | None = None) -> Iterator[tuple[QueryExecutor, RecadastroSettings]]:
    """Configure logging and yield an ``(executor, settings)`` pair for CLI commands."""
    settings = load_settings(database)
    configure_logging(level=settings.log_level, json_format=settings.json_logs)
    try:
        with open_executor(settings) as executor:
            yield executor, settings
    except RecadastroError as exc:
        fail(exc)


# ── Output helpers ───────────────────────────────────────────────────────


def output_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str, ensure_ascii=False))


def output_year(year: int, *, as_json: bool = False, title: str = "") -> None:
    """Render a resolved base year."""
    if as_json:
        output_json({"anobase": str(year)})
        return
    if title:
        console.print(f"[bold]{title}[/bold]")
    console.print(f"  [cyan]anobase[/cyan]: {year}")


def output_institutions(
    institutions: Sequence[Institution],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render institutions as a Rich table (or a JSON list)."""
    if as_json:
        output_json([inst.as_dict() for inst in institutions])
        return
    if not institutions:
        console.print("[dim]No institutions.[/dim]")
        return
    _print_table([inst.as_dict() for inst in institutions], title=title)


def output_resolution(resolution: CombinedResolution, *, as_json: bool = False, title: str = "") -> None:
    """Render a combined resolution in the legacy ``{instituicoes, anobase}`` shape."""
    if as_json:
        output_json(resolution.as_dict())
        return
    output_year(resolution.base_year, title=title)
    output_institutions(resolution.institutions, title="Instituições")


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*("" if v is None else str(v) for v in row.values()))
    console.print(table)


__all__ = [
    "console",
    "err_console",
    "load_settings",
    "connect",
    "fail",
    "output_json",
    "output_year",
    "output_institutions",
    "output_resolution",
]
