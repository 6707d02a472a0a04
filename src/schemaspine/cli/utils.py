"""
CLI utility helpers: settings overrides, resolver wiring and output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from schemaspine.config import ResolverSettings, get_settings
from schemaspine.errors import SchemaSpineError
from schemaspine.resolver import (
    DbApiScriptExecutorFactory,
    ResolvedMigration,
    SqlMigrationResolver,
    SqlScriptFactory,
)
from schemaspine.resource import FileSystemResourceProvider

console = Console()
err_console = Console(stderr=True)


# ── Settings / wiring ────────────────────────────────────────────────────


def parse_placeholders(values: list[str] | None) -> dict[str, str]:
    """Turn ``["key=value", ...]`` into a dict."""
    placeholders: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--placeholder")
        placeholders[key] = value
    return placeholders


def build_settings(
    locations: list[Path] | None = None,
    placeholders: dict[str, str] | None = None,
    placeholder_replacement: bool | None = None,
) -> ResolverSettings:
    """Apply command-line overrides on top of the cached settings."""
    base = get_settings()
    overrides: dict[str, Any] = {}
    if locations:
        overrides["locations"] = tuple(locations)
    if placeholders:
        overrides["placeholders"] = {**base.placeholders, **placeholders}
    if placeholder_replacement is not None:
        overrides["placeholder_replacement"] = placeholder_replacement
    if not overrides:
        return base
    return ResolverSettings(**{**base.model_dump(), **overrides})


def build_resolver(settings: ResolverSettings) -> SqlMigrationResolver:
    provider = FileSystemResourceProvider(settings.locations, encoding=settings.encoding)
    return SqlMigrationResolver(
        provider,
        DbApiScriptExecutorFactory(),
        SqlScriptFactory(settings),
        settings,
    )


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: SchemaSpineError) -> None:
    """Print a schemaspine error to stderr and exit 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


def output_migrations(
    migrations: list[ResolvedMigration],
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    if as_json:
        console.print_json(json.dumps([m.to_dict() for m in migrations]))
        return

    if not migrations:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for column in ("Version", "Description", "Type", "Checksum", "Equivalent", "Script"):
        table.add_column(column, overflow="fold")
    for migration in migrations:
        table.add_row(
            str(migration.version) if migration.version is not None else "[dim]repeatable[/dim]",
            migration.description,
            migration.type.value,
            str(migration.checksum),
            "" if migration.equivalent_checksum is None else str(migration.equivalent_checksum),
            migration.script,
        )
    console.print(table)


def output_dict(data: dict[str, Any], *, as_json: bool = False, title: str = "") -> None:
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return
    if title:
        console.print(f"[bold]{title}[/bold]")
    for key, value in data.items():
        console.print(f"  [cyan]{key}[/cyan]: {value}")
