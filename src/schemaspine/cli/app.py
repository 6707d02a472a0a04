"""
Root Typer application for the schemaspine CLI.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from schemaspine.cli.utils import (
    build_resolver,
    build_settings,
    fail,
    output_dict,
    output_migrations,
    parse_placeholders,
)
from schemaspine.enums import LogLevel
from schemaspine.errors import SchemaSpineError
from schemaspine.logging import configure_logging
from schemaspine.resolver import ResourceNameParser, is_sql_callback

app = Typer(
    name="schemaspine",
    help="schemaspine: resolve SQL migration scripts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from schemaspine import __version__

        typer.echo(f"schemaspine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level", case_sensitive=False, help="Log level for stderr logging."
    ),
) -> None:
    """schemaspine CLI: inspect how migration scripts resolve."""
    configure_logging(level=log_level.value, json_format=False)


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def info(
    location: list[Path] | None = typer.Option(
        None, "--location", "-l", help="Script directory (repeatable). Defaults to settings."
    ),
    placeholder: list[str] | None = typer.Option(
        None, "--placeholder", "-p", help="Placeholder value as KEY=VALUE (repeatable)."
    ),
    no_placeholders: bool = typer.Option(
        False, "--no-placeholders", help="Disable placeholder replacement."
    ),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List resolved migrations in execution order."""
    settings = build_settings(
        locations=location,
        placeholders=parse_placeholders(placeholder),
        placeholder_replacement=False if no_placeholders else None,
    )
    try:
        migrations = build_resolver(settings).resolve_migrations()
    except SchemaSpineError as exc:
        fail(exc)
        return
    output_migrations(migrations, as_json=json_out, title="Resolved Migrations")


@app.command()
def parse(
    filename: str = typer.Argument(..., help="Script filename, e.g. V1_2__add_users.sql"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Show how a filename parses under the current naming settings."""
    result = ResourceNameParser(build_settings()).parse(filename)
    if not result.valid:
        kind = "invalid"
    elif is_sql_callback(result):
        kind = "callback"
    elif result.version is None:
        kind = "repeatable"
    else:
        kind = "versioned"
    output_dict(
        {
            "filename": filename,
            "kind": kind,
            "prefix": result.prefix,
            "version": str(result.version) if result.version is not None else None,
            "description": result.description,
            "suffix": result.suffix,
            "message": result.validity_message or None,
        },
        as_json=json_out,
        title="Parsed Name",
    )
