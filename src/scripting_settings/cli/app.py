# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Final

import typer
from rich.table import Table

from ..models import MAX_ORDER, MIN_ORDER, DefinitionRef
from ..serialization import to_xml_string
from ..store import ScriptingSettings
from .shared import CLIError, CLILogger, build_cli_logger, open_workspace, persist_workspace

TABLE_FORMAT: Final[str] = "table"
XML_FORMAT: Final[str] = "xml"

app = typer.Typer(
    help="Inspect and edit per-project script definition preferences.",
    no_args_is_help=True,
    add_completion=False,
)

_ROOT_OPTION = typer.Option(Path.cwd(), "--root", "-r", help="Workspace root.")
_ORDER_OPTION = typer.Option(
    None,
    "--order",
    min=MIN_ORDER,
    max=MAX_ORDER,
    help="Order assigned when the definition has no stored preferences yet.",
)


def _mutate(root: Path, action: Callable[[ScriptingSettings], str]) -> None:
    """Load the workspace settings, apply ``action`` and save the result."""

    logger = build_cli_logger(emoji=True)
    try:
        services = open_workspace(root)
        message = action(services.settings)
        persist_workspace(services)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    logger.ok(message)


def _initial_order(order: int | None) -> int:
    return MAX_ORDER if order is None else order


@app.command("show")
def show(
    root: Path = _ROOT_OPTION,
    output_format: str = typer.Option(
        TABLE_FORMAT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format ('table' or 'xml').",
    ),
) -> None:
    """Print the stored script definition preferences."""

    logger = build_cli_logger(emoji=True)
    fmt = output_format.lower()
    if fmt not in {TABLE_FORMAT, XML_FORMAT}:
        raise typer.BadParameter("format must be 'table' or 'xml'", param_hint="--format")
    try:
        services = open_workspace(root)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    settings = services.settings
    if fmt == XML_FORMAT:
        logger.echo(to_xml_string(settings.get_state()))
        return
    _render_table(settings, logger)


def _render_table(settings: ScriptingSettings, logger: CLILogger) -> None:
    entries = settings.entries()
    if not entries:
        logger.echo("No script definition preferences stored.")
    else:
        table = Table(title="Script definitions")
        table.add_column("Definition", no_wrap=True)
        table.add_column("Class", no_wrap=True)
        table.add_column("Order", justify="right")
        table.add_column("Enabled")
        table.add_column("Auto-reload")
        for key, value in entries:
            table.add_row(
                key.definition_name,
                key.class_name,
                str(value.order),
                "yes" if value.is_enabled else "no",
                "yes" if value.auto_reload_configurations else "no",
            )
        logger.console.print(table)
    suppressed = "yes" if settings.suppress_definitions_check else "no"
    logger.echo(f"Definitions check suppressed: {suppressed}")


# Negative orders such as "-1" are positional values, not options.
@app.command("set-order", context_settings={"ignore_unknown_options": True})
def set_order(
    name: str = typer.Argument(..., help="Definition display name."),
    class_name: str = typer.Argument(..., help="Definition implementation identifier."),
    order: int = typer.Argument(..., min=MIN_ORDER, max=MAX_ORDER, help="New order; lower values sort first."),
    root: Path = _ROOT_OPTION,
) -> None:
    """Set the order of a script definition."""

    definition = DefinitionRef(name=name, definition_id=class_name)

    def action(settings: ScriptingSettings) -> str:
        settings.set_order(definition, order)
        return f"Order of '{name}' set to {order}"

    _mutate(root, action)


@app.command("enable")
def enable(
    name: str = typer.Argument(..., help="Definition display name."),
    class_name: str = typer.Argument(..., help="Definition implementation identifier."),
    order: int | None = _ORDER_OPTION,
    root: Path = _ROOT_OPTION,
) -> None:
    """Enable a script definition."""

    _set_enabled(root, DefinitionRef(name=name, definition_id=class_name), order, True)


@app.command("disable")
def disable(
    name: str = typer.Argument(..., help="Definition display name."),
    class_name: str = typer.Argument(..., help="Definition implementation identifier."),
    order: int | None = _ORDER_OPTION,
    root: Path = _ROOT_OPTION,
) -> None:
    """Disable a script definition."""

    _set_enabled(root, DefinitionRef(name=name, definition_id=class_name), order, False)


def _set_enabled(root: Path, definition: DefinitionRef, order: int | None, is_enabled: bool) -> None:
    def action(settings: ScriptingSettings) -> str:
        settings.set_enabled(_initial_order(order), definition, is_enabled)
        state = "enabled" if is_enabled else "disabled"
        return f"'{definition.name}' {state}"

    _mutate(root, action)


@app.command("auto-reload")
def auto_reload(
    name: str = typer.Argument(..., help="Definition display name."),
    class_name: str = typer.Argument(..., help="Definition implementation identifier."),
    enabled: bool = typer.Option(..., "--on/--off", help="Reload configurations automatically."),
    order: int | None = _ORDER_OPTION,
    root: Path = _ROOT_OPTION,
) -> None:
    """Toggle automatic configuration reloading for a script definition."""

    definition = DefinitionRef(name=name, definition_id=class_name)

    def action(settings: ScriptingSettings) -> str:
        settings.set_auto_reload_configurations(_initial_order(order), definition, enabled)
        state = "on" if enabled else "off"
        return f"Auto-reload for '{name}' turned {state}"

    _mutate(root, action)


@app.command("suppress-check")
def suppress_check(
    enabled: bool = typer.Option(..., "--on/--off", help="Silence the multiple-definitions warning."),
    root: Path = _ROOT_OPTION,
) -> None:
    """Toggle the warning about several definitions matching one script."""

    def action(settings: ScriptingSettings) -> str:
        settings.suppress_definitions_check = enabled
        state = "suppressed" if enabled else "enabled"
        return f"Definitions check {state}"

    _mutate(root, action)


__all__ = ["app"]
