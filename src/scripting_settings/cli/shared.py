# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, workspace access)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from ..errors import ScriptingSettingsError
from ..logging import fail as core_fail
from ..logging import ok as core_ok
from ..services import WorkspaceServices


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, console=self.console)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji, console=self.console)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated Rich console.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance for the current command.
    """

    console = Console(no_color=no_color, emoji=emoji, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji)


def open_workspace(root: Path) -> WorkspaceServices:
    """Return the services of ``root`` with its settings loaded.

    Raises:
        CLIError: If the configuration or the settings document is invalid.
    """

    services = WorkspaceServices(root.resolve())
    try:
        # Read now so a broken document fails before any mutation.
        services.settings
    except ScriptingSettingsError as exc:
        raise CLIError(str(exc)) from exc
    return services


def persist_workspace(services: WorkspaceServices) -> None:
    """Write the workspace settings back to storage.

    Raises:
        CLIError: If the settings document cannot be written.
    """

    try:
        services.save()
    except ScriptingSettingsError as exc:
        raise CLIError(str(exc)) from exc


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "open_workspace",
    "persist_workspace",
]
