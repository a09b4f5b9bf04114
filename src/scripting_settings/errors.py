# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for settings storage and configuration failures."""

from __future__ import annotations

from pathlib import Path


class ScriptingSettingsError(RuntimeError):
    """Base class for errors raised outside the in-memory settings store."""


class SettingsStorageError(ScriptingSettingsError):
    """Raise when the persisted settings document cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialise the error with the offending path and a short reason.

        Args:
            path: Location of the settings document.
            reason: Human-readable description of the failure.
        """

        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class SettingsConfigError(ScriptingSettingsError):
    """Raise when the ``[tool.scripting-settings]`` table is invalid."""


__all__ = ["ScriptingSettingsError", "SettingsConfigError", "SettingsStorageError"]
