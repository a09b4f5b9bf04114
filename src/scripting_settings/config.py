# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace configuration locating the persisted settings document."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import SettingsConfigError

PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "scripting-settings"
DEFAULT_DIRECTORY: Final[str] = ".idea"
DEFAULT_FILE_NAME: Final[str] = "kotlinScripting.xml"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(?:\{([^}]+)\}|([A-Za-z_][A-Za-z0-9_]*))")


class StorageConfig(BaseModel):
    """Location of the settings document relative to a workspace root.

    Attributes:
        directory: Directory holding per-workspace tool state. Relative paths
            are resolved against the workspace root.
        file_name: Name of the settings document inside ``directory``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    directory: Path = Path(DEFAULT_DIRECTORY)
    file_name: str = DEFAULT_FILE_NAME

    @field_validator("file_name")
    @classmethod
    def _validate_file_name(cls, value: str) -> str:
        """Reject file names that would escape ``directory``."""
        if not value or Path(value).name != value:
            raise ValueError("file_name must be a bare file name")
        return value

    def resolve(self, root: Path) -> Path:
        """Return the absolute path of the settings document for ``root``."""

        directory = self.directory if self.directory.is_absolute() else root / self.directory
        return directory / self.file_name


def load_storage_config(root: Path, *, env: Mapping[str, str] | None = None) -> StorageConfig:
    """Read ``[tool.scripting-settings]`` from the workspace ``pyproject.toml``.

    Args:
        root: Workspace root containing the optional ``pyproject.toml``.
        env: Environment used to expand ``$VAR``/``${VAR}`` references in string
            values. Defaults to :data:`os.environ`.

    Returns:
        StorageConfig: Parsed configuration, defaults when the table is absent.

    Raises:
        SettingsConfigError: If ``pyproject.toml`` cannot be parsed or the table
            holds invalid or unknown keys.
    """

    pyproject = root / PYPROJECT_FILE
    if not pyproject.is_file():
        return StorageConfig()
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise SettingsConfigError(f"failed to read {pyproject}: {exc}") from exc

    section = _extract_section(data)
    if section is None:
        return StorageConfig()
    expanded = _expand_env(section, os.environ if env is None else env)
    try:
        return StorageConfig.model_validate(expanded)
    except ValidationError as exc:
        raise SettingsConfigError(f"invalid [tool.{PYPROJECT_SECTION_KEY}] in {pyproject}: {exc}") from exc


def _extract_section(payload: Mapping[str, Any]) -> Mapping[str, Any] | None:
    tool = payload.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool, Mapping):
        return None
    section = tool.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise SettingsConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] must be a table")
    return section


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    return {key: _expand_env_string(value, env) if isinstance(value, str) else value for key, value in data.items()}


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "DEFAULT_DIRECTORY",
    "DEFAULT_FILE_NAME",
    "StorageConfig",
    "load_storage_config",
]
