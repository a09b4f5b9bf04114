# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Workspace-scoped wiring of the settings store to its storage medium.

Each workspace owns one :class:`WorkspaceServices`. Consumers such as the
definition resolver or the CLI receive it explicitly and read
:attr:`WorkspaceServices.settings` instead of reaching for a global store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from .config import StorageConfig, load_storage_config
from .interfaces import SettingsDocumentStorage
from .storage import XmlFileStorage
from .store import ScriptingSettings

LOGGER = logging.getLogger(__name__)


class WorkspaceServices:
    """Own the configuration, storage and settings store of one workspace.

    Every service is built on first access and reused afterwards.
    """

    def __init__(
        self,
        root: Path,
        *,
        config: StorageConfig | None = None,
        storage: SettingsDocumentStorage | None = None,
    ) -> None:
        """Bind the services to the workspace at ``root``.

        Args:
            root: Workspace root directory.
            config: Storage configuration; read from ``pyproject.toml`` when omitted.
            storage: Storage medium; an :class:`XmlFileStorage` at the configured
                location when omitted.
        """

        self.root = root
        self._config = config
        self._storage = storage
        self._settings: ScriptingSettings | None = None
        self._lock = Lock()

    @property
    def config(self) -> StorageConfig:
        """Return the storage configuration of the workspace.

        Raises:
            SettingsConfigError: If ``pyproject.toml`` holds an invalid table.
        """

        if self._config is None:
            self._config = load_storage_config(self.root)
        return self._config

    @property
    def storage(self) -> SettingsDocumentStorage:
        """Return the storage medium holding the settings document."""

        if self._storage is None:
            self._storage = XmlFileStorage(self.config.resolve(self.root))
        return self._storage

    @property
    def settings(self) -> ScriptingSettings:
        """Return the workspace settings store, loading it on first access.

        Raises:
            SettingsStorageError: If the stored document cannot be read.
        """

        with self._lock:
            if self._settings is None:
                self._settings = self._load_settings()
            return self._settings

    def save(self) -> None:
        """Capture the settings store and persist it.

        Raises:
            SettingsStorageError: If the storage medium rejects the write.
        """

        self.storage.write(self.settings.get_state())

    def _load_settings(self) -> ScriptingSettings:
        settings = ScriptingSettings()
        state = self.storage.read()
        if state is not None:
            settings.load_state(state)
            LOGGER.debug("loaded %d script definition preferences from %r", len(settings), self.storage)
        return settings


__all__ = ["WorkspaceServices"]
