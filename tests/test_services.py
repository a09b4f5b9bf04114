# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from pathlib import Path
from xml.etree.ElementTree import Element

import pytest

from scripting_settings.config import StorageConfig
from scripting_settings.errors import SettingsConfigError
from scripting_settings.models import DefinitionRef
from scripting_settings.serialization import encode_settings
from scripting_settings.services import WorkspaceServices
from scripting_settings.storage import XmlFileStorage


class _MemoryStorage:
    def __init__(self, state: Element | None = None) -> None:
        self.state = state
        self.reads = 0

    def read(self) -> Element | None:
        self.reads += 1
        return self.state

    def write(self, element: Element) -> None:
        self.state = element


def test_settings_are_built_once(tmp_path: Path) -> None:
    storage = _MemoryStorage()
    services = WorkspaceServices(tmp_path, storage=storage)

    assert services.settings is services.settings
    assert storage.reads == 1


def test_workspace_settings_load_and_save(tmp_path: Path, main_definition: DefinitionRef) -> None:
    services = WorkspaceServices(tmp_path)

    settings = services.settings
    assert len(settings) == 0
    settings.set_auto_reload_configurations(3, main_definition, True)
    services.save()

    assert (tmp_path / ".idea" / "kotlinScripting.xml").is_file()

    reopened = WorkspaceServices(tmp_path)
    assert reopened.settings.auto_reload_configurations(main_definition) is True
    assert reopened.settings.get_order(main_definition) == 3


def test_settings_loaded_from_supplied_storage(tmp_path: Path, main_definition: DefinitionRef) -> None:
    seeded = WorkspaceServices(tmp_path, storage=_MemoryStorage())
    seeded.settings.set_order(main_definition, 7)
    storage = _MemoryStorage(seeded.settings.get_state())

    assert WorkspaceServices(tmp_path, storage=storage).settings.get_order(main_definition) == 7


def test_save_writes_to_supplied_storage(tmp_path: Path) -> None:
    storage = _MemoryStorage(encode_settings(False, []))
    services = WorkspaceServices(tmp_path, storage=storage)
    services.settings.suppress_definitions_check = True

    services.save()

    assert storage.state is not None
    assert storage.state.find("option") is not None
    assert not (tmp_path / ".idea").exists()


def test_workspace_services_honour_explicit_config(tmp_path: Path) -> None:
    config = StorageConfig(directory=Path("state"), file_name="scripts.xml")
    services = WorkspaceServices(tmp_path, config=config)

    assert services.config is config
    assert isinstance(services.storage, XmlFileStorage)
    assert services.storage.path == tmp_path / "state" / "scripts.xml"


def test_config_read_from_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.scripting-settings]\nfile_name = "scripts.xml"\n', encoding="utf-8")

    services = WorkspaceServices(tmp_path)

    assert services.config.file_name == "scripts.xml"
    assert services.storage.path == tmp_path / ".idea" / "scripts.xml"


def test_invalid_config_surfaces_on_access(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.scripting-settings]\nunknown = 1\n', encoding="utf-8")

    services = WorkspaceServices(tmp_path)

    with pytest.raises(SettingsConfigError):
        services.settings


def test_workspaces_are_isolated(tmp_path: Path, main_definition: DefinitionRef) -> None:
    first = WorkspaceServices(tmp_path / "one")
    second = WorkspaceServices(tmp_path / "two")

    first.settings.set_order(main_definition, 1)

    assert second.settings.get_order(main_definition) is None
