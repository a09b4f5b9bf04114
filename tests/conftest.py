# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from scripting_settings.models import DefinitionRef
from scripting_settings.store import ScriptingSettings


@pytest.fixture
def settings() -> ScriptingSettings:
    """Return an empty settings store."""
    return ScriptingSettings()


@pytest.fixture
def gradle_definition() -> DefinitionRef:
    return DefinitionRef(name="Gradle Kotlin DSL", definition_id="org.gradle.kotlin.dsl.KotlinBuildScript")


@pytest.fixture
def main_definition() -> DefinitionRef:
    return DefinitionRef(name="Main script", definition_id="org.example.MainKtsScript")
