# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the in-memory scripting settings store."""

from __future__ import annotations

from threading import Thread
from xml.etree.ElementTree import Element, tostring

import pytest
from pydantic import ValidationError

from scripting_settings.models import DEFAULT_VALUE, MAX_ORDER, MIN_ORDER, DefinitionRef, DefinitionValue
from scripting_settings.serialization import from_xml_string
from scripting_settings.store import ScriptingSettings


def _definition_nodes(state: Element) -> list[Element]:
    return state.findall("scriptDefinition")


def test_defaults_for_unknown_definition(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    assert settings.is_enabled(main_definition) is True
    assert settings.auto_reload_configurations(main_definition) is False
    assert settings.get_order(main_definition) is None
    assert settings.value_for(main_definition) == DEFAULT_VALUE
    assert len(settings) == 0


def test_explicit_max_order_is_distinct_from_unset(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_order(main_definition, MAX_ORDER)

    assert settings.get_order(main_definition) == MAX_ORDER
    assert len(settings) == 1


def test_disable_then_capture_and_restore(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_enabled(5, main_definition, False)

    state = settings.get_state()
    nodes = _definition_nodes(state)
    assert len(nodes) == 1
    assert nodes[0].findtext("order") == "5"
    assert nodes[0].findtext("isEnabled") == "false"
    assert nodes[0].find("autoReloadConfigurations") is None

    restored = ScriptingSettings()
    restored.load_state(state)
    assert restored.is_enabled(main_definition) is False
    assert restored.get_order(main_definition) == 5


def test_reaffirming_enabled_omits_child(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_enabled(1, main_definition, False)
    settings.set_enabled(1, main_definition, True)

    node = _definition_nodes(settings.get_state())[0]
    assert node.find("isEnabled") is None


def test_auto_reload_written_only_when_true(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_auto_reload_configurations(2, main_definition, True)
    node = _definition_nodes(settings.get_state())[0]
    assert node.findtext("autoReloadConfigurations") == "true"

    settings.set_auto_reload_configurations(2, main_definition, False)
    node = _definition_nodes(settings.get_state())[0]
    assert node.find("autoReloadConfigurations") is None


def test_set_order_preserves_other_fields(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_enabled(3, main_definition, False)
    settings.set_auto_reload_configurations(9, main_definition, True)
    settings.set_order(main_definition, 1)

    assert settings.value_for(main_definition) == DefinitionValue(
        order=1, is_enabled=False, auto_reload_configurations=True
    )


def test_existing_entry_ignores_initial_order(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_order(main_definition, 4)
    settings.set_enabled(10, main_definition, False)

    assert settings.get_order(main_definition) == 4


def test_new_entry_uses_type_defaults(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_auto_reload_configurations(6, main_definition, True)

    assert settings.value_for(main_definition) == DefinitionValue(order=6, auto_reload_configurations=True)


def test_suppress_option_absent_by_default(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_order(main_definition, 1)

    assert settings.get_state().find("option") is None


def test_suppress_flag_round_trip(settings: ScriptingSettings) -> None:
    settings.suppress_definitions_check = True

    restored = ScriptingSettings()
    restored.load_state(settings.get_state())

    assert restored.suppress_definitions_check is True


def test_load_without_option_keeps_flag() -> None:
    settings = ScriptingSettings()
    settings.suppress_definitions_check = True

    settings.load_state(Element("KotlinScriptingSettings"))

    assert settings.suppress_definitions_check is True


def test_round_trip_after_mutations(
    settings: ScriptingSettings, main_definition: DefinitionRef, gradle_definition: DefinitionRef
) -> None:
    settings.set_order(gradle_definition, 0)
    settings.set_enabled(1, main_definition, False)
    settings.set_auto_reload_configurations(0, gradle_definition, True)
    settings.suppress_definitions_check = True

    restored = ScriptingSettings()
    restored.load_state(settings.get_state())

    assert restored.entries() == settings.entries()
    assert restored.suppress_definitions_check is True
    assert tostring(restored.get_state()) == tostring(settings.get_state())


def test_capture_is_idempotent(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.set_enabled(2, main_definition, False)

    assert tostring(settings.get_state()) == tostring(settings.get_state())


def test_load_merges_into_existing_entries(
    settings: ScriptingSettings, main_definition: DefinitionRef, gradle_definition: DefinitionRef
) -> None:
    settings.set_order(main_definition, 7)
    settings.set_order(gradle_definition, 8)

    settings.load_state(
        from_xml_string(
            '<KotlinScriptingSettings><scriptDefinition className="org.gradle.kotlin.dsl.KotlinBuildScript" '
            'definitionName="Gradle Kotlin DSL"><order>2</order><isEnabled>false</isEnabled>'
            "</scriptDefinition></KotlinScriptingSettings>"
        )
    )

    assert settings.get_order(main_definition) == 7
    assert settings.value_for(gradle_definition) == DefinitionValue(order=2, is_enabled=False)


def test_load_tolerates_malformed_order(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    settings.load_state(
        from_xml_string(
            '<KotlinScriptingSettings><scriptDefinition className="org.example.MainKtsScript" '
            'definitionName="Main script"><order>soon</order></scriptDefinition></KotlinScriptingSettings>'
        )
    )

    assert settings.get_order(main_definition) == MAX_ORDER
    assert settings.is_enabled(main_definition) is True


def test_concurrent_mutations_keep_every_entry(settings: ScriptingSettings) -> None:
    definitions = [DefinitionRef(name=f"def-{index}", definition_id=f"org.example.D{index}") for index in range(200)]

    def worker(chunk: list[DefinitionRef]) -> None:
        for position, definition in enumerate(chunk):
            settings.set_enabled(position, definition, False)
            settings.get_state()

    threads = [Thread(target=worker, args=(definitions[start::4],)) for start in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(settings) == len(definitions)
    assert all(not settings.is_enabled(definition) for definition in definitions)


@pytest.mark.parametrize("order_text", ["99999999999", "-2147483649", pytest.param("9" * 5000, id="5000-digits")])
def test_load_treats_out_of_range_order_as_absent(
    settings: ScriptingSettings,
    main_definition: DefinitionRef,
    order_text: str,
) -> None:
    settings.load_state(
        from_xml_string(
            '<KotlinScriptingSettings><scriptDefinition className="org.example.MainKtsScript" '
            f'definitionName="Main script"><order>{order_text}</order></scriptDefinition></KotlinScriptingSettings>'
        )
    )

    assert settings.get_order(main_definition) == MAX_ORDER


def test_mutators_reject_out_of_range_order(settings: ScriptingSettings, main_definition: DefinitionRef) -> None:
    with pytest.raises(ValidationError):
        settings.set_order(main_definition, MAX_ORDER + 1)
    with pytest.raises(ValidationError):
        settings.set_enabled(MIN_ORDER - 1, main_definition, False)
    assert len(settings) == 0

    settings.set_order(main_definition, 4)
    with pytest.raises(ValidationError):
        settings.set_order(main_definition, 2**40)
    assert settings.get_order(main_definition) == 4
