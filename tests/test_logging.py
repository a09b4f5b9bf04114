# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the console logging helpers."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from scripting_settings.cli.shared import CLILogger
from scripting_settings.logging import emoji, fail, get_console, ok


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, force_terminal=False, color_system=None, emoji=False, width=120), buffer


def test_messages_include_emoji_prefix() -> None:
    console, buffer = _console()

    ok("saved", use_emoji=True, use_color=False, console=console)
    fail("broken", use_emoji=True, use_color=False, console=console)

    assert buffer.getvalue().splitlines() == ["✅ saved", "❌ broken"]


def test_messages_without_emoji() -> None:
    console, buffer = _console()

    ok("saved", use_emoji=False, use_color=False, console=console)

    assert buffer.getvalue() == "saved\n"


def test_cli_logger_routes_to_its_console() -> None:
    console, buffer = _console()
    logger = CLILogger(console=console, use_emoji=False)

    logger.ok("stored")
    logger.fail("rejected")

    assert buffer.getvalue() == "stored\nrejected\n"


def test_emoji_toggle() -> None:
    assert emoji("✅", True) == "✅"
    assert emoji("✅", False) == ""


def test_get_console_is_cached() -> None:
    assert get_console(color=False, emoji=True) is get_console(color=False, emoji=True)
    assert get_console(color=False, emoji=True) is not get_console(color=True, emoji=True)
