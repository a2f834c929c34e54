"""Tests for the InputStateMachine."""

from __future__ import annotations

import pytest

from conftest import drain, press, type_keys
from webshell.config.settings import TerminalConfig
from webshell.display.memory import MemorySurface
from webshell.domain.models import InputMode
from webshell.terminal.application import TerminalApplication
from webshell.terminal.scheduler import ImmediateScheduler


class TestEnableDisable:
    def test_initially_disabled(self, terminal: TerminalApplication) -> None:
        assert terminal.input.mode is InputMode.DISABLED
        assert terminal.state.input_mode is InputMode.DISABLED

    def test_enable_twice_draws_cursor_once(
        self, terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        terminal.enable_input()
        terminal.enable_input()
        assert terminal.input.mode is InputMode.ENABLED
        assert surface.text == "_"

    def test_disable_twice_erases_cursor_once(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        surface.append("x")
        enabled_terminal.disable_input()
        enabled_terminal.disable_input()
        assert enabled_terminal.input.mode is InputMode.DISABLED
        assert surface.text == "_"

    @pytest.mark.asyncio
    async def test_keys_ignored_while_disabled(
        self, terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(terminal, "abc")
        await press(terminal, "Enter")
        assert surface.text == ""
        assert terminal.input.buffer == ""
        assert len(terminal.history) == 0


class TestEditing:
    @pytest.mark.asyncio
    async def test_typing(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "ab")
        assert surface.text == "ab_"
        assert enabled_terminal.input.buffer == "ab"

    @pytest.mark.asyncio
    async def test_backspace(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "ab")
        await press(enabled_terminal, "Backspace")
        assert surface.text == "a_"
        assert enabled_terminal.input.buffer == "a"

    @pytest.mark.asyncio
    async def test_backspace_stops_at_empty_buffer(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        surface.clear_all()
        surface.append("prompt> _")
        await press(enabled_terminal, "Backspace")
        await press(enabled_terminal, "Backspace")
        assert surface.text == "prompt> _"
        assert enabled_terminal.input.buffer == ""

    @pytest.mark.asyncio
    async def test_named_keys_ignored(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        for key in ("Shift", "Control", "ArrowLeft", "F5"):
            await press(enabled_terminal, key)
        assert surface.text == "_"
        assert enabled_terminal.input.buffer == ""

    @pytest.mark.asyncio
    async def test_ctrl_c(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "ls")
        await press(enabled_terminal, "c", ctrl=True)
        assert surface.text == "ls^c\n_"
        assert enabled_terminal.input.buffer == ""
        assert len(enabled_terminal.history) == 0

    @pytest.mark.asyncio
    async def test_plain_c_is_typed(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await press(enabled_terminal, "c")
        assert surface.text == "c_"


class TestEnter:
    @pytest.mark.asyncio
    async def test_runs_command_and_streams_output(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "echo hi")
        await press(enabled_terminal, "Enter")

        assert surface.text == "echo hi\n"
        assert enabled_terminal.input.mode is InputMode.DISABLED
        assert enabled_terminal.input.buffer == ""
        assert enabled_terminal.stream.pending == "hi\n|enableinput|"

        await drain(enabled_terminal)

        assert surface.text == "echo hi\nhi\n_"
        assert enabled_terminal.input.mode is InputMode.ENABLED
        assert enabled_terminal.history.entries == ["echo hi"]

    @pytest.mark.asyncio
    async def test_input_disabled_while_command_runs(
        self, enabled_terminal: TerminalApplication,
    ) -> None:
        seen = []

        async def record_state(terminal, *args: str) -> str:
            seen.append(terminal.state.input_enabled)
            return ""

        enabled_terminal.register_command("check", record_state)
        await type_keys(enabled_terminal, "check")
        await press(enabled_terminal, "Enter")
        assert seen == [False]

    @pytest.mark.asyncio
    async def test_trims_buffer(self, enabled_terminal: TerminalApplication) -> None:
        await type_keys(enabled_terminal, "  echo x  ")
        await press(enabled_terminal, "Enter")
        assert enabled_terminal.history.entries == ["echo x"]

    @pytest.mark.asyncio
    async def test_empty_line(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await press(enabled_terminal, "Enter")
        await drain(enabled_terminal)
        assert surface.text == "\n_"
        assert len(enabled_terminal.history) == 0

    @pytest.mark.asyncio
    async def test_unknown_command_output(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "frobnicate")
        await press(enabled_terminal, "Enter")
        await drain(enabled_terminal)
        assert surface.text == "frobnicate\nUnknown command 'frobnicate'\n_"

    @pytest.mark.asyncio
    async def test_without_auto_disable(self, surface: MemorySurface) -> None:
        terminal = TerminalApplication(
            surface=surface,
            config=TerminalConfig(startup_text="", disable_input_during_command=False),
            scheduler=ImmediateScheduler(),
        )
        terminal.enable_input()
        await type_keys(terminal, "echo hi")
        await press(terminal, "Enter")

        assert terminal.input.mode is InputMode.ENABLED
        assert terminal.input.cursor_shown is False
        assert terminal.stream.pending == "hi\n|enableinput|"
        await drain(terminal)
        assert surface.text == "echo hi\nhi\n_"

    @pytest.mark.asyncio
    async def test_without_auto_disable_typing_after_output(
        self, surface: MemorySurface,
    ) -> None:
        terminal = TerminalApplication(
            surface=surface,
            config=TerminalConfig(startup_text="", disable_input_during_command=False),
            scheduler=ImmediateScheduler(),
        )
        terminal.enable_input()
        await type_keys(terminal, "echo hi")
        await press(terminal, "Enter")
        await drain(terminal)

        await type_keys(terminal, "x")
        assert surface.text == "echo hi\nhi\nx_"
        await press(terminal, "Backspace")
        await press(terminal, "Backspace")
        assert surface.text == "echo hi\nhi\n_"


class TestHistoryKeys:
    @pytest.mark.asyncio
    async def test_arrow_up_recalls_previous_lines(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        for line in ("echo a", "echo b"):
            await type_keys(enabled_terminal, line)
            await press(enabled_terminal, "Enter")
            await drain(enabled_terminal)

        await press(enabled_terminal, "ArrowUp")
        assert enabled_terminal.input.buffer == "echo b"
        assert surface.lines[-1] == "echo b_"

        await press(enabled_terminal, "ArrowUp")
        assert enabled_terminal.input.buffer == "echo a"
        assert surface.lines[-1] == "echo a_"

        await press(enabled_terminal, "ArrowDown")
        assert enabled_terminal.input.buffer == "echo b"
        assert surface.lines[-1] == "echo b_"

    @pytest.mark.asyncio
    async def test_arrow_down_at_newest_leaves_buffer(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "echo a")
        await press(enabled_terminal, "Enter")
        await drain(enabled_terminal)

        await type_keys(enabled_terminal, "draft")
        before = surface.text
        await press(enabled_terminal, "ArrowDown")
        assert enabled_terminal.input.buffer == "draft"
        assert surface.text == before

    @pytest.mark.asyncio
    async def test_arrows_with_empty_history(
        self, enabled_terminal: TerminalApplication, surface: MemorySurface,
    ) -> None:
        await type_keys(enabled_terminal, "x")
        await press(enabled_terminal, "ArrowUp")
        await press(enabled_terminal, "ArrowDown")
        assert surface.text == "x_"
        assert enabled_terminal.input.buffer == "x"
