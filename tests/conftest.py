"""Shared test fixtures for the webshell test suite.

Provides common fixtures used across the unit tests: an in-memory
surface, a scheduler that never waits, and terminals built on both.
"""

from __future__ import annotations

import pytest

from webshell.config.settings import TerminalConfig
from webshell.display.memory import MemorySurface
from webshell.domain.models import KeyEvent
from webshell.terminal.application import TerminalApplication
from webshell.terminal.scheduler import ImmediateScheduler


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def type_keys(terminal: TerminalApplication, text: str) -> None:
    """Deliver one key event per character of ``text``."""
    for char in text:
        await terminal.handle_key(KeyEvent(key=char))


async def press(terminal: TerminalApplication, key: str, ctrl: bool = False) -> None:
    await terminal.handle_key(KeyEvent(key=key, ctrl=ctrl))


async def drain(terminal: TerminalApplication, limit: int = 10_000) -> int:
    """Tick until the stream is idle; returns the number of ticks."""
    ticks = 0
    while not terminal.stream.is_idle and ticks < limit:
        await terminal.tick()
        ticks += 1
    return ticks


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def surface() -> MemorySurface:
    return MemorySurface()


@pytest.fixture
def scheduler() -> ImmediateScheduler:
    return ImmediateScheduler()


@pytest.fixture
def quiet_config() -> TerminalConfig:
    """A config with no startup text, so the queue starts empty."""
    return TerminalConfig(startup_text="")


@pytest.fixture
def terminal(
    surface: MemorySurface,
    scheduler: ImmediateScheduler,
    quiet_config: TerminalConfig,
) -> TerminalApplication:
    """A terminal with input disabled and nothing queued."""
    return TerminalApplication(
        surface=surface,
        config=quiet_config,
        scheduler=scheduler,
        random=lambda: 0.5,
    )


@pytest.fixture
def enabled_terminal(terminal: TerminalApplication) -> TerminalApplication:
    """A terminal with input enabled (cursor glyph drawn)."""
    terminal.enable_input()
    return terminal
