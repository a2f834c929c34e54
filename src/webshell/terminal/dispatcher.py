"""Executes user-typed lines against the command registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webshell.terminal.history import HistoryManager
from webshell.terminal.registry import CommandRegistry, unknown_command_message

if TYPE_CHECKING:
    from webshell.terminal.application import TerminalApplication

logger = logging.getLogger(__name__)


def command_failed_message(name: str, error: Exception) -> str:
    return f"command '{name}' failed: {error}"


class Dispatcher:
    """Turns a submitted line into a command invocation.

    The line is recorded in history before lookup, so unknown commands
    can still be recalled with ArrowUp. Neither unknown commands nor
    failing handlers raise: both come back as the text to display.
    """

    def __init__(
        self,
        terminal: TerminalApplication,
        registry: CommandRegistry,
        history: HistoryManager,
    ) -> None:
        self._terminal = terminal
        self._registry = registry
        self._history = history

    async def dispatch(self, raw_line: str) -> str:
        # every submitted line is recorded, including blank ones
        self._history.submit(raw_line)

        tokens = raw_line.split()
        if not tokens:
            return ""

        name = tokens[0]
        command = self._registry.get(name)
        if command is None:
            logger.debug("Unknown command %r", name)
            return unknown_command_message(name)

        logger.debug("Dispatching %r with %d argument(s)", name, len(tokens) - 1)
        try:
            return await command.execute(self._terminal, tokens)
        except Exception as e:
            logger.error("Command %r failed: %s", name, e)
            return command_failed_message(name, e)
