"""Command registry shared by typed commands and inline directives.

Commands are stored in registration order. Registering a name that
already exists replaces its handler and metadata but keeps its position,
so ``help`` listings stay stable when a collaborator overrides a builtin.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from webshell.terminal.application import TerminalApplication

logger = logging.getLogger(__name__)

# Handlers receive the terminal followed by the command tokens, the
# command name first: ``await handler(terminal, "echo", "hello")``.
CommandHandler = Callable[..., Awaitable[str]]


def unknown_command_message(name: str) -> str:
    return f"Unknown command '{name}'"


class Command(BaseModel):
    """A registered command: handler plus the text shown by ``help``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1, description="Unique command name")
    brief: str = Field(default="", description="One-line summary for help listings")
    help: str = Field(default="", description="Detailed help; defaults to brief")
    handler: Callable[..., Any] = Field(description="Async callable (terminal, name, *args) -> str")

    @model_validator(mode="before")
    @classmethod
    def _default_help(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("help") is None:
            data = {**data, "help": data.get("brief", "")}
        return data

    async def execute(self, terminal: TerminalApplication, args: list[str]) -> str:
        """Run the handler with ``args`` (name first) and return its text.

        Plain functions are accepted as well as coroutines; a ``None``
        result is treated as empty output.
        """
        result = self.handler(terminal, *args)
        if inspect.isawaitable(result):
            result = await result
        return "" if result is None else str(result)


class _CommandListing:
    """Restartable view over ``(name, brief)`` pairs in registration order."""

    def __init__(self, commands: dict[str, Command]) -> None:
        self._commands = commands

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for command in list(self._commands.values()):
            yield command.name, command.brief


class CommandRegistry:
    """Ordered mapping from command name to ``Command``."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def register(
        self,
        name: str,
        handler: CommandHandler,
        brief: str = "",
        help: str | None = None,
    ) -> Command:
        """Insert or overwrite the command called ``name``."""
        command = Command(name=name, brief=brief, help=help, handler=handler)
        if name in self._commands:
            logger.debug("Overwriting command %r", name)
        self._commands[name] = command
        return command

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands)

    def list_all(self) -> _CommandListing:
        """Lazy ``(name, brief)`` pairs; each iteration starts from the top."""
        return _CommandListing(self._commands)

    def lookup_help(self, name: str) -> str:
        command = self._commands.get(name)
        if command is None:
            return unknown_command_message(name)
        return command.help or ""
