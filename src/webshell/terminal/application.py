"""The terminal application.

Composes the rendering surface, the command registry, history, text
speed, the stream processor, the dispatcher and the input state machine
into one session object. Command handlers receive this object as their
first argument.
"""

from __future__ import annotations

import logging
import random as _random
from collections.abc import Callable

from webshell.config.settings import TerminalConfig
from webshell.display.base import RenderSurface
from webshell.display.memory import MemorySurface
from webshell.domain.models import KeyEvent, StreamToken, TerminalState
from webshell.terminal.builtins import register_builtin_commands
from webshell.terminal.dispatcher import Dispatcher
from webshell.terminal.history import HistoryManager
from webshell.terminal.input import InputStateMachine
from webshell.terminal.registry import Command, CommandHandler, CommandRegistry
from webshell.terminal.scheduler import AsyncioScheduler, Scheduler
from webshell.terminal.session import TextSession
from webshell.terminal.speed import TextSpeedController
from webshell.terminal.stream import StreamProcessor

logger = logging.getLogger(__name__)


class TerminalApplication:
    """One interactive terminal session.

    Example usage::

        terminal = TerminalApplication(config=TerminalConfig(startup_text="|enableinput|"))
        await terminal.tick()
        for key in "echo hi":
            await terminal.handle_key(KeyEvent(key=key))
        await terminal.handle_key(KeyEvent(key="Enter"))
        while not terminal.stream.is_idle:
            await terminal.tick()
    """

    def __init__(
        self,
        surface: RenderSurface | None = None,
        config: TerminalConfig | None = None,
        scheduler: Scheduler | None = None,
        random: Callable[[], float] = _random.random,
    ) -> None:
        self._config = config if config is not None else TerminalConfig()
        self._surface = surface if surface is not None else MemorySurface()
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()

        self._registry = CommandRegistry()
        self._history = HistoryManager()
        self._speed = TextSpeedController(self._config.default_text_speed)
        self._stream = StreamProcessor(
            terminal=self,
            surface=self._surface,
            registry=self._registry,
            speed=self._speed,
            scheduler=self._scheduler,
            max_char_delay=self._config.max_char_delay,
            random=random,
        )
        self._session = TextSession(self._surface, self._stream)
        self._dispatcher = Dispatcher(self, self._registry, self._history)
        self._input = InputStateMachine(
            session=self._session,
            dispatcher=self._dispatcher,
            history=self._history,
            cursor=self._config.cursor,
            disable_during_execution=self._config.disable_input_during_command,
        )

        register_builtin_commands(self._registry)
        self._stream.enqueue(self._config.startup_text)
        logger.info("Terminal created with %d builtin commands", len(self._registry))

    @property
    def config(self) -> TerminalConfig:
        return self._config

    @property
    def surface(self) -> RenderSurface:
        return self._surface

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def speed(self) -> TextSpeedController:
        return self._speed

    @property
    def stream(self) -> StreamProcessor:
        return self._stream

    @property
    def input(self) -> InputStateMachine:
        return self._input

    @property
    def state(self) -> TerminalState:
        return TerminalState(
            input_enabled=self._input.is_enabled,
            text_speed=self._speed.speed,
            previous_text_speed=self._speed.previous_speed,
            input_buffer=self._input.buffer,
            cursor_glyph=self._input.cursor,
            history_length=len(self._history),
        )

    def register_command(
        self,
        name: str,
        handler: CommandHandler,
        brief: str = "",
        help: str | None = None,
    ) -> Command:
        """Add or replace a command; it is usable as a directive too."""
        return self._registry.register(name, handler, brief, help)

    async def tick(self) -> StreamToken | None:
        return await self._stream.tick()

    async def handle_key(self, event: KeyEvent) -> None:
        await self._input.handle_key(event)

    async def dispatch(self, line: str) -> str:
        return await self._dispatcher.dispatch(line)

    def echo(self, *strings: str) -> None:
        self._session.echo(*strings)

    def clear(self) -> None:
        self._session.clear()

    def clear_line(self) -> None:
        self._session.clear_line()

    def backspace(self, n: int = 1) -> None:
        self._session.backspace(n)

    def enable_input(self) -> None:
        self._input.enable_input()

    def disable_input(self) -> None:
        self._input.disable_input()
