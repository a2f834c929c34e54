"""Keyboard input state machine.

The terminal starts with input disabled. While enabled, key events edit
the input buffer and the rendered line; Enter hands the buffer to the
dispatcher and queues the command output for streaming.
"""

from __future__ import annotations

import logging

from webshell.domain.models import InputMode, KeyEvent
from webshell.terminal.dispatcher import Dispatcher
from webshell.terminal.history import HistoryManager
from webshell.terminal.session import TextSession

logger = logging.getLogger(__name__)

ENTER = "Enter"
BACKSPACE = "Backspace"
ARROW_UP = "ArrowUp"
ARROW_DOWN = "ArrowDown"

# queued after command output to give control back to the user once it
# has finished rendering
ENABLE_INPUT_DIRECTIVE = "|enableinput|"


class InputStateMachine:
    """Tracks the enabled/disabled state, the cursor glyph and the buffer."""

    def __init__(
        self,
        session: TextSession,
        dispatcher: Dispatcher,
        history: HistoryManager,
        cursor: str = "_",
        disable_during_execution: bool = True,
    ) -> None:
        self._session = session
        self._dispatcher = dispatcher
        self._history = history
        self._cursor = cursor
        self._disable_during_execution = disable_during_execution
        self._mode = InputMode.DISABLED
        self._buffer = ""
        self._cursor_shown = False

    @property
    def mode(self) -> InputMode:
        return self._mode

    @property
    def is_enabled(self) -> bool:
        return self._mode is InputMode.ENABLED

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def cursor(self) -> str:
        return self._cursor

    @property
    def cursor_shown(self) -> bool:
        return self._cursor_shown

    def enable_input(self) -> None:
        """Enable input and make sure the cursor glyph is drawn once."""
        if not self.is_enabled:
            self._mode = InputMode.ENABLED
            logger.debug("Input enabled")
        self._draw_cursor()

    def disable_input(self) -> None:
        if not self.is_enabled:
            return
        self._mode = InputMode.DISABLED
        self._erase_cursor()
        logger.debug("Input disabled")

    async def handle_key(self, event: KeyEvent) -> None:
        if not self.is_enabled:
            return

        if event.key == ENTER:
            await self._submit()
        elif event.key == BACKSPACE:
            self._backspace()
        elif event.key == ARROW_UP:
            self._show_entry(self._history.navigate_up(self._buffer))
        elif event.key == ARROW_DOWN:
            self._show_entry(self._history.navigate_down(self._buffer))
        elif event.ctrl and event.key.lower() == "c":
            self._interrupt()
        elif event.is_printable:
            self._type(event.key)
        # anything else is a modifier or an unsupported named key

    async def _submit(self) -> None:
        if self._disable_during_execution:
            self.disable_input()
        else:
            # input stays enabled; only the glyph is hidden until the
            # output has been streamed
            self._erase_cursor()

        self._session.add_text("\n")

        line = self._buffer.strip()
        if line:
            output = await self._dispatcher.dispatch(line)
            self._session.echo(output + "\n")

        self._buffer = ""
        # with the flag off, a command that disabled input keeps it disabled
        if self._disable_during_execution or self.is_enabled:
            self._session.echo(ENABLE_INPUT_DIRECTIVE)

    def _backspace(self) -> None:
        shown = self._erase_cursor()
        # never erase past the start of what the user typed
        if self._buffer:
            self._buffer = self._buffer[:-1]
            self._session.backspace()
        if shown:
            self._draw_cursor()

    def _show_entry(self, entry: str | None) -> None:
        if entry is None:
            return
        shown = self._cursor_shown
        self._buffer = entry
        self._session.clear_line()
        self._cursor_shown = False
        self._session.add_text(entry)
        if shown:
            self._draw_cursor()

    def _interrupt(self) -> None:
        self._buffer = ""
        shown = self._erase_cursor()
        self._session.add_text("^c\n")
        if shown:
            self._draw_cursor()

    def _type(self, char: str) -> None:
        shown = self._erase_cursor()
        self._buffer += char
        self._session.add_text(char)
        if shown:
            self._draw_cursor()

    def _draw_cursor(self) -> None:
        if not self._cursor_shown:
            self._session.add_text(self._cursor)
            self._cursor_shown = True

    def _erase_cursor(self) -> bool:
        """Erase the glyph if it is drawn; returns whether it was."""
        if not self._cursor_shown:
            return False
        self._session.backspace(len(self._cursor))
        self._cursor_shown = False
        return True
