"""Pending output queue and the per-tick stream processor.

Text handed to the terminal is queued raw and only tokenised as it is
consumed. Each tick consumes one token: a literal character, which is
rendered after a short random delay, or an inline directive
``|name,arg1,arg2|``, which runs the registered command of that name for
its side effect.

There is no escape for a literal pipe character. A ``|`` without a
closing partner is a parse failure that stops the stream for the rest of
the session.
"""

from __future__ import annotations

import logging
import random as _random
from collections.abc import Callable
from typing import TYPE_CHECKING

from webshell.display.base import RenderSurface
from webshell.domain.models import DirectiveToken, LiteralToken, StreamToken
from webshell.terminal.registry import CommandRegistry
from webshell.terminal.scheduler import Scheduler
from webshell.terminal.speed import TextSpeedController

if TYPE_CHECKING:
    from webshell.terminal.application import TerminalApplication

logger = logging.getLogger(__name__)

DIRECTIVE_DELIMITER = "|"
ARGUMENT_SEPARATOR = ","
DEFAULT_MAX_CHAR_DELAY = 0.030


class UnterminatedDirectiveError(ValueError):
    """Raised when a directive has no closing delimiter."""

    def __init__(self, pending: str) -> None:
        super().__init__(f"Unterminated directive in {pending[:40]!r}")
        self.pending = pending


def next_token(pending: str) -> tuple[StreamToken, int]:
    """Parse the token at the head of ``pending``.

    Returns the token and the number of characters it spans.

    Raises:
        ValueError: If ``pending`` is empty.
        UnterminatedDirectiveError: If the head opens a directive that is
            never closed.
    """
    if not pending:
        raise ValueError("No pending output")

    if pending[0] != DIRECTIVE_DELIMITER:
        return LiteralToken(char=pending[0]), 1

    end = pending.find(DIRECTIVE_DELIMITER, 1)
    if end == -1:
        raise UnterminatedDirectiveError(pending)

    name, *args = pending[1:end].split(ARGUMENT_SEPARATOR)
    return DirectiveToken(name=name, args=tuple(args)), end + 1


class StreamProcessor:
    """Drains the pending output queue into a rendering surface.

    The delay before each literal character is drawn uniformly from
    ``[0, max_char_delay)`` and divided by the current text speed. Both the
    random source and the scheduler are injectable.
    """

    def __init__(
        self,
        terminal: TerminalApplication,
        surface: RenderSurface,
        registry: CommandRegistry,
        speed: TextSpeedController,
        scheduler: Scheduler,
        max_char_delay: float = DEFAULT_MAX_CHAR_DELAY,
        random: Callable[[], float] = _random.random,
    ) -> None:
        self._terminal = terminal
        self._surface = surface
        self._registry = registry
        self._speed = speed
        self._scheduler = scheduler
        self._max_char_delay = max_char_delay
        self._random = random
        self._pending = ""
        self._halted = False

    @property
    def pending(self) -> str:
        return self._pending

    @property
    def is_halted(self) -> bool:
        return self._halted

    @property
    def is_idle(self) -> bool:
        return self._halted or not self._pending

    def enqueue(self, text: str) -> None:
        """Append raw text, which may contain directives, to the queue."""
        if self._halted:
            logger.debug("Stream halted, discarding %d queued characters", len(text))
            return
        self._pending += text

    def char_delay(self, fraction: float) -> float:
        """Delay in seconds for a random ``fraction`` in ``[0, 1)``."""
        return fraction * self._max_char_delay / self._speed.get_speed()

    async def tick(self) -> StreamToken | None:
        """Consume one token; returns it, or None if nothing was consumed."""
        if self.is_idle:
            return None

        try:
            token, span = next_token(self._pending)
        except UnterminatedDirectiveError as e:
            self._halt(e)
            return None

        if isinstance(token, LiteralToken):
            await self._scheduler.sleep(self.char_delay(self._random()))
            self._surface.append(token.char)
            self._surface.scroll_to_end()
            self._pending = self._pending[span:]
        else:
            self._pending = self._pending[span:]
            await self._run_directive(token)

        return token

    async def _run_directive(self, token: DirectiveToken) -> None:
        command = self._registry.get(token.name)
        if command is None:
            logger.debug("Skipping unknown directive %r", token.name)
            return
        try:
            await command.execute(self._terminal, token.tokens)
        except Exception as e:
            logger.warning("Directive %r failed: %s", token.name, e)

    def _halt(self, error: UnterminatedDirectiveError) -> None:
        logger.warning(
            "%s; dropping %d pending characters and halting output",
            error, len(self._pending),
        )
        self._pending = ""
        self._halted = True
