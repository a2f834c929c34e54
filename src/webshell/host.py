"""Host driver for a terminal session.

Drives the terminal the way a UI frame loop would: one tick per frame
while the application is running, with key events delivered in between.
Ticks and key events share one lock, so they never interleave even while
a tick or a command is suspended.
"""

from __future__ import annotations

import asyncio
import logging

from webshell.domain.models import ApplicationInfo, KeyEvent, StreamToken
from webshell.terminal.application import TerminalApplication
from webshell.terminal.scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

TERMINAL_INFO = ApplicationInfo(name="Terminal", version="1.0.0", description="Terminal")


class TerminalHost:
    """Runs the per-frame loop for one ``TerminalApplication``.

    Commands are not interruptible: a key pressed while ``sleep`` runs
    waits for the lock and is processed after the command returns.
    """

    def __init__(
        self,
        terminal: TerminalApplication,
        frame_interval: float | None = None,
        scheduler: Scheduler | None = None,
        info: ApplicationInfo = TERMINAL_INFO,
    ) -> None:
        self._terminal = terminal
        self._info = info
        self._frame_interval = (
            frame_interval if frame_interval is not None
            else terminal.config.frame_interval
        )
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._lock = asyncio.Lock()
        self._running = False
        self._closed = False
        self._frames = 0

    @property
    def terminal(self) -> TerminalApplication:
        return self._terminal

    @property
    def info(self) -> ApplicationInfo:
        return self._info

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def frames(self) -> int:
        return self._frames

    async def run(self) -> None:
        """Tick once per frame until ``close()`` is called.

        A close request is observed after the current iteration completes;
        a host closed before it started never runs.
        """
        if self._closed:
            logger.debug("%s closed before it started", self._info.name)
            return
        self._running = True
        logger.info(
            "%s %s starting (frame interval %.3fs)",
            self._info.name, self._info.version, self._frame_interval,
        )
        try:
            while self._running:
                await self.tick()
                self._frames += 1
                await self._scheduler.sleep(self._frame_interval)
        finally:
            self._running = False
            logger.info("Terminal host stopped after %d frames", self._frames)

    def close(self) -> None:
        """Ask the loop to exit after its current iteration."""
        self._running = False
        self._closed = True
        logger.info("Terminal host close requested")

    async def tick(self) -> StreamToken | None:
        async with self._lock:
            return await self._terminal.tick()

    async def handle_key(self, event: KeyEvent) -> None:
        async with self._lock:
            await self._terminal.handle_key(event)

    async def drain(self, max_ticks: int = 100_000) -> int:
        """Tick until the pending output is consumed; returns ticks used."""
        ticks = 0
        while not self._terminal.stream.is_idle and ticks < max_ticks:
            await self.tick()
            ticks += 1
        if not self._terminal.stream.is_idle:
            logger.warning("Output not drained after %d ticks", max_ticks)
        return ticks
