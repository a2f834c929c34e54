"""Coordinator for the terminal sessions of one webshell.

Runs any number of ``TerminalHost`` instances side by side and routes
key events to whichever of them currently has focus. The most recently
started session takes focus; when the focused session exits, focus falls
back to the oldest session still running.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from webshell.domain.models import ApplicationInfo, KeyEvent
from webshell.host import TERMINAL_INFO, TerminalHost
from webshell.terminal.application import TerminalApplication
from webshell.terminal.scheduler import Scheduler

logger = logging.getLogger(__name__)


class Webshell:
    """Starts terminal sessions and hands keys to the focused one."""

    def __init__(
        self,
        terminal_factory: Callable[[], TerminalApplication] | None = None,
        frame_interval: float | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._terminal_factory = terminal_factory or TerminalApplication
        self._frame_interval = frame_interval
        self._scheduler = scheduler
        self._hosts: list[TerminalHost] = []
        self._tasks: dict[TerminalHost, asyncio.Task[None]] = {}
        self._focused: TerminalHost | None = None

    @property
    def focused(self) -> TerminalHost | None:
        return self._focused

    @property
    def running_applications(self) -> list[TerminalHost]:
        return list(self._hosts)

    def start_application(self, host: TerminalHost) -> asyncio.Task[None]:
        """Focus ``host`` and start its frame loop in a background task."""
        self._focused = host
        self._hosts.append(host)
        task = asyncio.create_task(self._run(host))
        self._tasks[host] = task
        logger.info(
            "Started %s (%d running)", host.info.name, len(self._hosts),
        )
        return task

    async def _run(self, host: TerminalHost) -> None:
        try:
            await host.run()
        finally:
            self._hosts = [h for h in self._hosts if h is not host]
            self._tasks.pop(host, None)
            if self._focused is host:
                self._focused = self._hosts[0] if self._hosts else None
            logger.info("%s finished (%d running)", host.info.name, len(self._hosts))

    async def handle_key(self, event: KeyEvent) -> bool:
        """Deliver ``event`` to the focused session; False if there is none."""
        if self._focused is None:
            logger.debug("No focused application, dropping key %r", event.key)
            return False
        await self._focused.handle_key(event)
        return True

    def start(self) -> TerminalHost:
        """Create and start the main terminal session."""
        host = self._new_host()
        self.start_application(host)
        return host

    def _new_host(self, info: ApplicationInfo = TERMINAL_INFO) -> TerminalHost:
        host = TerminalHost(
            self._terminal_factory(),
            frame_interval=self._frame_interval,
            scheduler=self._scheduler,
            info=info,
        )

        def new_terminal(terminal: TerminalApplication, *args: str) -> str:
            self.start_application(self._new_host())
            return f"Started terminal session {len(self._hosts)}"

        def exit_terminal(terminal: TerminalApplication, *args: str) -> str:
            host.close()
            return ""

        host.terminal.register_command(
            "newterm", new_terminal, "Open another terminal session",
        )
        host.terminal.register_command(
            "exit", exit_terminal, "Close this terminal session",
        )
        return host

    async def wait(self, host: TerminalHost) -> None:
        """Wait until ``host`` has stopped and been removed."""
        task = self._tasks.get(host)
        if task is not None:
            await task

    async def close(self) -> None:
        """Stop every running session and wait for them to finish."""
        tasks = list(self._tasks.values())
        for host in list(self._hosts):
            host.close()
        if tasks:
            await asyncio.gather(*tasks)
