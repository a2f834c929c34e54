"""Suspension seam for the terminal engine.

The stream processor's per-character delay and the ``sleep`` command are
the only places the engine waits. Both go through a ``Scheduler`` so tests
and offline runs can skip the waiting entirely.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod


class Scheduler(ABC):
    """Cooperative "suspend for a duration" capability."""

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the caller for ``seconds`` (non-positive means no wait)."""
        ...


class AsyncioScheduler(Scheduler):
    """Suspends on the running asyncio event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(seconds, 0.0))


class ImmediateScheduler(Scheduler):
    """Never waits; records every requested delay in ``requested``."""

    def __init__(self) -> None:
        self.requested: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.requested.append(seconds)
