"""FastAPI HTTP server hosting a terminal session.

Receives key events via HTTP and feeds them to the terminal's input
state machine, while a background task drives the per-frame tick loop.
The rendered screen is available from ``/screen``.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from pydantic import BaseModel, Field

from webshell.config.settings import TerminalConfig
from webshell.display.memory import MemorySurface
from webshell.domain.models import KeyEvent, TerminalState
from webshell.host import TerminalHost
from webshell.terminal.application import TerminalApplication

logger = logging.getLogger(__name__)


class KeystrokeRequest(BaseModel):
    key: str = Field(min_length=1, description="Key name (e.g., 'Enter', 'Backspace', 'a')")


class KeyComboRequest(BaseModel):
    modifiers: list[str] = Field(description="Modifier keys (e.g., ['ctrl'])")
    key: str = Field(min_length=1, description="Main key in the combination")


class TextInputRequest(BaseModel):
    text: str = Field(description="Text to type")


class EndpointStatus(BaseModel):
    status: str = "ok"
    host_running: bool = False
    input_enabled: bool = False


class ScreenResponse(BaseModel):
    content: str
    pending: int
    halted: bool
    state: TerminalState


# Host key names to engine key names
KEY_MAP = {
    "Enter": "Enter",
    "Return": "Enter",
    "Backspace": "Backspace",
    "ArrowUp": "ArrowUp",
    "ArrowDown": "ArrowDown",
    "Up": "ArrowUp",
    "Down": "ArrowDown",
    "Space": " ",
    "Tab": "\t",
}


def resolve_key(key: str) -> str | None:
    """Map a host key name to an engine key, or None if unsupported."""
    if len(key) == 1:
        return key
    return KEY_MAP.get(key)


def create_app(
    terminal: TerminalApplication | None = None,
    host: TerminalHost | None = None,
    config: TerminalConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if host is not None:
        terminal = host.terminal
    if terminal is None:
        terminal = TerminalApplication(surface=MemorySurface(), config=config)
    if host is None:
        host = TerminalHost(terminal)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Startup
        h: TerminalHost = app.state.host
        app.state.run_task = asyncio.create_task(h.run())
        logger.info("Endpoint started (terminal host running)")
        yield
        # Shutdown
        h.close()
        app.state.run_task.cancel()
        try:
            await app.state.run_task
        except asyncio.CancelledError:
            pass
        logger.info("Endpoint stopped")

    app = FastAPI(
        title="webshell Endpoint",
        description="HTTP endpoint for a simulated webshell terminal",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.terminal = terminal
    app.state.host = host

    @app.get("/health")
    async def health_check() -> EndpointStatus:
        return EndpointStatus(
            status="ok",
            host_running=app.state.host.is_running,
            input_enabled=app.state.terminal.input.is_enabled,
        )

    @app.post("/keystroke")
    async def receive_keystroke(request: KeystrokeRequest) -> dict[str, str]:
        key = resolve_key(request.key)
        if key is None:
            return {"status": "ignored", "reason": f"Unknown key: {request.key}"}
        await app.state.host.handle_key(KeyEvent(key=key))
        return {"status": "ok", "key": request.key}

    @app.post("/key-combo")
    async def receive_key_combo(request: KeyComboRequest) -> dict[str, str]:
        modifiers = [m.lower() for m in request.modifiers]
        if modifiers == ["ctrl"] and request.key.lower() == "c":
            await app.state.host.handle_key(KeyEvent(key="c", ctrl=True))
            return {"status": "ok", "combo": f"ctrl+{request.key}"}
        return {"status": "ignored", "reason": "Unsupported combo"}

    @app.post("/text")
    async def receive_text(request: TextInputRequest) -> dict[str, str]:
        h: TerminalHost = app.state.host
        last = len(request.text) - 1
        for i, char in enumerate(request.text):
            if char != "\n":
                await h.handle_key(KeyEvent(key=char))
                continue
            await h.handle_key(KeyEvent(key="Enter"))
            # input stays disabled until the command output has streamed
            if i < last:
                await h.drain()
        return {"status": "ok", "length": str(len(request.text))}

    @app.post("/drain")
    async def drain_output() -> dict[str, Any]:
        ticks = await app.state.host.drain()
        return {"status": "ok", "ticks": ticks}

    @app.get("/screen")
    async def get_screen_content() -> ScreenResponse:
        t: TerminalApplication = app.state.terminal
        surface = t.surface
        content = surface.text if isinstance(surface, MemorySurface) else ""
        return ScreenResponse(
            content=content,
            pending=len(t.stream.pending),
            halted=t.stream.is_halted,
            state=t.state,
        )

    return app

