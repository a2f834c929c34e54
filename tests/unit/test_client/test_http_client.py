"""Tests for the HttpTerminalClient."""

from __future__ import annotations

import json

import httpx
import pytest

from webshell.client.http import HttpTerminalClient, TerminalClientError


def _recording_transport(calls: list[tuple[str, str, dict | None]], fail_on: str = "") -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        calls.append((request.method, request.url.path, body))
        if request.url.path == fail_on:
            return httpx.Response(500, json={"detail": "boom"})
        if request.url.path == "/screen":
            return httpx.Response(200, json={"content": "hi_", "pending": 0})
        if request.url.path == "/drain":
            return httpx.Response(200, json={"status": "ok", "ticks": 4})
        return httpx.Response(200, json={"status": "ok"})

    return httpx.MockTransport(handler)


class TestHttpTerminalClient:
    def test_init_defaults(self) -> None:
        client = HttpTerminalClient()
        assert client._base_url == "http://localhost:8080"
        assert client._timeout == 10.0

    def test_init_strips_trailing_slash(self) -> None:
        client = HttpTerminalClient(base_url="http://192.168.1.100:9090/")
        assert client._base_url == "http://192.168.1.100:9090"

    @pytest.mark.asyncio
    async def test_send_line(self) -> None:
        calls: list = []
        async with HttpTerminalClient(transport=_recording_transport(calls)) as client:
            await client.send_line("echo hi")

        assert calls == [
            ("GET", "/health", None),
            ("POST", "/text", {"text": "echo hi"}),
            ("POST", "/keystroke", {"key": "Enter"}),
        ]

    @pytest.mark.asyncio
    async def test_key_combo_drain_and_screen(self) -> None:
        calls: list = []
        async with HttpTerminalClient(transport=_recording_transport(calls)) as client:
            await client.send_key_combo(["ctrl"], "c")
            assert await client.drain() == 4
            screen = await client.get_screen()

        assert screen["content"] == "hi_"
        assert ("POST", "/key-combo", {"modifiers": ["ctrl"], "key": "c"}) in calls

    @pytest.mark.asyncio
    async def test_connect_failure(self) -> None:
        client = HttpTerminalClient(transport=_recording_transport([], fail_on="/health"))
        with pytest.raises(TerminalClientError, match="Failed to connect"):
            await client.connect()

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self) -> None:
        calls: list = []
        async with HttpTerminalClient(transport=_recording_transport(calls, fail_on="/text")) as client:
            with pytest.raises(TerminalClientError) as exc_info:
                await client.send_text("x")
        assert exc_info.value.backend == "http"

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        with pytest.raises(TerminalClientError, match="Not connected"):
            await HttpTerminalClient().send_keystroke("a")
