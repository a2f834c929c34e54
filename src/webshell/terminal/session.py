"""Text output capability shared by the terminal components.

Wraps a rendering surface and the stream processor behind the small set
of operations commands and the input state machine need: queue text for
streaming, draw text immediately, and erase.
"""

from __future__ import annotations

from webshell.display.base import RenderSurface
from webshell.terminal.stream import StreamProcessor


class TextSession:
    def __init__(self, surface: RenderSurface, stream: StreamProcessor) -> None:
        self._surface = surface
        self._stream = stream

    def echo(self, *strings: str) -> None:
        """Queue the strings, joined by single spaces, for streaming.

        Directives inside the text run when the stream reaches them.
        """
        self._stream.enqueue(" ".join(strings))

    def add_text(self, text: str) -> None:
        """Draw text immediately, bypassing the stream."""
        self._surface.append(text)
        self._surface.scroll_to_end()

    def backspace(self, n: int = 1) -> None:
        self._surface.erase_last(n)

    def clear(self) -> None:
        self._surface.clear_all()

    def clear_line(self) -> None:
        self._surface.clear_to_last_newline()
