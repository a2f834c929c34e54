"""In-memory rendering surface."""

from __future__ import annotations

import logging

from webshell.display.base import RenderSurface

logger = logging.getLogger(__name__)


class MemorySurface(RenderSurface):
    """Keeps rendered text in a string.

    Used as the backing store of the HTTP endpoint and as the test double
    for the engine. ``scroll_count`` counts ``scroll_to_end`` calls so tests
    can observe that rendering keeps the view pinned.
    """

    def __init__(self) -> None:
        self._text = ""
        self.scroll_count = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> list[str]:
        return self._text.split("\n")

    def append(self, text: str) -> None:
        self._text += text

    def erase_last(self, n: int = 1) -> None:
        if n <= 0:
            return
        self._text = self._text[:-n] if n < len(self._text) else ""

    def clear_all(self) -> None:
        self._text = ""

    def clear_to_last_newline(self) -> None:
        line_start = self._text.rfind("\n")
        self._text = self._text[: line_start + 1]

    def scroll_to_end(self) -> None:
        self.scroll_count += 1
