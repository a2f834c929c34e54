"""Input history with up/down navigation."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class HistoryManager:
    """Ordered log of submitted lines plus a navigation cursor.

    ``navigate_up`` returns the entry under the cursor and then moves the
    cursor back one step, so the first press after a submit shows the
    line just submitted. A non-empty, unsaved buffer is appended as a
    save point before browsing, which lets ``navigate_down`` bring the
    in-progress edit back.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def _last_index(self) -> int:
        return len(self._entries) - 1

    def submit(self, line: str) -> None:
        self._entries.append(line)
        self._cursor = self._last_index

    def navigate_up(self, buffer: str) -> str | None:
        """Return the entry to show after an ArrowUp, or None if empty."""
        if not self._entries:
            return None

        if (
            self._cursor == self._last_index
            and buffer
            and buffer != self._entries[self._cursor]
        ):
            self._entries.append(buffer)
            logger.debug("Saved in-progress input as history entry %d", self._last_index)

        entry = self._entries[self._cursor]
        if self._cursor > 0:
            self._cursor -= 1
        return entry

    def navigate_down(self, buffer: str) -> str | None:
        """Return the next newer entry, or None when already at the newest."""
        if self._cursor < self._last_index:
            self._cursor += 1
            return self._entries[self._cursor]
        return None
