"""Abstract base class for rendering surfaces.

All surfaces must conform to this interface, so the stream processor and
the input state machine can draw into an in-memory buffer, a browser
window or a console without knowing which one they are talking to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RenderSurface(ABC):
    """Abstract interface for the text area the terminal draws into.

    Example usage::

        surface = MemorySurface()
        surface.append("hello\\nwor")
        surface.clear_to_last_newline()
        assert surface.text == "hello\\n"
    """

    @abstractmethod
    def append(self, text: str) -> None:
        """Append text at the end of the rendered content."""
        ...

    @abstractmethod
    def erase_last(self, n: int = 1) -> None:
        """Remove the last ``n`` rendered characters.

        Erasing more characters than exist leaves the surface empty.
        """
        ...

    @abstractmethod
    def clear_all(self) -> None:
        """Erase everything rendered so far."""
        ...

    @abstractmethod
    def clear_to_last_newline(self) -> None:
        """Erase back to (but not including) the last newline character.

        With no newline present the whole content is erased.
        """
        ...

    def scroll_to_end(self) -> None:
        """Keep the end of the content in view.

        Surfaces without a viewport have nothing to do.
        """
