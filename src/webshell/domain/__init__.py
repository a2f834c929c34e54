"""Domain models for webshell.

This package contains the value objects shared across the terminal
engine: stream tokens, key events and terminal state snapshots. All
models use Pydantic v2 for validation and serialization.
"""

from webshell.domain.models import (
    ApplicationInfo,
    DirectiveToken,
    InputMode,
    KeyEvent,
    LiteralToken,
    StreamToken,
    TerminalState,
)

__all__ = [
    "ApplicationInfo",
    "DirectiveToken",
    "InputMode",
    "KeyEvent",
    "LiteralToken",
    "StreamToken",
    "TerminalState",
]
