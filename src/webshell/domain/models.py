"""Core domain models for the webshell terminal.

These models represent the data flowing through the engine: tokens
consumed from the pending output queue, key events delivered by the host,
and point-in-time snapshots of the terminal state.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class InputMode(str, enum.Enum):
    """Whether the terminal currently accepts keyboard input."""

    DISABLED = "disabled"
    ENABLED = "enabled"


# ---------------------------------------------------------------------------
# Stream Tokens (discriminated union)
# ---------------------------------------------------------------------------


class LiteralToken(BaseModel):
    """A single character to be rendered."""

    model_config = ConfigDict(frozen=True)

    token_type: Literal["literal"] = "literal"
    char: str = Field(min_length=1, max_length=1, description="The character to render")


class DirectiveToken(BaseModel):
    """An inline directive such as ``|sleep,0.4|``.

    The directive name shares one namespace with registered commands.
    """

    model_config = ConfigDict(frozen=True)

    token_type: Literal["directive"] = "directive"
    name: str = Field(description="Command name looked up in the registry")
    args: tuple[str, ...] = Field(default=(), description="Comma-separated arguments after the name")

    @property
    def tokens(self) -> list[str]:
        """The name followed by the arguments, as handed to command handlers."""
        return [self.name, *self.args]


StreamToken = Annotated[
    Union[LiteralToken, DirectiveToken],
    Field(discriminator="token_type"),
]


# ---------------------------------------------------------------------------
# Input Models
# ---------------------------------------------------------------------------


class KeyEvent(BaseModel):
    """A key press delivered by the host.

    ``key`` follows browser naming: printable keys are single characters,
    everything else is a name such as ``Enter``, ``Backspace``,
    ``ArrowUp`` or ``Shift``.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, description="Key name or printable character")
    ctrl: bool = Field(default=False, description="Whether Control was held")

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1


# ---------------------------------------------------------------------------
# Terminal State
# ---------------------------------------------------------------------------


class TerminalState(BaseModel):
    """Snapshot of the mutable terminal state at a point in time."""

    model_config = ConfigDict(frozen=True)

    input_enabled: bool = Field(description="Whether key events are processed")
    text_speed: float = Field(gt=0, description="Current text speed multiplier")
    previous_text_speed: float = Field(description="Speed in effect before the last change")
    input_buffer: str = Field(default="", description="Keys typed since the last Enter")
    cursor_glyph: str = Field(description="Marker drawn at the insertion point")
    history_length: int = Field(default=0, ge=0, description="Entries in the history log")

    @property
    def input_mode(self) -> InputMode:
        return InputMode.ENABLED if self.input_enabled else InputMode.DISABLED


# ---------------------------------------------------------------------------
# Application Metadata
# ---------------------------------------------------------------------------


class ApplicationInfo(BaseModel):
    """Name, version and description of an application run by the shell."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version: str = "1.0.0"
    description: str = ""
