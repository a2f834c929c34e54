"""Terminal engine for webshell.

Contains the stream processor, the command registry and dispatcher, the
history manager, the text speed controller and the input state machine,
composed by ``TerminalApplication``.

Public API:
    TerminalApplication -- One interactive terminal session
    CommandRegistry -- Ordered command table
    StreamProcessor -- Pending output queue drained one token per tick
"""

from webshell.terminal.application import TerminalApplication
from webshell.terminal.registry import Command, CommandRegistry
from webshell.terminal.scheduler import AsyncioScheduler, ImmediateScheduler, Scheduler
from webshell.terminal.stream import StreamProcessor
from webshell.terminal.speed import TextSpeedError

__all__ = [
    "AsyncioScheduler",
    "Command",
    "CommandRegistry",
    "ImmediateScheduler",
    "Scheduler",
    "StreamProcessor",
    "TerminalApplication",
    "TextSpeedError",
]
