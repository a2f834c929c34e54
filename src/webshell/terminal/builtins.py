"""Built-in terminal commands.

Every handler receives the terminal followed by the command tokens, the
command name first, and returns the text to display. The same handlers
run as inline directives, where their output is discarded.
"""

from __future__ import annotations

import math
import time
from typing import TYPE_CHECKING

from webshell.terminal.registry import CommandRegistry
from webshell.terminal.speed import TextSpeedError, parse_speed

if TYPE_CHECKING:
    from webshell.terminal.application import TerminalApplication


async def show_help(terminal: TerminalApplication, *args: str) -> str:
    if len(args) > 1:
        return terminal.registry.lookup_help(args[1])
    lines = ["Available commands:"]
    for name, brief in terminal.registry.list_all():
        lines.append(f"  {name} - {brief}" if brief else f"  {name}")
    return "\n".join(lines)


async def current_time(terminal: TerminalApplication, *args: str) -> str:
    """The current UNIX timestamp in milliseconds."""
    return str(int(time.time() * 1000))


async def echo(terminal: TerminalApplication, *args: str) -> str:
    return " ".join(args[1:])


async def clear(terminal: TerminalApplication, *args: str) -> str:
    terminal.clear()
    return ""


async def clear_line(terminal: TerminalApplication, *args: str) -> str:
    terminal.clear_line()
    return ""


async def enable_input(terminal: TerminalApplication, *args: str) -> str:
    terminal.enable_input()
    return ""


async def disable_input(terminal: TerminalApplication, *args: str) -> str:
    terminal.disable_input()
    return ""


def _parse_seconds(raw: str) -> float:
    try:
        seconds = float(raw)
    except ValueError:
        return 0.0
    if not math.isfinite(seconds) or seconds < 0:
        return 0.0
    return seconds


async def sleep(terminal: TerminalApplication, *args: str) -> str:
    seconds = _parse_seconds(args[1]) if len(args) > 1 else 0.0
    await terminal.scheduler.sleep(seconds)
    return ""


async def text_speed(terminal: TerminalApplication, *args: str) -> str:
    speed = terminal.speed
    if len(args) < 2:
        return f"text speed: {speed.get_speed():g}"

    if args[1] == "reset":
        speed.reset_speed()
        return f"text speed reset to {speed.get_speed():g}"

    try:
        speed.set_speed(parse_speed(args[1]))
    except TextSpeedError:
        return f"text speed must be positive, keeping {speed.get_speed():g}"
    return f"text speed set to {speed.get_speed():g}"


BUILTIN_COMMANDS = [
    (
        "help", show_help,
        "List commands or show help for one",
        "help [command]\nWithout an argument, lists every command. "
        "With a command name, shows its help text.",
    ),
    ("time", current_time, "Show the current UNIX timestamp in milliseconds", None),
    (
        "echo", echo,
        "Print the given text",
        "echo <text...>\nPrints the arguments joined by single spaces.",
    ),
    ("clear", clear, "Clear the screen", None),
    ("clearline", clear_line, "Clear the current line", None),
    ("enableinput", enable_input, "Enable keyboard input", None),
    ("disableinput", disable_input, "Disable keyboard input", None),
    (
        "sleep", sleep,
        "Pause for a number of seconds",
        "sleep <seconds>\nSuspends the command for the given (fractional) "
        "number of seconds. Invalid or negative values do not wait.",
    ),
    (
        "textspeed", text_speed,
        "Show or set the text speed multiplier",
        "textspeed [multiplier|reset]\nHigher values print faster. Without an "
        "argument, shows the current speed. 'reset' restores the default. "
        "Unparsable values set the speed to 1.",
    ),
]


def register_builtin_commands(registry: CommandRegistry) -> None:
    for name, handler, brief, help_text in BUILTIN_COMMANDS:
        registry.register(name, handler, brief, help_text)
