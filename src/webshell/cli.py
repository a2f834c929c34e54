"""Command-line interface for webshell.

Provides the main entry point for serving a terminal over HTTP, sending
keys to a running endpoint, or running lines against an offline terminal.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="webshell",
        description="Simulated interactive text terminal",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/webshell.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Start the HTTP terminal endpoint")

    send_parser = subparsers.add_parser("send", help="Send keys to a running endpoint")
    send_group = send_parser.add_mutually_exclusive_group(required=True)
    send_group.add_argument("--line", type=str, help="Type a line and press Enter")
    send_group.add_argument("--key", type=str, help="Press a single named key")
    send_group.add_argument("--ctrl-c", action="store_true", help="Send Ctrl+C")

    exec_parser = subparsers.add_parser(
        "exec", help="Run lines against an offline terminal and print the screen",
    )
    exec_parser.add_argument("lines", nargs="+", help="Command lines to run in order")
    exec_parser.add_argument(
        "--with-startup", action="store_true",
        help="Render the configured startup text first",
    )

    return parser.parse_args(argv)


async def _send(settings, args) -> None:
    """Send keys to a running endpoint and print the screen afterwards."""
    from webshell.client.http import HttpTerminalClient

    async with HttpTerminalClient(
        base_url=settings.client.base_url,
        timeout=settings.client.timeout,
    ) as client:
        if args.line is not None:
            await client.send_line(args.line)
        elif args.key is not None:
            await client.send_keystroke(args.key)
        else:
            await client.send_key_combo(["ctrl"], "c")
        await client.drain()
        screen = await client.get_screen()

    print(screen["content"])


async def run_offline(lines: list[str], config, with_startup: bool = False) -> str:
    """Type ``lines`` into a terminal that never waits; return the screen."""
    from webshell.display.memory import MemorySurface
    from webshell.domain.models import KeyEvent
    from webshell.host import TerminalHost
    from webshell.terminal.application import TerminalApplication
    from webshell.terminal.scheduler import ImmediateScheduler

    if not with_startup:
        config = config.model_copy(update={"startup_text": "|enableinput|"})

    surface = MemorySurface()
    terminal = TerminalApplication(
        surface=surface, config=config, scheduler=ImmediateScheduler(),
    )
    host = TerminalHost(terminal, scheduler=ImmediateScheduler())
    await host.drain()

    for line in lines:
        for char in line:
            await host.handle_key(KeyEvent(key=char))
        await host.handle_key(KeyEvent(key="Enter"))
        await host.drain()
        if terminal.stream.is_halted:
            logger.warning("Output halted; skipping remaining lines")
            break

    return surface.text


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the webshell CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from webshell.config.settings import load_settings
    from webshell.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        logger.info("Starting endpoint server")
        from webshell.endpoint.server import create_app
        import uvicorn
        app = create_app(config=settings.terminal)
        uvicorn.run(
            app,
            host=settings.endpoint.host,
            port=settings.endpoint.port,
        )

    elif args.command == "send":
        from webshell.client.http import TerminalClientError
        try:
            asyncio.run(_send(settings, args))
        except TerminalClientError as e:
            print(f"error: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "exec":
        screen = asyncio.run(
            run_offline(args.lines, settings.terminal, with_startup=args.with_startup)
        )
        print(screen)


if __name__ == "__main__":
    main()
