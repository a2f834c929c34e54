"""HTTP endpoint module for webshell.

Hosts a terminal session behind a small HTTP API: key events in,
rendered screen out. A background task drives the tick loop.
"""
