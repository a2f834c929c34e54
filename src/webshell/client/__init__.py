"""HTTP client for a running webshell endpoint.

Public API:
    HttpTerminalClient -- Async client for the endpoint routes
    TerminalClientError -- Raised when a request fails
"""

from webshell.client.http import HttpTerminalClient, TerminalClientError

__all__ = ["HttpTerminalClient", "TerminalClientError"]
