"""webshell -- Simulated interactive text terminal.

This package implements a terminal that streams output character by
character, interprets inline ``|name,arg|`` directives embedded in the
streamed text, and dispatches user-typed lines to a registry of commands.
Rendering and key capture are injected, so the same engine backs the HTTP
endpoint, the offline CLI runner and the test suite.
"""

__version__ = "0.1.0"
