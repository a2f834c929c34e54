"""Rendering surface module for webshell.

The terminal engine never touches a concrete UI. It renders through the
abstract ``RenderSurface`` interface; ``MemorySurface`` keeps the text in
memory and backs both the HTTP endpoint and the tests.

Public API:
    RenderSurface -- Abstract base class
    MemorySurface -- In-memory implementation
"""

from webshell.display.base import RenderSurface
from webshell.display.memory import MemorySurface

__all__ = ["MemorySurface", "RenderSurface"]
