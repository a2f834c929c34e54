"""Configuration management for webshell.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides with the ``WEBSHELL_`` prefix.
"""

from webshell.config.settings import Settings, TerminalConfig, load_settings

__all__ = ["Settings", "TerminalConfig", "load_settings"]
