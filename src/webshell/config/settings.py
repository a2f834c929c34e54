"""Configuration management for webshell.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/webshell.yaml")

# text displayed when the terminal is first loaded
DEFAULT_STARTUP_TEXT = (
    "INITIALIZING|sleep,0.4|.|sleep,0.4|.|sleep,0.4|.|sleep,0.3||clearline|"
    "Welcome to web-shell!\nType 'help' for commands\n|enableinput|"
)


class TerminalConfig(BaseModel):
    cursor: str = Field(default="_", min_length=1, description="Cursor glyph drawn at the insertion point")
    disable_input_during_command: bool = Field(default=True)
    default_text_speed: float = Field(default=1.0, gt=0)
    max_char_delay: float = Field(default=0.030, ge=0, description="Upper bound in seconds of the per-character delay")
    frame_interval: float = Field(default=1 / 60, gt=0, description="Seconds between host ticks")
    startup_text: str = Field(default=DEFAULT_STARTUP_TEXT)


class EndpointConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class ClientConfig(BaseModel):
    base_url: str = Field(default="http://localhost:8080")
    timeout: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for webshell.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "WEBSHELL_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: init values (YAML) > env vars > .env file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
