"""Configuration for filekeep.

Settings are a plain pydantic model loaded from a JSON file and passed
explicitly to ``create_app``. Nothing here is a process-wide singleton, so
tests can run side by side with different configurations.

File format::

    {
      "listen": {"addr": "", "port": 8080},
      "root": ".",
      "hide": [],
      "hide_extensions": [".bak", ".DS_Store"],
      "hide_dots": true,
      "debug": false
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from filekeep.fs.errors import FilekeepError
from filekeep.fs.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_PORT = 8080


class ConfigError(FilekeepError):
    """Config file could not be read, parsed, or written."""


class ListenSettings(BaseModel):
    """Listening address and port."""

    addr: str = ""
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)

    @field_validator("port")
    @classmethod
    def _default_port(cls, v: int) -> int:
        return v or DEFAULT_PORT

    @property
    def host(self) -> str:
        return self.addr or "0.0.0.0"

    @property
    def address(self) -> str:
        return f"{self.addr}:{self.port}"


class Settings(BaseModel):
    listen: ListenSettings = Field(default_factory=ListenSettings)
    root: str = "."
    hide: list[str] = Field(default_factory=list)
    hide_extensions: list[str] = Field(default_factory=lambda: [".bak", ".DS_Store"])
    hide_dots: bool = True
    debug: bool = False

    @field_validator("root")
    @classmethod
    def _default_root(cls, v: str) -> str:
        return v or "."

    def visibility_policy(self) -> VisibilityPolicy:
        return VisibilityPolicy.from_lists(self.hide, self.hide_extensions, self.hide_dots)

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CONFIG_FILE) -> Settings:
        """Load settings from a JSON file, raising ``ConfigError`` on any failure."""
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"couldn't read config file {path}: {e}") from e

        try:
            settings = cls.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigError(f"couldn't parse config file {path}: {e}") from e

        logger.debug("loaded config from %s", path)
        return settings

    def save(self, path: str | Path = DEFAULT_CONFIG_FILE) -> Path:
        path = Path(path)
        try:
            path.write_text(json.dumps(self.model_dump(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"couldn't write config file {path}: {e}") from e
        return path


def dump_default_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Path:
    """Write the default configuration to *path* and return it."""
    return Settings().save(path)
