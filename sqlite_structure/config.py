"""
Configuration management for sqlite-structure.

Loads and validates configuration from sqlite-structure.toml files and
SQLITE_STRUCTURE_* environment variables using Pydantic. Configuration only
affects how the CLI opens databases and prints results; describe() itself
takes no options.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqlite_structure.exceptions import ConfigError

CONFIG_FILENAME = "sqlite-structure.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TOML_ESCAPES = {'"': '\\"', "\\": "\\\\", "\b": "\\b", "\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r"}


def _toml_string(value: str) -> str:
    """Render a TOML basic string (also valid as a quoted key)."""
    chars = []
    for char in value:
        if char in _TOML_ESCAPES:
            chars.append(_TOML_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chars.append(f"\\u{ord(char):04X}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    path: Optional[str] = Field(default=None, description="Database file to describe")
    attach: dict[str, str] = Field(
        default_factory=dict,
        description="Extra databases to ATTACH, keyed by schema name",
    )
    read_only: bool = Field(default=True, description="Open databases with mode=ro")

    @field_validator("attach")
    @classmethod
    def _check_schema_names(cls, value: dict[str, str]) -> dict[str, str]:
        for schema in value:
            if schema.lower() in ("main", "temp"):
                raise ValueError(f"cannot attach a database as reserved schema '{schema}'")
        return value


class OutputConfig(BaseModel):
    """Output configuration."""

    indent: Optional[int] = Field(default=2, description="JSON indent (None for compact)")
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class Config(BaseSettings):
    """Main configuration for sqlite-structure."""

    model_config = SettingsConfigDict(
        env_prefix="SQLITE_STRUCTURE_",
        env_nested_delimiter="__",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Config:
        """
        Load configuration from TOML file.

        Args:
            path: Path to sqlite-structure.toml file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls(**data)
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Config:
        """
        Find and load configuration from sqlite-structure.toml.

        Searches for sqlite-structure.toml starting from start_dir and walking
        up parent directories until found or reaching filesystem root.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If no config file found
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        # Walk up directory tree
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found in {start_dir} or parent directories. "
            f"Run 'sqlite-structure init' to create one."
        )

    @classmethod
    def load_or_default(cls, start_dir: Optional[Path] = None) -> Config:
        """Like find_and_load, but fall back to defaults when no file exists."""
        try:
            return cls.find_and_load(start_dir)
        except FileNotFoundError:
            return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write sqlite-structure.toml
        """
        config_path = Path(path)

        lines = ["# sqlite-structure configuration", "", "[database]"]
        if self.database.path is not None:
            lines.append(f"path = {_toml_string(self.database.path)}")
        lines.append(f"read_only = {str(self.database.read_only).lower()}")
        lines += ["", "[database.attach]"]
        lines += [
            f"{_toml_string(schema)} = {_toml_string(path)}"
            for schema, path in self.database.attach.items()
        ]
        lines += ["", "[output]"]
        if self.output.indent is not None:
            lines.append(f"indent = {self.output.indent}")
        lines.append(f"log_level = {_toml_string(self.output.log_level)}")

        config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def parse_attach(values: Iterable[str]) -> dict[str, str]:
    """
    Parse NAME=PATH pairs into an attach mapping.

    Raises:
        ConfigError: If an entry has no '=' or an empty side
    """
    attach: dict[str, str] = {}
    for value in values:
        schema, sep, path = value.partition("=")
        schema, path = schema.strip(), path.strip()
        if not sep or not schema or not path:
            raise ConfigError(f"Invalid attach entry '{value}', expected NAME=PATH")
        attach[schema] = path
    return attach
