"""Configuration file loading utilities.

This module handles loading, parsing, merging and validating the TOML
configuration files.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles
import aiofiles.os

from .config import Configuration
from .constants import CONFIG_FILE, CONFIG_SECTION
from .models import ConfigError
from .schema import ROUTER_CONFIG_SCHEMA
from .validation import ConfigValidator

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

__all__ = ["ConfigLoader", "merge"]


def merge(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge `source` into `target`: tables are merged, arrays appended.

    Returns:
        `target`
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            current.extend(value)
        else:
            target[key] = value
    return target


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports:
    - A single TOML file
    - Directory-based config (every .toml file merged, in name order)
    - `include` directives in the [chatroute] section
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._config: dict[str, Any] = {}

    @property
    def config(self) -> dict[str, Any]:
        """Return the loaded configuration."""
        return self._config

    async def load(self, config_filename: str = "") -> dict[str, Any]:
        """Load configuration from file or directory.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses default CONFIG_FILE location.

        Returns:
            The loaded and merged configuration dictionary.

        Raises:
            ConfigError: If config file not found or has syntax errors.
        """
        config = await self._open_config(config_filename)
        merge(self._config, config)
        return self._config

    def section(self) -> Configuration:
        """Validate and return the [chatroute] section.

        Raises:
            ConfigError: if the section is missing or invalid (errors are logged)
        """
        raw = self._config.get(CONFIG_SECTION)
        if not isinstance(raw, dict):
            self.log.critical("Missing [%s] section in the configuration", CONFIG_SECTION)
            raise ConfigError
        validator = ConfigValidator(raw, CONFIG_SECTION, self.log)
        errors = validator.validate(ROUTER_CONFIG_SCHEMA)
        validator.warn_unknown_keys(ROUTER_CONFIG_SCHEMA)
        for error in errors:
            self.log.error(error)
        if errors:
            raise ConfigError(f"{len(errors)} configuration error(s)")
        return Configuration(raw, logger=self.log, schema=ROUTER_CONFIG_SCHEMA)

    async def _open_config(self, config_filename: str = "") -> dict[str, Any]:
        """Load config file(s) into a dictionary, following includes."""
        fname = Path(os.path.expandvars(config_filename)).expanduser() if config_filename else CONFIG_FILE

        if await aiofiles.os.path.isdir(fname):
            config = await self._load_config_directory(fname)
        else:
            config = await self._load_config_file(fname)

        for extra_config in list(config.get(CONFIG_SECTION, {}).get("include", [])):
            merge(config, await self._open_config(extra_config))

        return config

    async def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory."""
        config: dict[str, Any] = {}
        for toml_file in sorted(await aiofiles.os.listdir(directory)):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, await self._load_config_file(directory / toml_file))
        return config

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not await aiofiles.os.path.exists(fname):
            self.log.critical("Config file not found! Please create %s", fname)
            raise ConfigError(str(fname))
        self.log.info("Loading %s", fname)
        async with aiofiles.open(fname, "rb") as f:
            data = await f.read()
        try:
            return tomllib.loads(data.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise ConfigError(str(fname)) from e
