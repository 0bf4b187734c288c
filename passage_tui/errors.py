from __future__ import annotations


class ConfigError(Exception):
    """Startup failure while loading the passage config."""


class ConfigUnreadable(ConfigError):
    """The config file is missing or cannot be read."""


class ConfigMalformed(ConfigError):
    """The config file is not valid TOML or does not match the schema."""
