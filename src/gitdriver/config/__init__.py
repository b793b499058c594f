"""Configuration loading, schema, and defaults."""

from gitdriver.config.loader import ConfigError, load_config
from gitdriver.config.schema import DEFAULT_PROTECTED_BRANCHES, GitDriverConfig

__all__ = [
    "ConfigError",
    "DEFAULT_PROTECTED_BRANCHES",
    "GitDriverConfig",
    "load_config",
]
