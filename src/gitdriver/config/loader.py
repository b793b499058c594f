"""Load and merge configuration from gitdriver.toml and GITDRIVER_* env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitdriver.config.schema import (
    ExecutionConfig,
    GitConfig,
    GitDriverConfig,
    LoggingConfig,
    ProtectionConfig,
    ProviderConfig,
)

CONFIG_FILENAME = "gitdriver.toml"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(directory: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = directory / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_bool(name: str) -> Optional[bool]:
    val = os.environ.get(name)
    if val is None:
        return None
    lowered = val.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {val!r}")


def _env_float(name: str) -> Optional[float]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return float(val)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {val!r}") from None


def _merge_env_overrides(cfg: GitDriverConfig) -> None:
    """Apply GITDRIVER_* environment variable overrides."""
    if val := os.environ.get("GITDRIVER_BASE_DIR"):
        cfg.git.base_dir = val
    if (flag := _env_bool("GITDRIVER_SIGN_COMMITS")) is not None:
        cfg.git.sign_commits = flag
    if (val := os.environ.get("GITDRIVER_PROTECTED_BRANCHES")) is not None:
        cfg.protection.protected_branches = [b.strip() for b in val.split(",") if b.strip()]
    if (flag := _env_bool("GITDRIVER_ENFORCE_PROTECTION")) is not None:
        cfg.protection.enforce = flag
    if (seconds := _env_float("GITDRIVER_TIMEOUT")) is not None:
        cfg.execution.timeout = seconds
    if (seconds := _env_float("GITDRIVER_NETWORK_TIMEOUT")) is not None:
        cfg.execution.network_timeout = seconds
    if val := os.environ.get("GITDRIVER_LOG_LEVEL"):
        if val.lower() in ("debug", "info", "warning", "error", "critical"):
            cfg.logging.level = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("GITDRIVER_LOG_FORMAT"):
        if val.lower() in ("text", "json"):
            cfg.logging.format = val.lower()  # type: ignore[assignment]
    if (flag := _env_bool("GITDRIVER_SERVERLESS")) is not None:
        cfg.provider.serverless = flag


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: GitDriverConfig) -> None:
    if cfg.execution.timeout <= 0 or cfg.execution.network_timeout <= 0:
        raise ConfigError("execution timeouts must be positive")
    if cfg.execution.max_output_bytes <= 0 or cfg.execution.diff_max_output_bytes <= 0:
        raise ConfigError("execution output limits must be positive")
    if not isinstance(cfg.protection.protected_branches, list):
        raise ConfigError("protection.protected_branches must be a list")


def load_config(
    directory: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> GitDriverConfig:
    """Load, validate, and return a GitDriverConfig."""
    config_path = find_config_file(directory or Path.cwd(), config_override)

    if config_path is None:
        cfg = GitDriverConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitDriverConfig(
            version=raw.get("version", "1.0"),
            git=_build_section(raw, GitConfig, "git"),
            execution=_build_section(raw, ExecutionConfig, "execution"),
            protection=_build_section(raw, ProtectionConfig, "protection"),
            logging=_build_section(raw, LoggingConfig, "logging"),
            provider=_build_section(raw, ProviderConfig, "provider"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
