"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

DEFAULT_PROTECTED_BRANCHES = ["main", "master", "production", "prod", "develop", "dev"]


@dataclass
class GitConfig:
    binary: str = "git"
    base_dir: Optional[str] = None  # working directories must stay inside this root
    sign_commits: bool = False
    default_branch: Optional[str] = None  # None = let git decide (init.defaultBranch)


@dataclass
class ExecutionConfig:
    timeout: float = 60.0  # seconds, local operations
    network_timeout: float = 300.0  # seconds, clone/fetch/pull/push
    max_output_bytes: int = 10 * 1024 * 1024
    diff_max_output_bytes: int = 20 * 1024 * 1024  # diff and show


@dataclass
class ProtectionConfig:
    enforce: bool = True
    protected_branches: List[str] = field(default_factory=lambda: list(DEFAULT_PROTECTED_BRANCHES))


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"
    format: Literal["text", "json"] = "text"


@dataclass
class ProviderConfig:
    serverless: bool = False  # no local process spawning available
    custom_error_patterns: Optional[str] = None  # path to a YAML pattern file


@dataclass
class GitDriverConfig:
    version: str = "1.0"
    git: GitConfig = field(default_factory=GitConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    protection: ProtectionConfig = field(default_factory=ProtectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
