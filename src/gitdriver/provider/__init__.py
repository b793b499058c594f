"""Provider facade, capabilities, and factory."""

from gitdriver.provider.base import Capabilities, GitProvider
from gitdriver.provider.cli_provider import CliGitProvider
from gitdriver.provider.factory import ProviderFactory, ProviderType, ProviderUnavailableError

__all__ = [
    "Capabilities",
    "CliGitProvider",
    "GitProvider",
    "ProviderFactory",
    "ProviderType",
    "ProviderUnavailableError",
]
