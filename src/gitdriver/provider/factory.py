"""Provider selection with capability checks and a per-type cache."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional

from gitdriver.config.schema import GitDriverConfig
from gitdriver.log import get_logger
from gitdriver.provider.base import GitProvider
from gitdriver.provider.cli_provider import CliGitProvider


class ProviderType(str, Enum):
    CLI = "cli"


class ProviderUnavailableError(Exception):
    """No provider can serve the request in this environment."""


class ProviderFactory:
    """Builds and caches one provider per type.

    Constructed explicitly and passed to whatever needs it; there is no
    module-level instance.
    """

    def __init__(self, config: Optional[GitDriverConfig] = None) -> None:
        self.config = config or GitDriverConfig()
        self._cache: Dict[ProviderType, GitProvider] = {}

    def get(
        self,
        provider_type: ProviderType = ProviderType.CLI,
        required_capabilities: Iterable[str] = (),
    ) -> GitProvider:
        if self.config.provider.serverless:
            raise ProviderUnavailableError(
                "The git CLI provider cannot run in a serverless environment (no process spawning)"
            )

        provider = self._cache.get(provider_type)
        if provider is None:
            provider = self._create(provider_type)
            self._cache[provider_type] = provider
            get_logger().debug("provider.created", provider=provider.name)

        missing = provider.capabilities.missing(required_capabilities)
        if missing:
            raise ProviderUnavailableError(
                f"Provider '{provider.name}' lacks required capabilities: {', '.join(missing)}"
            )
        return provider

    def _create(self, provider_type: ProviderType) -> GitProvider:
        if provider_type is ProviderType.CLI:
            return CliGitProvider(self.config)
        raise ProviderUnavailableError(f"Unknown provider type {provider_type!r}")

    def clear_cache(self) -> None:
        self._cache.clear()
