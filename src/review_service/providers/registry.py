"""
Provider Registry

Resolves a caller-supplied provider name to its immutable connection
settings. Built once from configuration and never mutated afterwards.
"""

import logging
from typing import Dict, List, Optional

from ..config import AppConfig
from ..exceptions import ProviderConfigurationError
from ..models.provider import Dialect, Provider, ProviderName


logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Read-only lookup of configured AI providers.

    Providers without an API URL or key are not registered; resolving one
    of those names raises ProviderConfigurationError while names outside
    the supported set raise UnknownProviderError.
    """

    def __init__(self, providers: Optional[Dict[ProviderName, Provider]] = None):
        """
        Initialize provider registry.

        Args:
            providers: Mapping of provider name to loaded Provider
        """
        self._providers = dict(providers or {})

    @classmethod
    def from_config(cls, config: AppConfig) -> "ProviderRegistry":
        """
        Build registry from application configuration.

        Args:
            config: AppConfig with per-provider settings

        Returns:
            ProviderRegistry holding every fully configured provider
        """
        providers = {}

        for name in ProviderName:
            settings = config.providers.get(name)
            if not settings.api_url or not settings.api_key:
                logger.info(f"Provider {name.value} is not configured, skipping")
                continue

            providers[name] = Provider(
                name=name,
                api_url=settings.api_url,
                api_key=settings.api_key,
                default_model=settings.default_model or name.default_model,
            )

        logger.info(f"Loaded {len(providers)} AI providers: {[p.value for p in providers]}")
        return cls(providers)

    def resolve(self, name: Optional[str]) -> Provider:
        """
        Resolve provider by name (case-insensitive).

        Args:
            name: Provider name such as "ChatGPT" or "gemini"

        Returns:
            Configured Provider

        Raises:
            UnknownProviderError: Name outside the supported set
            ProviderConfigurationError: Provider known but not configured
        """
        provider_name = ProviderName.parse(name)

        provider = self._providers.get(provider_name)
        if provider is None:
            raise ProviderConfigurationError(
                f"{provider_name.display_name} API URL or key is not set in configuration"
            )
        return provider

    @staticmethod
    def dialect_for(name: Optional[str]) -> Dialect:
        """Wire dialect for a provider name; independent of configuration."""
        return ProviderName.parse(name).dialect

    def available(self) -> List[str]:
        """Names of configured providers."""
        return [name.value for name in ProviderName if name in self._providers]

    def __contains__(self, name: object) -> bool:
        if isinstance(name, ProviderName):
            return name in self._providers
        if isinstance(name, str):
            return name.strip().lower() in self.available()
        return False
