import logging
from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType

from app.core.settings import Settings
from app.oauth.exceptions import InvalidProviderError
from app.oauth.providers import (
    GITHUB_PROVIDER_NAME,
    GOOGLE_PROVIDER_NAME,
    github_provider_config,
    google_provider_config,
)
from app.oauth.types import ProviderConfig

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, str | None, str], ProviderConfig]


class ProviderRegistry:
    """Read-only mapping of provider name to ProviderConfig."""

    def __init__(self, providers: Iterable[ProviderConfig] = ()) -> None:
        configs: dict[str, ProviderConfig] = {}
        for provider in providers:
            if provider.name in configs:
                raise ValueError(f"Duplicate provider name: {provider.name}")
            configs[provider.name] = provider
        self._providers = MappingProxyType(configs)

    def get(self, provider_name: str) -> ProviderConfig | None:
        """Get a provider config by name."""
        return self._providers.get(provider_name)

    def require(self, provider_name: str) -> ProviderConfig:
        """Get a provider config by name or raise InvalidProviderError."""
        provider = self._providers.get(provider_name)
        if provider is None:
            logger.warning("OAuth provider not registered: %s", provider_name)
            raise InvalidProviderError(provider_name)
        return provider

    def names(self) -> list[str]:
        """List all registered provider names."""
        return list(self._providers.keys())

    def __contains__(self, provider_name: object) -> bool:
        return provider_name in self._providers

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)


def build_provider_registry(settings: Settings) -> ProviderRegistry:
    """Register each built-in provider whose credentials are configured."""
    candidates: list[tuple[str, ProviderFactory, str | None, str | None]] = [
        (
            GOOGLE_PROVIDER_NAME,
            google_provider_config,
            settings.google_client_id,
            settings.google_client_secret,
        ),
        (
            GITHUB_PROVIDER_NAME,
            github_provider_config,
            settings.github_client_id,
            settings.github_client_secret,
        ),
    ]

    providers: list[ProviderConfig] = []
    for name, factory, client_id, client_secret in candidates:
        if not client_id or not client_secret:
            logger.warning("Skipping provider %s: client credentials not set", name)
            continue
        providers.append(
            factory(client_id, client_secret, settings.redirect_uri_for(name))
        )

    registry = ProviderRegistry(providers)
    if registry.names():
        logger.info("Configured providers: %s", ", ".join(registry.names()))
    else:
        logger.warning("No OAuth providers configured, set client credentials in .env")
    return registry
