"""Provider registry: resolves names to live, authenticated providers.

Resolution of a name runs at most once at a time. Concurrent
``get_provider`` calls for the same uncached name await one shared
in-flight task, so a burst of callers triggers a single authentication.
Only successfully authenticated instances are cached; a failed resolution
leaves nothing behind and the next call starts from scratch.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Protocol, runtime_checkable

from ..logging import get_logger
from .base import (
    AIProvider,
    AuthenticationFailedError,
    ConfigurationMissingError,
    ConfigValidation,
    ProviderConfig,
)
from .factory import (
    ProviderFactory,
    ProviderName,
    create_provider,
    known_providers,
    parse_provider_name,
)

logger = get_logger(__name__)


@runtime_checkable
class ConfigStore(Protocol):
    """Source of stored provider settings."""

    async def get_provider(self, name: str) -> Optional[ProviderConfig]:
        """Return the stored config for ``name``, or None if there is none."""
        ...

    async def list_providers(self) -> List[str]:
        """Names of all providers with a stored config."""
        ...


@dataclass(frozen=True)
class ProviderStatus:
    """Configuration and readiness of one backend, for display."""

    name: str
    configured: bool
    ready: bool


class ProviderRegistry:
    """Resolves provider names to cached, authenticated instances.

    Example:
        >>> registry = ProviderRegistry(default_config_store())
        >>> provider = await registry.get_provider("openai")
        >>> async for fragment in provider.chat([Message.user("Hello!")]):
        ...     print(fragment, end="")
    """

    def __init__(
        self,
        config_store: ConfigStore,
        factories: Optional[Mapping[ProviderName, ProviderFactory]] = None,
    ) -> None:
        """Initialize registry.

        Args:
            config_store: Where stored provider configs are read from
            factories: Backend lookup table; defaults to the built-in one
        """
        self._config_store = config_store
        self._factories = factories
        self._providers: Dict[str, AIProvider] = {}
        self._pending: Dict[str, "asyncio.Task[AIProvider]"] = {}

    @property
    def config_store(self) -> ConfigStore:
        return self._config_store

    def register_provider(self, provider: AIProvider) -> None:
        """Put a ready-made instance in the cache, skipping config and auth."""
        self._providers[provider.name.lower()] = provider
        logger.debug("Registered provider instance", provider=provider.name)

    async def get_provider(self, name: str) -> AIProvider:
        """Return the live provider for ``name``, resolving it on first use.

        Raises:
            ConfigurationMissingError: If no config is stored for the provider
            UnsupportedProviderError: If the name matches no known backend
            AuthenticationFailedError: If the provider rejects the stored key
        """
        key = name.strip().lower()

        provider = self._providers.get(key)
        if provider is not None:
            return provider

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load_provider(key))
            self._pending[key] = task
        else:
            logger.debug("Joining in-flight provider resolution", provider=key)

        # A cancelled waiter must not cancel the resolution other callers share
        return await asyncio.shield(task)

    async def _require_config(self, key: str) -> ProviderConfig:
        config = await self._config_store.get_provider(key)
        if config is None:
            raise ConfigurationMissingError(
                f"No configuration found for provider '{key}'. Run: echoai config setup",
                provider=key,
            )
        return config

    async def _load_provider(self, key: str) -> AIProvider:
        try:
            config = await self._require_config(key)
            provider = create_provider(key, config, self._factories)

            if not await provider.authenticate(config.api_key):
                raise AuthenticationFailedError(
                    f"Authentication failed for provider '{key}'. Please check your API key.",
                    provider=key,
                )

            self._providers[key] = provider
            logger.info("Provider ready", provider=key)
            return provider
        finally:
            self._pending.pop(key, None)

    def get_available_providers(self) -> List[str]:
        """Names of providers that are cached, i.e. authenticated or injected."""
        return list(self._providers)

    async def test_provider(self, name: str) -> bool:
        """Probe a provider end to end. Never raises.

        Resolves the provider, then re-authenticates with the stored key so
        that revoked credentials are noticed even for cached instances.

        Returns:
            True if the provider is usable right now
        """
        try:
            provider = await self.get_provider(name)
            config = await self._config_store.get_provider(name.strip().lower())
            if config is None:
                return False
            return await provider.authenticate(config.api_key)
        except Exception as e:
            logger.debug("Provider test failed", provider=name, error=str(e))
            return False

    async def validate_provider(self, name: str) -> ConfigValidation:
        """Validate the stored config for ``name`` without any network call.

        Raises:
            UnsupportedProviderError: If the name matches no known backend
            ConfigurationMissingError: If no config is stored for the provider
        """
        key = parse_provider_name(name).value
        config = await self._require_config(key)
        return create_provider(key, config, self._factories).validate_config(config)

    async def list_providers(self) -> List[ProviderStatus]:
        """Every known backend with its configured/ready state."""
        configured = set(await self._config_store.list_providers())
        names = known_providers() + [
            name for name in self._providers if name not in known_providers()
        ]
        return [
            ProviderStatus(
                name=name,
                configured=name in configured,
                ready=name in self._providers,
            )
            for name in names
        ]
