"""Factory for creating AI provider instances.

Backends are resolved through a single lookup table keyed by
``ProviderName``; adding a backend means adding a table entry.
"""

from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional

from ..logging import get_logger
from .anthropic_provider import ClaudeProvider
from .base import AIProvider, ProviderConfig, UnsupportedProviderError
from .groq_provider import GroqProvider
from .meta_provider import MetaProvider
from .openai_provider import OpenAIProvider
from .openrouter_provider import OpenRouterProvider
from .placeholder import GeminiProvider, MistralProvider

logger = get_logger(__name__)

ProviderFactory = Callable[[ProviderConfig], AIProvider]


class ProviderName(str, Enum):
    """Provider backends known to echoai."""

    CLAUDE = "claude"
    OPENAI = "openai"
    GEMINI = "gemini"
    GROQ = "groq"
    META = "meta"
    OPENROUTER = "openrouter"
    MISTRAL = "mistral"


# Global registry of provider factories
_FACTORIES: Dict[ProviderName, ProviderFactory] = {
    ProviderName.CLAUDE: ClaudeProvider,
    ProviderName.OPENAI: OpenAIProvider,
    ProviderName.GEMINI: GeminiProvider,
    ProviderName.GROQ: GroqProvider,
    ProviderName.META: MetaProvider,
    ProviderName.OPENROUTER: OpenRouterProvider,
    ProviderName.MISTRAL: MistralProvider,
}


def known_providers() -> List[str]:
    """Names of every backend, working or placeholder."""
    return [name.value for name in ProviderName]


def parse_provider_name(name: str) -> ProviderName:
    """Normalize a user-supplied provider name.

    Raises:
        UnsupportedProviderError: If the name matches no known backend
    """
    try:
        return ProviderName(name.strip().lower())
    except ValueError:
        raise UnsupportedProviderError(
            f"Unsupported provider: '{name}'. Known providers: {', '.join(known_providers())}",
            provider=name,
        ) from None


def register_factory(name: str, factory: ProviderFactory) -> None:
    """Replace the factory used for a known provider.

    Args:
        name: Provider name (e.g., 'openai', 'claude')
        factory: Callable taking a ProviderConfig and returning a provider
    """
    _FACTORIES[parse_provider_name(name)] = factory
    logger.debug("Registered provider factory", provider=name)


def create_provider(
    name: str,
    config: ProviderConfig,
    factories: Optional[Mapping[ProviderName, ProviderFactory]] = None,
) -> AIProvider:
    """Instantiate the backend for ``name``. Performs no network I/O.

    Args:
        name: Provider name (claude, openai, groq, meta, openrouter, ...)
        config: Stored provider config
        factories: Lookup table to use instead of the global one

    Returns:
        Unauthenticated provider instance

    Raises:
        UnsupportedProviderError: If the name matches no known backend
    """
    provider_name = parse_provider_name(name)
    table = _FACTORIES if factories is None else factories

    factory = table.get(provider_name)
    if factory is None:
        raise UnsupportedProviderError(
            f"Unsupported provider: '{name}'. No backend is registered for it.",
            provider=name,
        )
    return factory(config)
