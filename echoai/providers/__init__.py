"""AI provider abstraction for multi-provider support.

This module provides a unified interface for different AI providers:
- OpenAI (GPT-4, GPT-3.5)
- Claude (Anthropic)
- Groq (Llama 3, Mixtral, Gemma)
- Meta (Llama via Together AI)
- OpenRouter (multi-model aggregator)
- Gemini and Mistral (listed, not yet implemented)

Usage:
    from echoai.providers import Message, ProviderRegistry
    from echoai.config_store import default_config_store

    registry = ProviderRegistry(default_config_store())
    provider = await registry.get_provider("openai")
    async for fragment in provider.chat([Message.user("Hello!")]):
        print(fragment, end="")
"""

from .anthropic_provider import ClaudeProvider
from .base import (
    AIProvider,
    AuthenticationFailedError,
    CallParameters,
    ChatOptions,
    CompletionOptions,
    ConfigurationMissingError,
    ConfigValidation,
    InvalidConfigurationError,
    Message,
    ProviderConfig,
    ProviderError,
    ProviderNotImplementedError,
    UnsupportedProviderError,
    UpstreamCallError,
    UpstreamRateLimitError,
)
from .factory import (
    ProviderName,
    create_provider,
    known_providers,
    parse_provider_name,
    register_factory,
)
from .groq_provider import GroqProvider
from .meta_provider import MetaProvider
from .mock import MockProvider
from .openai_provider import OpenAIProvider
from .openrouter_provider import OpenRouterProvider
from .placeholder import GeminiProvider, MistralProvider, PlaceholderProvider
from .registry import ConfigStore, ProviderRegistry, ProviderStatus

__all__ = [
    # Base
    "AIProvider",
    "CallParameters",
    "ChatOptions",
    "CompletionOptions",
    "ConfigValidation",
    "Message",
    "ProviderConfig",
    # Errors
    "ProviderError",
    "ConfigurationMissingError",
    "InvalidConfigurationError",
    "UnsupportedProviderError",
    "AuthenticationFailedError",
    "UpstreamCallError",
    "UpstreamRateLimitError",
    "ProviderNotImplementedError",
    # Factory
    "ProviderName",
    "create_provider",
    "known_providers",
    "parse_provider_name",
    "register_factory",
    # Registry
    "ConfigStore",
    "ProviderRegistry",
    "ProviderStatus",
    # Providers
    "ClaudeProvider",
    "GeminiProvider",
    "GroqProvider",
    "MetaProvider",
    "MistralProvider",
    "MockProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "PlaceholderProvider",
]
