"""OpenRouter provider implementation.

OpenRouter is a unified API that provides access to multiple LLM providers
(OpenAI, Anthropic, Google, Meta, Mistral, etc.) through a single interface.
"""

from typing import Any, Dict

from .openai_provider import OpenAIProvider


class OpenRouterProvider(OpenAIProvider):
    """OpenRouter API provider for multi-model access.

    Uses OpenAI-compatible API, so we can use the OpenAI SDK.

    Note:
        OpenRouter model names use format: provider/model-name
        Examples: anthropic/claude-3-opus, openai/gpt-4, meta-llama/llama-3.1-70b-instruct
    """

    name = "openrouter"
    display_name = "OpenRouter"
    models = (
        # OpenAI
        "openai/gpt-4-turbo",
        "openai/gpt-4o",
        "openai/gpt-3.5-turbo",
        # Anthropic Claude
        "anthropic/claude-3.5-sonnet",
        "anthropic/claude-3-opus",
        "anthropic/claude-3-haiku",
        # Meta Llama
        "meta-llama/llama-3.1-405b-instruct",
        "meta-llama/llama-3.1-70b-instruct",
        "meta-llama/llama-3.1-8b-instruct",
        "meta-llama/codellama-70b-instruct",
        # Google
        "google/gemini-pro-1.5",
        "google/gemini-flash-1.5",
        # Mistral
        "mistralai/mixtral-8x7b-instruct",
        "mistralai/mistral-7b-instruct",
        # Others
        "cohere/command-r-plus",
        "perplexity/llama-3.1-sonar-large-128k-online",
        "qwen/qwen-2-72b-instruct",
    )
    default_model = "anthropic/claude-3.5-sonnet"
    key_prefix = "sk-or-"

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    AUTH_MODEL = "openai/gpt-3.5-turbo"
    AUTH_MAX_TOKENS = 5

    APP_URL = "https://echo-ai-cli.com"
    APP_NAME = "Echo AI CLI"

    def _client_kwargs(self) -> Dict[str, Any]:
        return {
            "default_headers": {
                "HTTP-Referer": self.APP_URL,
                "X-Title": self.APP_NAME,
            }
        }
