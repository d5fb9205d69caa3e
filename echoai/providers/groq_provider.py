"""Groq provider implementation.

Groq serves open models (Llama 3, Mixtral, Gemma) behind an
OpenAI-compatible endpoint, so the OpenAI SDK is used with Groq's base URL.
"""

from .openai_provider import OpenAIProvider


class GroqProvider(OpenAIProvider):
    """Groq API provider for fast open-model inference."""

    name = "groq"
    display_name = "Groq"
    models = (
        "llama3-8b-8192",
        "llama3-70b-8192",
        "mixtral-8x7b-32768",
        "gemma-7b-it",
        "gemma2-9b-it",
    )
    default_model = None
    key_prefix = "gsk_"
    default_max_tokens = 8192

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
    AUTH_MODEL = "llama3-8b-8192"
