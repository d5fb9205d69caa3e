"""Meta Llama provider implementation.

Meta does not run a public inference API of its own; Llama models are
reached through Together AI's OpenAI-compatible endpoint by default.
Point ``base_url`` at another compatible host to use a different one.
"""

from typing import Dict

from .openai_provider import OpenAIProvider

# Friendly names accepted in config -> identifiers Together expects
MODEL_ALIASES: Dict[str, str] = {
    "llama-3.1-405b-instruct": "meta-llama/Llama-3.1-405B-Instruct-Turbo",
    "llama-3.1-70b-instruct": "meta-llama/Llama-3.1-70B-Instruct-Turbo",
    "llama-3.1-8b-instruct": "meta-llama/Llama-3.1-8B-Instruct-Turbo",
    "llama-3.2-90b-vision-instruct": "meta-llama/Llama-3.2-90B-Vision-Instruct-Turbo",
    "llama-3.2-11b-vision-instruct": "meta-llama/Llama-3.2-11B-Vision-Instruct-Turbo",
    "llama-3.2-3b-instruct": "meta-llama/Llama-3.2-3B-Instruct-Turbo",
    "llama-3.2-1b-instruct": "meta-llama/Llama-3.2-1B-Instruct-Turbo",
    "code-llama-70b-instruct": "codellama/CodeLlama-70b-Instruct-hf",
    "code-llama-34b-instruct": "codellama/CodeLlama-34b-Instruct-hf",
    "code-llama-13b-instruct": "codellama/CodeLlama-13b-Instruct-hf",
}


class MetaProvider(OpenAIProvider):
    """Meta Llama models via an OpenAI-compatible host."""

    name = "meta"
    display_name = "Meta AI"
    models = tuple(MODEL_ALIASES)
    default_model = "llama-3.1-8b-instruct"
    # Together keys have no fixed prefix
    key_prefix = None

    DEFAULT_BASE_URL = "https://api.together.ai/v1"
    AUTH_MODEL = "meta-llama/Llama-3.1-8B-Instruct-Turbo"

    def _upstream_model(self, model: str) -> str:
        return MODEL_ALIASES.get(model, model)
