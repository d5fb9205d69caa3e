"""Backends that are known by name but not implemented yet.

They are listed alongside the working providers so users can see what is
coming, but every real operation fails straight away: ``authenticate``
returns False, ``validate_config`` rejects every config and ``chat`` /
``complete`` raise ``ProviderNotImplementedError`` without yielding.
"""

from typing import NoReturn, Sequence

from ..logging import get_logger
from .base import (
    AIProvider,
    CallParameters,
    ConfigValidation,
    Message,
    ProviderConfig,
    ProviderNotImplementedError,
)

logger = get_logger(__name__)


class PlaceholderProvider(AIProvider):
    """Structurally complete provider that refuses to do any work.

    ``validate_config`` runs the usual checks so every problem with the
    config is still reported, then always adds the not-implemented error.
    """

    models = ()

    def _not_implemented(self) -> ProviderNotImplementedError:
        return ProviderNotImplementedError(
            f"{self.display_name} provider is not yet implemented. "
            "Choose another provider with: echoai provider list",
            provider=self.name,
        )

    async def authenticate(self, api_key: str) -> bool:
        logger.warning("Provider is not yet implemented", provider=self.name)
        return False

    def validate_config(self, config: ProviderConfig) -> ConfigValidation:
        errors = list(super().validate_config(config).errors)
        errors.append(f"{self.display_name} provider is not yet implemented")
        return ConfigValidation.from_errors(errors)

    async def _probe(self, api_key: str) -> None:
        raise self._not_implemented()

    def _stream(self, messages: Sequence[Message], params: CallParameters) -> NoReturn:
        raise self._not_implemented()

    async def _create(self, messages: Sequence[Message], params: CallParameters) -> str:
        raise self._not_implemented()


class GeminiProvider(PlaceholderProvider):
    """Google Gemini (not yet implemented)."""

    name = "gemini"
    display_name = "Gemini"
    # Listed for display only
    models = ("gemini-pro", "gemini-pro-vision")


class MistralProvider(PlaceholderProvider):
    """Mistral AI (not yet implemented)."""

    name = "mistral"
    display_name = "Mistral"
