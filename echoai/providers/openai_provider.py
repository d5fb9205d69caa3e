"""OpenAI provider implementation.

Also the base for backends that speak the OpenAI chat completions API
(Groq, Together-hosted Meta Llama, OpenRouter).
"""

from typing import Any, AsyncIterator, Callable, ClassVar, Dict, Optional, Sequence

from ..logging import get_logger
from .base import AIProvider, CallParameters, Message, ProviderConfig, ProviderError

logger = get_logger(__name__)

ClientFactory = Callable[..., Any]


class OpenAIProvider(AIProvider):
    """OpenAI API provider for GPT models.

    Uses the official OpenAI Python library (``AsyncOpenAI``). The client is
    built at construction time but makes no request until the first
    ``authenticate``/``chat``/``complete`` call.
    """

    name = "openai"
    display_name = "OpenAI"
    models = (
        "gpt-4-turbo-preview",
        "gpt-4-1106-preview",
        "gpt-4",
        "gpt-3.5-turbo-1106",
        "gpt-3.5-turbo",
    )
    default_model = "gpt-3.5-turbo"
    key_prefix = "sk-"

    DEFAULT_BASE_URL: ClassVar[Optional[str]] = None
    AUTH_MODEL: ClassVar[str] = "gpt-3.5-turbo"
    AUTH_MAX_TOKENS: ClassVar[int] = 10

    def __init__(
        self,
        config: ProviderConfig,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        """Initialize provider.

        Args:
            config: Stored provider config (api key, base URL, defaults)
            client_factory: Callable building an ``AsyncOpenAI``-compatible
                client from keyword arguments; defaults to ``AsyncOpenAI``

        Raises:
            ProviderError: If the openai library is not installed
        """
        super().__init__(config)
        self.base_url = config.base_url or self.DEFAULT_BASE_URL
        self._client_factory = client_factory or self._default_client_factory()
        self._client = self._make_client(config.api_key)

        logger.debug("Initialized provider", provider=self.name, base_url=self.base_url)

    def _default_client_factory(self) -> ClientFactory:
        try:
            from openai import AsyncOpenAI
        except ImportError:
            raise ProviderError(
                "openai library not installed. Install with: pip install openai",
                provider=self.name,
            )
        return AsyncOpenAI

    def _client_kwargs(self) -> Dict[str, Any]:
        """Extra client options beyond key and base URL."""
        return {}

    def _make_client(self, api_key: str) -> Any:
        return self._client_factory(
            api_key=api_key, base_url=self.base_url, **self._client_kwargs()
        )

    def _upstream_model(self, model: str) -> str:
        """Map a configured model name to the identifier the API expects."""
        return model

    async def _probe(self, api_key: str) -> None:
        async with self._make_client(api_key) as client:
            await client.chat.completions.create(
                model=self.AUTH_MODEL,
                messages=[{"role": "user", "content": "test"}],
                max_tokens=self.AUTH_MAX_TOKENS,
            )

    async def _stream(
        self, messages: Sequence[Message], params: CallParameters
    ) -> AsyncIterator[str]:
        stream = await self._client.chat.completions.create(
            model=self._upstream_model(params.model),
            messages=[msg.to_dict() for msg in messages],
            max_tokens=params.max_tokens,
            temperature=params.temperature,
            stream=True,
        )
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        finally:
            await stream.close()

    async def _create(self, messages: Sequence[Message], params: CallParameters) -> str:
        response = await self._client.chat.completions.create(
            model=self._upstream_model(params.model),
            messages=[msg.to_dict() for msg in messages],
            max_tokens=params.max_tokens,
            temperature=params.temperature,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
