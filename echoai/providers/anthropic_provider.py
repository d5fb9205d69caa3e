"""Anthropic (Claude) provider implementation."""

from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from .base import AIProvider, CallParameters, Message, ProviderConfig, ProviderError

logger = get_logger(__name__)


def split_system_messages(
    messages: Sequence[Message],
) -> Tuple[Optional[str], List[Dict[str, str]]]:
    """Separate system prompts from the conversation.

    The Messages API takes the system prompt as a top-level parameter and
    only user/assistant turns in ``messages``.

    Returns:
        (system text or None, list of user/assistant message dicts)
    """
    system_parts: List[str] = []
    chat_messages: List[Dict[str, str]] = []

    for msg in messages:
        if msg.role == "system":
            system_parts.append(msg.content)
        else:
            chat_messages.append(msg.to_dict())

    system_message = "\n\n".join(system_parts) if system_parts else None
    return system_message, chat_messages


class ClaudeProvider(AIProvider):
    """Anthropic API provider for Claude models.

    Supports Claude 3 (Opus, Sonnet, Haiku).
    Uses the official Anthropic Python library.
    """

    name = "claude"
    display_name = "Claude"
    models = (
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
    )
    default_model = "claude-3-sonnet-20240229"
    key_prefix = "sk-ant-"
    max_temperature = 1.0
    rate_limit_markers = ("rate limit", "overloaded")

    AUTH_MODEL = "claude-3-haiku-20240307"
    AUTH_MAX_TOKENS = 10

    def __init__(
        self,
        config: ProviderConfig,
        client_factory: Optional[Callable[..., Any]] = None,
    ) -> None:
        """Initialize Claude provider.

        Args:
            config: Stored provider config (api key, base URL, defaults)
            client_factory: Callable building an ``AsyncAnthropic``-compatible
                client; defaults to ``AsyncAnthropic``

        Raises:
            ProviderError: If anthropic library not installed
        """
        super().__init__(config)
        self.base_url = config.base_url

        if client_factory is None:
            try:
                from anthropic import AsyncAnthropic
            except ImportError:
                raise ProviderError(
                    "anthropic library not installed. Install with: pip install anthropic",
                    provider=self.name,
                )
            client_factory = AsyncAnthropic

        self._client_factory = client_factory
        self._client = self._make_client(config.api_key)

        logger.debug("Initialized provider", provider=self.name)

    def _make_client(self, api_key: str) -> Any:
        if self.base_url:
            return self._client_factory(api_key=api_key, base_url=self.base_url)
        return self._client_factory(api_key=api_key)

    def _request_kwargs(
        self, messages: Sequence[Message], params: CallParameters
    ) -> Dict[str, Any]:
        system_message, chat_messages = split_system_messages(messages)
        create_kwargs: Dict[str, Any] = {
            "model": params.model,
            "messages": chat_messages,
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }
        if system_message:
            create_kwargs["system"] = system_message
        return create_kwargs

    async def _probe(self, api_key: str) -> None:
        async with self._make_client(api_key) as client:
            await client.messages.create(
                model=self.AUTH_MODEL,
                max_tokens=self.AUTH_MAX_TOKENS,
                messages=[{"role": "user", "content": "test"}],
            )

    async def _stream(
        self, messages: Sequence[Message], params: CallParameters
    ) -> AsyncIterator[str]:
        stream = await self._client.messages.create(
            **self._request_kwargs(messages, params), stream=True
        )
        try:
            async for event in stream:
                if event.type != "content_block_delta":
                    continue
                if getattr(event.delta, "type", None) == "text_delta" and event.delta.text:
                    yield event.delta.text
        finally:
            await stream.close()

    async def _create(self, messages: Sequence[Message], params: CallParameters) -> str:
        response = await self._client.messages.create(**self._request_kwargs(messages, params))

        # Extract text content from response
        content = ""
        for block in response.content:
            if hasattr(block, "text"):
                content += block.text
        return content
