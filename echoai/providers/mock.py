"""Mock AI provider for testing."""

from typing import AsyncIterator, List, Optional, Sequence, Tuple

from .base import AIProvider, CallParameters, Message, ProviderConfig


class MockProvider(AIProvider):
    """Mock AI provider for testing.

    Returns pre-configured responses and tracks all calls for assertion in
    tests. Inject it with ``ProviderRegistry.register_provider`` to bypass
    config and authentication.

    Example:
        >>> mock = MockProvider(responses=["Response 1", "Response 2"])
        >>> text = await mock.complete("Hello")
        >>> assert text == "Response 1"
        >>> assert mock.call_count == 1
    """

    display_name = "Mock"
    models = ("mock-model-1", "mock-model-2")

    def __init__(
        self,
        responses: Optional[List[str]] = None,
        name: str = "mock",
        chunk_size: int = 4,
        accept_keys: bool = True,
        config: Optional[ProviderConfig] = None,
    ):
        """Initialize mock provider.

        Args:
            responses: List of responses to return in order.
                      If None, returns empty string.
                      Cycles through if more calls than responses.
            name: Provider name reported to the registry
            chunk_size: Characters per streamed fragment
            accept_keys: Whether ``authenticate`` succeeds
            config: Stored config; defaults to an empty one
        """
        super().__init__(config or ProviderConfig(api_key="mock-key"))
        self.name = name
        self.responses = responses or [""]
        self.chunk_size = chunk_size
        self.accept_keys = accept_keys
        self.call_count = 0
        self.auth_count = 0
        self.calls: List[Tuple[List[Message], CallParameters]] = []

    def _next_response(self, messages: Sequence[Message], params: CallParameters) -> str:
        self.calls.append((list(messages), params))
        # Cycle through if exhausted
        content = self.responses[self.call_count % len(self.responses)]
        self.call_count += 1
        return content

    async def _probe(self, api_key: str) -> None:
        self.auth_count += 1
        if not self.accept_keys:
            raise PermissionError(f"Invalid API key: {api_key}")

    async def _stream(
        self, messages: Sequence[Message], params: CallParameters
    ) -> AsyncIterator[str]:
        content = self._next_response(messages, params)
        for start in range(0, len(content), self.chunk_size):
            yield content[start : start + self.chunk_size]

    async def _create(self, messages: Sequence[Message], params: CallParameters) -> str:
        return self._next_response(messages, params)

    def reset(self) -> None:
        """Reset call tracking.

        Useful when reusing mock provider across multiple tests.
        """
        self.call_count = 0
        self.auth_count = 0
        self.calls = []

    def set_responses(self, responses: List[str]) -> None:
        """Update the list of responses.

        Args:
            responses: New list of responses
        """
        self.responses = responses
        self.reset()
