"""Tests for the OpenAI provider and the OpenAI-compatible backends."""

from contextlib import aclosing

import pytest

from echoai.config_store import InMemoryConfigStore
from echoai.providers import (
    ChatOptions,
    CompletionOptions,
    GroqProvider,
    Message,
    MetaProvider,
    OpenAIProvider,
    OpenRouterProvider,
    ProviderConfig,
    ProviderRegistry,
    UpstreamCallError,
    UpstreamRateLimitError,
)

from .fakes import FakeAPIError, FakeUpstream


def openai_provider(upstream, provider_cls=OpenAIProvider, **config):
    config.setdefault("api_key", "sk-test")
    return provider_cls(ProviderConfig(**config), client_factory=upstream.openai_factory)


async def collect(fragments):
    return [fragment async for fragment in fragments]


class TestOpenAIClientSetup:
    """Test client construction."""

    def test_construction_makes_no_request(self, upstream):
        """Test building a provider binds a client but calls nothing."""
        openai_provider(upstream)

        assert upstream.clients == [{"api_key": "sk-test", "base_url": None}]
        assert upstream.requests == []

    def test_custom_base_url(self, upstream):
        """Test a configured base URL reaches the client."""
        openai_provider(upstream, base_url="http://localhost:11434/v1")

        assert upstream.clients[0]["base_url"] == "http://localhost:11434/v1"

    def test_groq_base_url(self, upstream):
        """Test Groq points the OpenAI client at Groq's endpoint."""
        openai_provider(upstream, GroqProvider, api_key="gsk_test")

        assert upstream.clients[0]["base_url"] == "https://api.groq.com/openai/v1"

    def test_openrouter_attribution_headers(self, upstream):
        """Test OpenRouter sends app attribution headers."""
        openai_provider(upstream, OpenRouterProvider, api_key="sk-or-test")

        client = upstream.clients[0]
        assert client["base_url"] == "https://openrouter.ai/api/v1"
        assert client["default_headers"]["X-Title"] == "Echo AI CLI"
        assert "HTTP-Referer" in client["default_headers"]


class TestOpenAIAuthenticate:
    """Test authentication probes."""

    @pytest.mark.asyncio
    async def test_accepted_key(self, upstream):
        """Test a working key authenticates."""
        provider = openai_provider(upstream)

        assert await provider.authenticate("sk-test") is True
        assert len(upstream.requests) == 1
        assert upstream.requests[0]["max_tokens"] == 10

    @pytest.mark.asyncio
    async def test_probe_uses_given_key(self):
        """Test the probe runs on a throwaway client bound to the given key."""
        upstream = FakeUpstream(valid_keys=["sk-good"])
        provider = openai_provider(upstream, api_key="sk-bad")

        assert await provider.authenticate("sk-good") is True
        assert await provider.authenticate("sk-bad") is False
        assert [c["api_key"] for c in upstream.clients] == ["sk-bad", "sk-good", "sk-bad"]

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_false(self):
        """Test any exception from the probe is reported as False."""
        upstream = FakeUpstream(error=ConnectionError("network down"))
        provider = openai_provider(upstream)

        assert await provider.authenticate("sk-test") is False

    @pytest.mark.asyncio
    async def test_openrouter_probe_budget(self, upstream):
        """Test OpenRouter probes with its own model and token budget."""
        provider = openai_provider(upstream, OpenRouterProvider, api_key="sk-or-test")

        await provider.authenticate("sk-or-test")

        assert upstream.requests[0]["model"] == "openai/gpt-3.5-turbo"
        assert upstream.requests[0]["max_tokens"] == 5

    @pytest.mark.asyncio
    async def test_probe_client_closed(self):
        """Test every throwaway probe client is closed, accepted or not."""
        upstream = FakeUpstream(valid_keys=["sk-good"])
        provider = openai_provider(upstream, api_key="sk-good")

        await provider.authenticate("sk-good")
        await provider.authenticate("sk-bad")

        assert upstream.closed_clients == ["sk-good", "sk-bad"]

    @pytest.mark.asyncio
    async def test_repeated_provider_tests_close_probe_clients(self):
        """Test re-authenticating through the registry leaves no client open."""
        upstream = FakeUpstream()
        registry = ProviderRegistry(
            InMemoryConfigStore({"openai": {"apiKey": "sk-test"}}),
            factories=upstream.factories(),
        )

        await registry.get_provider("openai")
        for _ in range(3):
            assert await registry.test_provider("openai") is True

        # The first client belongs to the cached provider; the rest are probes
        assert len(upstream.clients) == 5
        assert len(upstream.closed_clients) == 4


class TestOpenAIChat:
    """Test streaming and non-streaming chat."""

    @pytest.mark.asyncio
    async def test_streaming_yields_text_deltas(self, upstream):
        """Test one fragment per chunk with text, empty chunks skipped."""
        provider = openai_provider(upstream)

        fragments = await collect(provider.chat([Message.user("Hi")]))

        assert fragments == ["Hel", "lo", " world"]
        assert upstream.requests[0]["stream"] is True

    @pytest.mark.asyncio
    async def test_non_streaming_yields_once(self, upstream):
        """Test stream=False yields exactly the full text."""
        provider = openai_provider(upstream)

        fragments = await collect(provider.chat([Message.user("Hi")], ChatOptions(stream=False)))

        assert fragments == ["Hello world"]
        assert "stream" not in upstream.requests[0]

    @pytest.mark.asyncio
    async def test_non_streaming_empty_reply(self):
        """Test an empty reply is still exactly one element."""
        provider = openai_provider(FakeUpstream(chunks=[]))

        fragments = await collect(provider.chat([Message.user("Hi")], ChatOptions(stream=False)))

        assert fragments == [""]

    @pytest.mark.asyncio
    async def test_stream_matches_non_stream(self, upstream):
        """Test concatenated stream equals the non-streaming reply."""
        provider = openai_provider(upstream)
        messages = [Message.system("Be brief"), Message.user("Hi")]

        streamed = await collect(provider.chat(messages))
        single = await collect(provider.chat(messages, ChatOptions(stream=False)))

        assert "".join(streamed) == single[0]

    @pytest.mark.asyncio
    async def test_request_parameters(self, upstream):
        """Test resolved parameters and messages are sent upstream."""
        provider = openai_provider(upstream, model="gpt-4", temperature=0.3)

        await collect(
            provider.chat(
                [Message.system("Be brief"), Message.user("Hi")], ChatOptions(max_tokens=64)
            )
        )

        request = upstream.requests[0]
        assert request["model"] == "gpt-4"
        assert request["max_tokens"] == 64
        assert request["temperature"] == 0.3
        assert request["messages"] == [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Hi"},
        ]

    @pytest.mark.asyncio
    async def test_early_close_closes_upstream_stream(self):
        """Test stopping early closes the upstream response."""
        upstream = FakeUpstream(chunks=["a", "b", "c", "d"])
        provider = openai_provider(upstream)

        async with aclosing(provider.chat([Message.user("Hi")])) as fragments:
            first = await fragments.__anext__()

        stream = upstream.streams[0]
        assert first == "a"
        assert stream.closed is True
        assert stream.consumed == 1
        assert len(upstream.requests) == 1

    @pytest.mark.asyncio
    async def test_stream_closed_after_completion(self, upstream):
        """Test the upstream response is closed once fully read."""
        provider = openai_provider(upstream)

        await collect(provider.chat([Message.user("Hi")]))

        assert upstream.streams[0].closed is True


class TestOpenAIErrors:
    """Test upstream failures are translated."""

    @pytest.mark.asyncio
    async def test_error_opening_request(self):
        """Test a failure before the first chunk becomes UpstreamCallError."""
        upstream = FakeUpstream(error=FakeAPIError("model not found", status_code=404))
        provider = openai_provider(upstream)

        with pytest.raises(UpstreamCallError) as exc_info:
            await collect(provider.chat([Message.user("Hi")]))

        assert exc_info.value.provider == "openai"
        assert exc_info.value.upstream_message == "model not found"
        assert isinstance(exc_info.value.__cause__, FakeAPIError)

    @pytest.mark.asyncio
    async def test_error_mid_stream(self):
        """Test a failure after some chunks surfaces after those chunks."""
        upstream = FakeUpstream(
            chunks=["a", "b", "c"],
            stream_error=FakeAPIError("connection reset"),
            stream_error_after=2,
        )
        provider = openai_provider(upstream)
        received = []

        with pytest.raises(UpstreamCallError) as exc_info:
            async for fragment in provider.chat([Message.user("Hi")]):
                received.append(fragment)

        assert received == ["a", "b"]
        assert exc_info.value.upstream_message == "connection reset"
        assert upstream.streams[0].closed is True

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        """Test 429 responses become UpstreamRateLimitError."""
        upstream = FakeUpstream(error=FakeAPIError("Rate limit reached", status_code=429))
        provider = openai_provider(upstream)

        with pytest.raises(UpstreamRateLimitError):
            await provider.complete("Hi")

    @pytest.mark.asyncio
    async def test_sdk_error_never_escapes(self):
        """Test non-SDK exceptions are wrapped as well."""
        upstream = FakeUpstream(error=RuntimeError("boom"))
        provider = openai_provider(upstream)

        with pytest.raises(UpstreamCallError):
            await collect(provider.chat([Message.user("Hi")], ChatOptions(stream=False)))


class TestOpenAIComplete:
    """Test single-prompt completion."""

    @pytest.mark.asyncio
    async def test_complete(self, upstream):
        """Test complete returns the full reply for one user message."""
        provider = openai_provider(upstream)

        text = await provider.complete("Hi", CompletionOptions(temperature=0.0))

        assert text == "Hello world"
        request = upstream.requests[0]
        assert request["messages"] == [{"role": "user", "content": "Hi"}]
        assert request["temperature"] == 0.0
        assert "stream" not in request


class TestMetaProvider:
    """Test Meta model name mapping."""

    @pytest.mark.asyncio
    async def test_default_model_mapped(self, upstream):
        """Test friendly names are sent as Together identifiers."""
        provider = openai_provider(upstream, MetaProvider, api_key="together-key")

        await provider.complete("Hi")

        assert upstream.clients[0]["base_url"] == "https://api.together.ai/v1"
        assert upstream.requests[0]["model"] == "meta-llama/Llama-3.1-8B-Instruct-Turbo"

    @pytest.mark.asyncio
    async def test_unknown_model_passed_through(self, upstream):
        """Test identifiers without an alias are sent unchanged."""
        provider = openai_provider(upstream, MetaProvider, api_key="together-key")

        await provider.complete("Hi", CompletionOptions(model="meta-llama/Custom-Model"))

        assert upstream.requests[0]["model"] == "meta-llama/Custom-Model"
