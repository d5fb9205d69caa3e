"""Base classes and interfaces for AI providers."""

from abc import ABC, abstractmethod
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, AsyncIterator, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..logging import get_logger

logger = get_logger(__name__)

MESSAGE_ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class Message:
    """A single message in a chat conversation.

    Attributes:
        role: Message role (system, user, assistant)
        content: Message content/text
    """

    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in MESSAGE_ROLES:
            raise ValueError(
                f"Invalid message role '{self.role}'. Expected one of: {', '.join(MESSAGE_ROLES)}"
            )

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary format for API calls."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role="assistant", content=content)


@dataclass(frozen=True)
class ChatOptions:
    """Per-call overrides for ``AIProvider.chat``.

    Unset fields fall back to the stored provider config, then to the
    backend default. Streaming is on unless ``stream=False``.
    """

    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    stream: bool = True


@dataclass(frozen=True)
class CompletionOptions:
    """Per-call overrides for ``AIProvider.complete``."""

    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


@dataclass(frozen=True)
class CallParameters:
    """Model parameters resolved for a single upstream call."""

    model: str
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class ConfigValidation:
    """Outcome of ``AIProvider.validate_config``.

    Attributes:
        is_valid: True when no constraint is violated
        errors: Every violated constraint, in check order
    """

    is_valid: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def from_errors(cls, errors: Sequence[str]) -> "ConfigValidation":
        return cls(is_valid=not errors, errors=tuple(errors))


class ProviderConfig(BaseModel):
    """Stored settings for one provider.

    Accepts both snake_case and the camelCase keys used in config files
    (``apiKey``, ``maxTokens``, ``baseUrl``). Range checks are left to
    ``AIProvider.validate_config`` so that every violation gets reported.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: str = Field(default="", alias="apiKey")
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")


class ProviderError(Exception):
    """Base exception for provider errors.

    Attributes:
        provider: Name of the provider the error relates to
    """

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider = provider


class ConfigurationMissingError(ProviderError):
    """Raised when no stored configuration exists for a provider."""

    pass


class InvalidConfigurationError(ConfigurationMissingError):
    """Raised when stored configuration exists but cannot be read or parsed."""

    pass


class UnsupportedProviderError(ProviderError):
    """Raised when a provider name matches no known backend."""

    pass


class AuthenticationFailedError(ProviderError):
    """Raised when a provider rejects its credentials or cannot be reached."""

    pass


class UpstreamCallError(ProviderError):
    """Raised when a chat or completion call fails upstream.

    Attributes:
        upstream_message: Message reported by the upstream service
    """

    def __init__(self, message: str, provider: str, upstream_message: str) -> None:
        super().__init__(message, provider=provider)
        self.upstream_message = upstream_message


class UpstreamRateLimitError(UpstreamCallError):
    """Raised when the upstream service rejects a call for rate or quota reasons."""

    pass


class ProviderNotImplementedError(ProviderError):
    """Raised when a placeholder backend is used for a real operation."""

    pass


class AIProvider(ABC):
    """Abstract base class for AI providers.

    Every backend exposes the same surface regardless of the upstream API:
    ``authenticate``, ``chat``, ``complete`` and ``validate_config``.
    Subclasses supply the upstream-specific pieces through ``_probe``,
    ``_stream`` and ``_create``; error translation, parameter resolution
    and the streaming contract live here.

    ``chat`` is an async generator. When a consumer stops early and closes
    it (``aclose()`` or ``contextlib.aclosing``), the upstream stream is
    closed too and no further chunks are read.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    models: ClassVar[Tuple[str, ...]] = ()
    default_model: ClassVar[Optional[str]] = None
    key_prefix: ClassVar[Optional[str]] = None
    default_max_tokens: ClassVar[int] = 4096
    default_temperature: ClassVar[float] = 0.7
    max_temperature: ClassVar[float] = 2.0
    rate_limit_markers: ClassVar[Tuple[str, ...]] = ("rate limit", "quota")

    def __init__(self, config: ProviderConfig) -> None:
        self.config = config

    def get_default_model(self) -> str:
        """Model used when neither the call nor the stored config names one."""
        if self.default_model:
            return self.default_model
        return self.models[0] if self.models else ""

    def resolve_parameters(
        self, options: Union[ChatOptions, CompletionOptions]
    ) -> CallParameters:
        """Merge call options, stored config and backend defaults, in that order."""
        max_tokens = options.max_tokens
        if max_tokens is None:
            max_tokens = self.config.max_tokens
        if max_tokens is None:
            max_tokens = self.default_max_tokens

        temperature = options.temperature
        if temperature is None:
            temperature = self.config.temperature
        if temperature is None:
            temperature = self.default_temperature

        return CallParameters(
            model=options.model or self.config.model or self.get_default_model(),
            max_tokens=max_tokens,
            temperature=temperature,
        )

    async def authenticate(self, api_key: str) -> bool:
        """Check credentials with a minimal live request.

        Args:
            api_key: Key to verify

        Returns:
            True if the upstream service accepted the key. Any failure,
            expected or not, is logged and reported as False.
        """
        try:
            await self._probe(api_key)
        except Exception as e:
            logger.warning("Authentication failed", provider=self.name, error=str(e))
            return False

        logger.info("Authenticated provider", provider=self.name)
        return True

    async def chat(
        self,
        messages: Sequence[Message],
        options: Optional[ChatOptions] = None,
    ) -> AsyncIterator[str]:
        """Generate a reply as a lazy sequence of text fragments.

        Args:
            messages: Conversation so far
            options: Per-call overrides; streaming unless ``stream=False``

        Yields:
            Text deltas in generation order when streaming, otherwise the
            full reply as a single element

        Raises:
            UpstreamCallError: If the upstream call fails, before or mid-stream
            ProviderNotImplementedError: If the backend is a placeholder
        """
        options = options or ChatOptions()
        params = self.resolve_parameters(options)
        logger.debug(
            "Starting chat",
            provider=self.name,
            model=params.model,
            stream=options.stream,
            messages=len(messages),
        )

        try:
            if options.stream:
                async with aclosing(self._stream(messages, params)) as deltas:
                    async for delta in deltas:
                        yield delta
            else:
                content = await self._create(messages, params)
                yield content
        except ProviderError:
            raise
        except Exception as e:
            raise self._handle_error(e) from e

    async def complete(
        self, prompt: str, options: Optional[CompletionOptions] = None
    ) -> str:
        """Single-shot, non-streaming completion for one user prompt.

        Raises:
            UpstreamCallError: If the upstream call fails
            ProviderNotImplementedError: If the backend is a placeholder
        """
        options = options or CompletionOptions()
        chat_options = ChatOptions(
            model=options.model,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
            stream=False,
        )
        parts: List[str] = []
        async for part in self.chat([Message.user(prompt)], chat_options):
            parts.append(part)
        return "".join(parts)

    def validate_config(self, config: ProviderConfig) -> ConfigValidation:
        """Check a config without touching the network.

        Returns:
            ConfigValidation listing every violated constraint
        """
        errors: List[str] = []

        if not config.api_key:
            errors.append("API key is required")
        elif self.key_prefix and not config.api_key.startswith(self.key_prefix):
            errors.append(
                f"Invalid {self.display_name} API key format "
                f"(should start with {self.key_prefix})"
            )

        if config.model and config.model not in self.models:
            errors.append(
                f"Unsupported model: {config.model}. "
                f"Supported models: {', '.join(self.models)}"
            )

        if config.temperature is not None and not (
            0 <= config.temperature <= self.max_temperature
        ):
            errors.append(f"Temperature must be between 0 and {self.max_temperature:g}")

        if config.max_tokens is not None and config.max_tokens <= 0:
            errors.append("Max tokens must be greater than 0")

        return ConfigValidation.from_errors(errors)

    @abstractmethod
    async def _probe(self, api_key: str) -> None:
        """Issue the cheapest request that proves ``api_key`` works.

        Raises:
            Exception: Anything the upstream client raises on failure
        """
        pass

    @abstractmethod
    def _stream(
        self, messages: Sequence[Message], params: CallParameters
    ) -> AsyncIterator[str]:
        """Open a streaming request and yield each non-empty text delta."""
        pass

    @abstractmethod
    async def _create(self, messages: Sequence[Message], params: CallParameters) -> str:
        """Issue a blocking request and return the full reply text."""
        pass

    def _handle_error(self, error: Exception) -> UpstreamCallError:
        """Convert an upstream exception into a provider error.

        Args:
            error: Exception raised by the upstream client

        Returns:
            UpstreamRateLimitError for rate/quota failures, otherwise
            UpstreamCallError
        """
        error_str = str(error).lower()
        status_code: Any = getattr(error, "status_code", None)

        if status_code == 429 or any(m in error_str for m in self.rate_limit_markers):
            return UpstreamRateLimitError(
                f"{self.display_name} rate limit exceeded: {error}. "
                "Wait a moment and try again.",
                provider=self.name,
                upstream_message=str(error),
            )
        return UpstreamCallError(
            f"{self.display_name} API error: {error}. "
            "Check your API key, model and network connection.",
            provider=self.name,
            upstream_message=str(error),
        )
