#!/usr/bin/env python3
"""
Read-only sources of per-provider configuration.

The provider registry asks a ``ConfigStore`` for a provider's settings when
it first resolves that provider. Stores never write anything back; setting
up credentials is the job of the config file or the environment.

Config file layout (YAML)::

    providers:
      openai:
        apiKey: sk-...
        model: gpt-4
        temperature: 0.2
      claude:
        api_key: sk-ant-...
"""

import asyncio
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .config import get_config
from .logging import get_logger
from .providers.base import InvalidConfigurationError, ProviderConfig
from .providers.registry import ConfigStore

logger = get_logger(__name__)

# Map provider names to common environment variable names
API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
    "meta": "TOGETHER_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}

BASE_URL_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_BASE_URL",
    "claude": "ANTHROPIC_BASE_URL",
    "groq": "GROQ_BASE_URL",
    "meta": "TOGETHER_BASE_URL",
    "openrouter": "OPENROUTER_BASE_URL",
}


def _coerce(config: Union[ProviderConfig, Mapping[str, Any]]) -> ProviderConfig:
    if isinstance(config, ProviderConfig):
        return config
    return ProviderConfig.model_validate(dict(config))


class InMemoryConfigStore:
    """Dict-backed store, used for composition and tests."""

    def __init__(
        self,
        providers: Optional[Mapping[str, Union[ProviderConfig, Mapping[str, Any]]]] = None,
    ) -> None:
        self._providers: Dict[str, ProviderConfig] = {
            name.lower(): _coerce(config) for name, config in (providers or {}).items()
        }

    def set_provider(
        self, name: str, config: Union[ProviderConfig, Mapping[str, Any]]
    ) -> None:
        self._providers[name.lower()] = _coerce(config)

    def remove_provider(self, name: str) -> None:
        self._providers.pop(name.lower(), None)

    async def get_provider(self, name: str) -> Optional[ProviderConfig]:
        return self._providers.get(name.lower())

    async def list_providers(self) -> List[str]:
        return list(self._providers)


class YamlConfigStore:
    """Reads the ``providers`` section of a YAML config file.

    The file is re-read on every lookup so that edits made by a setup step
    are picked up without restarting. A missing file means no providers.
    A file that cannot be read or parsed, or an entry that fails validation,
    raises ``InvalidConfigurationError`` naming the file and the problem.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _load(self, provider: Optional[str] = None) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.debug("Could not read config file", path=str(self.path), error=str(e))
            raise InvalidConfigurationError(
                f"Could not read config file {self.path}: {e}. "
                "Fix the file or run: echoai config setup",
                provider=provider,
            ) from e
        providers = data.get("providers") if isinstance(data, dict) else None
        if not isinstance(providers, dict):
            return {}
        return {str(name).lower(): raw for name, raw in providers.items()}

    async def get_provider(self, name: str) -> Optional[ProviderConfig]:
        name = name.lower()
        raw = (await asyncio.to_thread(self._load, name)).get(name)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise InvalidConfigurationError(
                f"Invalid configuration for provider '{name}' in {self.path}: "
                f"expected a mapping of settings, got {type(raw).__name__}",
                provider=name,
            )
        try:
            return ProviderConfig.model_validate(raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidConfigurationError(
                f"Invalid configuration for provider '{name}' in {self.path}: {problems}",
                provider=name,
            ) from e

    async def list_providers(self) -> List[str]:
        return list(await asyncio.to_thread(self._load))


class EnvConfigStore:
    """Builds provider configs from ``<VENDOR>_API_KEY`` environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ if environ is not None else os.environ

    async def get_provider(self, name: str) -> Optional[ProviderConfig]:
        name = name.lower()
        env_var = API_KEY_ENV_VARS.get(name)
        api_key = self._environ.get(env_var) if env_var else None
        if not api_key:
            return None

        base_url_var = BASE_URL_ENV_VARS.get(name)
        base_url = self._environ.get(base_url_var) if base_url_var else None
        return ProviderConfig(api_key=api_key, base_url=base_url or None)

    async def list_providers(self) -> List[str]:
        return [name for name, env_var in API_KEY_ENV_VARS.items() if self._environ.get(env_var)]


class ChainedConfigStore:
    """Asks each store in turn; the first one that knows the provider wins."""

    def __init__(self, *stores: ConfigStore) -> None:
        self.stores = stores

    async def get_provider(self, name: str) -> Optional[ProviderConfig]:
        for store in self.stores:
            config = await store.get_provider(name)
            if config is not None:
                return config
        return None

    async def list_providers(self) -> List[str]:
        names: List[str] = []
        for store in self.stores:
            for name in await store.list_providers():
                if name not in names:
                    names.append(name)
        return names


def default_config_store() -> ConfigStore:
    """Config file first, then environment variables."""
    config = get_config()
    return ChainedConfigStore(YamlConfigStore(config.config_path), EnvConfigStore())
