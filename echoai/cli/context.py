"""Shared state for CLI commands."""

import click

from echoai.config_store import default_config_store
from echoai.providers import ProviderRegistry


def get_registry(ctx: click.Context) -> ProviderRegistry:
    """Registry for this invocation.

    A registry placed in ``ctx.obj["registry"]`` (e.g. by tests or by code
    embedding the CLI) is used as-is; otherwise one is built over the
    default config store.
    """
    obj = ctx.ensure_object(dict)
    if "registry" not in obj:
        obj["registry"] = ProviderRegistry(default_config_store())
    return obj["registry"]
