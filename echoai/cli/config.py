"""Configuration commands for echoai."""

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table

from echoai.config import get_config, reset_config
from echoai.config_store import API_KEY_ENV_VARS
from echoai.providers import ProviderError

from .context import get_registry
from .error_helpers import handle_provider_error

console = Console()


@click.group("config", invoke_without_command=True)
@click.pass_context
def config_group(ctx: click.Context) -> None:
    """View echoai configuration.

    \b
    Usage:
      echoai config          Show settings and configured providers
      echoai config setup    How to add provider credentials
    """
    if ctx.invoked_subcommand is None:
        _show(ctx)


def _show(ctx: click.Context) -> None:
    config = get_config()
    try:
        configured = asyncio.run(get_registry(ctx).config_store.list_providers())
    except ProviderError as e:
        sys.exit(handle_provider_error(e))

    table = Table(title="🔧 Echo AI Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Environment Variable", style="yellow")

    table.add_row("Config File", str(config.config_path), "ECHOAI_CONFIG_PATH")
    table.add_row(
        "Default Provider", config.default_provider or "❌ Not set", "ECHOAI_DEFAULT_PROVIDER"
    )
    table.add_row("Log Level", config.log_level, "ECHOAI_LOG_LEVEL")
    table.add_row("Log Format", config.log_format, "ECHOAI_LOG_FORMAT")

    # Show key status without revealing keys
    for name, env_var in API_KEY_ENV_VARS.items():
        status = "✅ Set" if name in configured else "❌ Not set"
        table.add_row(f"{name} credentials", status, env_var)

    console.print(table)


@config_group.command("setup")
def setup_cmd() -> None:
    """Show how to configure provider credentials."""
    config = get_config()
    click.echo("📝 To configure a provider, add it to your config file:")
    click.echo(f"\n  {config.config_path}\n")
    click.echo("  providers:")
    click.echo("    openai:")
    click.echo("      apiKey: sk-...")
    click.echo("      model: gpt-4")
    click.echo("    claude:")
    click.echo("      apiKey: sk-ant-...")
    click.echo("\nOr set an environment variable, for example:")
    for env_var in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GROQ_API_KEY"):
        click.echo(f"  export {env_var}=your_key_here")


@config_group.command("reset")
def reset_cmd() -> None:
    """Reload settings from the environment on next use."""
    reset_config()
    click.echo("✅ Configuration cache reset. New values will be loaded on next run.")
