"""CLI commands for managing AI providers."""

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table

from echoai.exit_codes import ExitCode
from echoai.providers import ProviderError, parse_provider_name

from .context import get_registry
from .error_helpers import handle_provider_error

console = Console()


@click.group("provider")
def provider_group() -> None:
    """Manage AI providers.

    \b
    Commands:
      list       List available and configured providers
      test       Test provider authentication
      models     List available models for a provider
      validate   Check a provider's stored config offline
    """
    pass


@provider_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List available and configured providers."""
    registry = get_registry(ctx)
    try:
        statuses = asyncio.run(registry.list_providers())
    except ProviderError as e:
        sys.exit(handle_provider_error(e))

    table = Table(title="🔧 Available Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Status")

    for status in statuses:
        if status.ready:
            label = "[green]✅ Ready[/green]"
        elif status.configured:
            label = "[green]✅ Configured[/green]"
        else:
            label = "[red]❌ Not configured[/red]"
        table.add_row(status.name, label)

    console.print(table)

    if any(status.configured for status in statuses):
        console.print("\n💡 To test a provider: echoai provider test <name>")
    else:
        console.print("\n💡 To set up a provider: echoai config setup")


@provider_group.command("test")
@click.argument("name")
@click.pass_context
def test_cmd(ctx: click.Context, name: str) -> None:
    """Test provider authentication."""
    registry = get_registry(ctx)
    console.print(f"🔍 Testing {name} provider...")

    if asyncio.run(registry.test_provider(name)):
        console.print(f"[green]✅ {name} provider is working correctly![/green]")
        return

    console.print(
        f"[red]❌ {name} provider test failed.[/red] Check your API key and configuration."
    )
    sys.exit(ExitCode.USER_ERROR)


@provider_group.command("models")
@click.argument("name")
@click.pass_context
def models_cmd(ctx: click.Context, name: str) -> None:
    """List available models for a provider."""
    registry = get_registry(ctx)

    try:
        provider = asyncio.run(registry.get_provider(name))
    except ProviderError as e:
        sys.exit(handle_provider_error(e))

    console.print(f"🤖 Available models for {name}:")
    default_model = provider.get_default_model()
    for index, model in enumerate(provider.models, start=1):
        marker = " [dim](default)[/dim]" if model == default_model else ""
        console.print(f"  {index}. {model}{marker}")


@provider_group.command("validate")
@click.argument("name")
@click.pass_context
def validate_cmd(ctx: click.Context, name: str) -> None:
    """Check a provider's stored config without calling the API."""
    registry = get_registry(ctx)

    try:
        key = parse_provider_name(name).value
        validation = asyncio.run(registry.validate_provider(key))
    except ProviderError as e:
        sys.exit(handle_provider_error(e))

    if validation.is_valid:
        console.print(f"[green]✅ {key} configuration looks valid[/green]")
        return

    console.print(f"[red]❌ {key} configuration has problems:[/red]")
    for error in validation.errors:
        console.print(f"  • {error}")
    sys.exit(ExitCode.USER_ERROR)
