"""Chat command: stream a reply from a provider to stdout."""

import asyncio
import sys
from contextlib import aclosing
from typing import Optional

import click

from echoai.config import get_config
from echoai.exit_codes import ExitCode
from echoai.providers import ChatOptions, Message, ProviderError, ProviderRegistry

from .context import get_registry
from .error_helpers import handle_provider_error


async def _stream_reply(
    registry: ProviderRegistry,
    name: str,
    prompt: str,
    system: Optional[str],
    options: ChatOptions,
) -> None:
    provider = await registry.get_provider(name)

    messages = []
    if system:
        messages.append(Message.system(system))
    messages.append(Message.user(prompt))

    async with aclosing(provider.chat(messages, options)) as fragments:
        async for fragment in fragments:
            click.echo(fragment, nl=False)
    click.echo()


@click.command("chat")
@click.argument("prompt")
@click.option("--provider", "-p", "name", help="Provider to use (default: ECHOAI_DEFAULT_PROVIDER)")
@click.option("--model", "-m", default=None, help="Model override for this call")
@click.option("--system", "-s", default=None, help="System prompt")
@click.option("--temperature", "-t", type=float, default=None, help="Sampling temperature")
@click.option("--max-tokens", type=int, default=None, help="Maximum tokens to generate")
@click.option("--no-stream", is_flag=True, help="Wait for the full reply instead of streaming")
@click.pass_context
def chat_cmd(
    ctx: click.Context,
    prompt: str,
    name: Optional[str],
    model: Optional[str],
    system: Optional[str],
    temperature: Optional[float],
    max_tokens: Optional[int],
    no_stream: bool,
) -> None:
    """Send PROMPT to a provider and print the reply.

    \b
    Examples:
      echoai chat -p openai "Explain asyncio in one paragraph"
      echoai chat -p claude -m claude-3-haiku-20240307 --no-stream "Hi"
    """
    name = name or get_config().default_provider
    if not name:
        raise click.UsageError("No provider given. Use --provider or set ECHOAI_DEFAULT_PROVIDER.")

    options = ChatOptions(
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        stream=not no_stream,
    )
    registry = get_registry(ctx)

    try:
        asyncio.run(_stream_reply(registry, name, prompt, system, options))
    except ProviderError as e:
        sys.exit(handle_provider_error(e))
    except KeyboardInterrupt:
        click.echo()
        sys.exit(ExitCode.INTERRUPTED)
