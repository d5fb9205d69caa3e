"""Entry point for the ``echoai`` command."""

import click

from echoai import __version__
from echoai.logging import setup_logging

from .chat import chat_cmd
from .config import config_group
from .provider import provider_group


@click.group(context_settings={"max_content_width": 120})
@click.version_option(__version__, prog_name="echoai")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Talk to many AI providers through one interface.

    \b
    Usage:
      echoai provider list            Show providers and their status
      echoai provider test openai     Check that a provider works
      echoai chat -p openai "Hello!"  Stream a reply
    """
    setup_logging()
    ctx.ensure_object(dict)


main.add_command(provider_group)
main.add_command(chat_cmd)
main.add_command(config_group)


if __name__ == "__main__":
    main()
