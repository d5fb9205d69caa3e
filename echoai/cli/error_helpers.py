"""User-friendly error messages for CLI commands.

Provides helpful error messages with:
- Clear problem statements
- Actionable suggestions
- The exit code that matches the failure
"""

from typing import List, Optional

from rich.console import Console

from echoai.exit_codes import ExitCode
from echoai.providers import (
    AuthenticationFailedError,
    ConfigurationMissingError,
    InvalidConfigurationError,
    ProviderError,
    ProviderNotImplementedError,
    UnsupportedProviderError,
    UpstreamCallError,
    UpstreamRateLimitError,
    known_providers,
)

console = Console(stderr=True)


def format_error_message(
    title: str,
    message: str,
    suggestions: Optional[List[str]] = None,
) -> str:
    """Format a comprehensive error message.

    Args:
        title: Short error title (e.g., "Provider not configured")
        message: Detailed error message
        suggestions: List of actionable suggestions

    Returns:
        Formatted error message
    """
    lines = [
        f"[red]✗ Error:[/red] {title}",
        "",
        message,
    ]

    if suggestions:
        lines.append("")
        lines.append("[bold]Suggestions:[/bold]")
        for suggestion in suggestions:
            lines.append(f"  • {suggestion}")

    return "\n".join(lines)


def handle_provider_error(error: ProviderError) -> ExitCode:
    """Print a provider error with remediation hints.

    Args:
        error: Error raised while resolving or using a provider

    Returns:
        Exit code the command should finish with
    """
    name = error.provider or "provider"

    if isinstance(error, InvalidConfigurationError):
        title = f"{name} configuration is invalid"
        suggestions = [
            "Fix the entry in your config file (ECHOAI_CONFIG_PATH)",
            "See the expected layout: echoai config setup",
        ]
        code = ExitCode.USER_ERROR
    elif isinstance(error, ConfigurationMissingError):
        title = f"{name} is not configured"
        suggestions = [
            "Run: echoai config setup",
            f"Or add a '{name}' entry under 'providers:' in your config file",
        ]
        code = ExitCode.USER_ERROR
    elif isinstance(error, UnsupportedProviderError):
        title = f"Unknown provider '{name}'"
        suggestions = [f"Known providers: {', '.join(known_providers())}"]
        code = ExitCode.USER_ERROR
    elif isinstance(error, AuthenticationFailedError):
        title = f"{name} authentication failed"
        suggestions = [
            "Check your API key format: echoai provider validate " + name,
            "Make sure the key has not been revoked",
        ]
        code = ExitCode.USER_ERROR
    elif isinstance(error, ProviderNotImplementedError):
        title = f"{name} is not available yet"
        suggestions = ["See working providers: echoai provider list"]
        code = ExitCode.USER_ERROR
    elif isinstance(error, UpstreamRateLimitError):
        title = f"{name} rate limit exceeded"
        suggestions = ["Wait a moment and try again", "Or switch to another provider"]
        code = ExitCode.PROCESSING_ERROR
    elif isinstance(error, UpstreamCallError):
        title = f"{name} request failed"
        suggestions = [
            f"Test the provider: echoai provider test {name}",
            "Check the model name and your network connection",
        ]
        code = ExitCode.PROCESSING_ERROR
    else:
        title = f"{name} error"
        suggestions = []
        code = ExitCode.SYSTEM_ERROR

    console.print(format_error_message(title=title, message=str(error), suggestions=suggestions))
    return code
