"""Standardized exit codes for echoai CLI commands.

Following POSIX conventions and common CLI practices.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for echoai CLI commands."""

    SUCCESS = 0
    """Command completed successfully."""

    USER_ERROR = 1
    """User error: unknown provider, missing or invalid configuration."""

    SYSTEM_ERROR = 2
    """System error: missing SDK library or an unexpected provider failure."""

    PROCESSING_ERROR = 3
    """Processing error: upstream API failure during chat or completion."""

    INTERRUPTED = 130
    """User interrupted with SIGINT (Ctrl+C)."""
