"""Command-line interface for echoai."""
