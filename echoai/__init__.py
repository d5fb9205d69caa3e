"""echoai: one interface over many LLM providers."""

__version__ = "0.1.0"
