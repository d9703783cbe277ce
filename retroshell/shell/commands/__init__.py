"""Built-in command modules; importing them fills ``COMMAND_REGISTRY``."""

from . import file_ops, meta, navigation, search, text  # noqa: F401

__all__ = ["file_ops", "meta", "navigation", "search", "text"]
