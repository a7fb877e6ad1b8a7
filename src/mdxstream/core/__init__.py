"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    HydrationError,
    MarkupParseError,
    UnsupportedAttributeExpression,
    UnhandledNodeKind,
    FinalDocumentUnparsable,
)
from .logging_config import configure_logging, configure_from_settings, get_logger, session_logger
from .stream import PrefixBatcher


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "HydrationError",
    "MarkupParseError",
    "UnsupportedAttributeExpression",
    "UnhandledNodeKind",
    "FinalDocumentUnparsable",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "session_logger",
    # Streaming
    "PrefixBatcher",
    # DI
    "create_container",
]
