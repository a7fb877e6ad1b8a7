"""
mdxstream
Hydrates streamed MDX-style markup into renderer-agnostic UI trees.
"""

from .core import (
    Settings,
    get_settings,
    configure_logging,
    create_container,
    HydrationError,
    MarkupParseError,
    UnsupportedAttributeExpression,
    UnhandledNodeKind,
    FinalDocumentUnparsable,
)
from .hydration import (
    AstWalker,
    ComponentRegistry,
    Container,
    Display,
    Dropped,
    Invocation,
    LineBreak,
    RegisteredComponent,
    UiNode,
    UsageExample,
)
from .markup import MarkupParser, try_parse
from .streaming import StreamCoordinator, TokenStreamSource, render_source, render_stream

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "create_container",
    "HydrationError",
    "MarkupParseError",
    "UnsupportedAttributeExpression",
    "UnhandledNodeKind",
    "FinalDocumentUnparsable",
    "AstWalker",
    "ComponentRegistry",
    "Container",
    "Display",
    "Dropped",
    "Invocation",
    "LineBreak",
    "RegisteredComponent",
    "UiNode",
    "UsageExample",
    "MarkupParser",
    "try_parse",
    "StreamCoordinator",
    "TokenStreamSource",
    "render_source",
    "render_stream",
]
