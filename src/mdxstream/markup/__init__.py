"""
Markup Gate
Parses streamed MDX-style markup into a parse tree, or rejects it whole.
"""

from .nodes import (
    Attribute,
    AttributeValue,
    ComponentTag,
    Element,
    ExpressionValue,
    Import,
    ParseNode,
    Root,
    Scalar,
    Text,
)
from .parser import MarkupParser, try_parse

__all__ = [
    "MarkupParser",
    "try_parse",
    "Attribute",
    "AttributeValue",
    "ComponentTag",
    "Element",
    "ExpressionValue",
    "Import",
    "ParseNode",
    "Root",
    "Scalar",
    "Text",
]
