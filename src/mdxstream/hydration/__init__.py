"""Hydration: parse trees resolved against registered components into UI trees."""

from .models import (
    RegisteredComponent,
    Container,
    Invocation,
    Display,
    LineBreak,
    Dropped,
    UiNode,
)
from .registry import ComponentRegistry, UsageExample
from .walker import AstWalker, walk

__all__ = [
    "RegisteredComponent",
    "Container",
    "Invocation",
    "Display",
    "LineBreak",
    "Dropped",
    "UiNode",
    "ComponentRegistry",
    "UsageExample",
    "AstWalker",
    "walk",
]
