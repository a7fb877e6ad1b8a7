"""Markup parse tree."""

from dataclasses import dataclass, field
from typing import Union

Scalar = Union[str, bool, int, float, None]


@dataclass(frozen=True)
class ExpressionValue:
    """Attribute value that is a nested expression rather than a literal."""

    source: str


AttributeValue = Union[Scalar, ExpressionValue]


@dataclass(frozen=True)
class Attribute:
    """A name/value pair on a component tag. Bare attributes carry ``True``."""

    name: str
    value: AttributeValue = True


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Import:
    """Module-level ``import``/``export`` declaration."""

    source: str


@dataclass(frozen=True)
class Element:
    """Intrinsic markup element such as ``<div>``; never resolved as a component."""

    tag: str
    children: tuple["ParseNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ComponentTag:
    """Tag invoking a component by name."""

    name: str
    attributes: tuple[Attribute, ...] = field(default_factory=tuple)
    children: tuple["ParseNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Root:
    children: tuple["ParseNode", ...] = field(default_factory=tuple)


ParseNode = Union[Root, Element, ComponentTag, Text, Import]


__all__ = [
    "Scalar",
    "ExpressionValue",
    "AttributeValue",
    "Attribute",
    "Text",
    "Import",
    "Element",
    "ComponentTag",
    "Root",
    "ParseNode",
]
