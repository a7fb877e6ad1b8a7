"""Component Registry - components the markup may invoke, learned from usage examples."""

import json
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Union

from pydantic import BaseModel, Field

from ..core import get_logger
from .models import RegisteredComponent

logger = get_logger(__name__)


# ============================================================================
# Usage Examples
# ============================================================================

class UsageExample(BaseModel):
    """One example invocation of a component, as shown to the generation source."""

    component: Any = Field(..., description="Renderable handle, e.g. a class or function")
    props: dict[str, Any] = Field(default_factory=dict)
    children: list[Union["UsageExample", str]] = Field(default_factory=list)
    name: str | None = Field(default=None, description="Markup name; defaults to the handle's __name__")

    @property
    def component_name(self) -> str:
        name = self.name or getattr(self.component, "__name__", None)
        if not name:
            raise ValueError(f"Cannot derive a component name from {self.component!r}")
        return name

    def to_markup(self) -> str:
        """Render this example as markup."""
        attributes = "".join(f" {_format_attribute(k, v)}" for k, v in self.props.items())
        if not self.children:
            return f"<{self.component_name}{attributes} />"
        body = "".join(
            child if isinstance(child, str) else child.to_markup() for child in self.children
        )
        return f"<{self.component_name}{attributes}>{body}</{self.component_name}>"


UsageExample.model_rebuild()

Examples = Union[UsageExample, str, Iterable["Examples"]]


def _format_attribute(name: str, value: Any) -> str:
    if value is True:
        return name
    if isinstance(value, str):
        quote = '"' if "'" in value else "'"
        return f"{name}={quote}{value}{quote}"
    return f"{name}={{{json.dumps(value)}}}"


def _iter_examples(examples: Examples) -> Iterator[UsageExample]:
    """Depth-first over every example invocation, nested ones included."""
    if isinstance(examples, str):
        return
    if isinstance(examples, UsageExample):
        yield examples
        yield from _iter_examples(examples.children)
        return
    for item in examples:
        yield from _iter_examples(item)


# ============================================================================
# Registry
# ============================================================================

class ComponentRegistry:
    """
    Immutable name -> component mapping.
    Built once per completion session; later duplicates of a name win.
    """

    def __init__(
        self,
        components: Mapping[str, RegisteredComponent] | None = None,
        examples: tuple[UsageExample, ...] = (),
    ) -> None:
        self._components = MappingProxyType(dict(components or {}))
        self._examples = examples

    @classmethod
    def build(cls, examples: Examples) -> "ComponentRegistry":
        """Collect every component invoked anywhere in the usage examples."""
        top_level = _top_level(examples)
        components: dict[str, RegisteredComponent] = {}
        for example in _iter_examples(examples):
            name = example.component_name
            components[name] = RegisteredComponent(name=name, handle=example.component)

        logger.info("component_registry_built", components=sorted(components))
        return cls(components, top_level)

    def lookup(self, name: str) -> RegisteredComponent | None:
        """Get component by name."""
        return self._components.get(name)

    @property
    def names(self) -> list[str]:
        return sorted(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)

    def describe(self) -> str:
        """Formatted component list and usage examples for the generation prompt."""
        lines = [f"Available components: {', '.join(self.names)}"]
        if self._examples:
            lines.append("")
            lines.append("=== Begin components")
            lines.extend(example.to_markup() for example in self._examples)
            lines.append("=== end components")
        return "\n".join(lines)


def _top_level(examples: Examples) -> tuple[UsageExample, ...]:
    if isinstance(examples, str):
        return ()
    if isinstance(examples, UsageExample):
        return (examples,)
    return tuple(item for group in examples for item in _top_level(group))


# ============================================================================
# Exports
# ============================================================================

__all__ = [
    "UsageExample",
    "ComponentRegistry",
]
