"""AST Walker - markup parse tree to UI tree."""

from typing import Any

from ..core import get_logger, UnsupportedAttributeExpression, UnhandledNodeKind
from ..markup.nodes import ComponentTag, Element, ExpressionValue, Import, ParseNode, Root, Text, Scalar
from ..monitoring import MetricsCollector
from .models import Container, Display, Dropped, Invocation, LineBreak, UiNode
from .registry import ComponentRegistry

MISSING_EXAMPLE_HINT = (
    "You may need to adjust the prompt or include a usage example of this component."
)


class AstWalker:
    """
    Converts parse trees into UI trees.

    Component tags resolve against the registry; unknown components are
    dropped with a diagnostic, never failing the walk.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        logger: Any | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.registry = registry
        self.logger = logger if logger is not None else get_logger(__name__)
        self.metrics = metrics

    def walk(self, node: ParseNode) -> UiNode:
        """
        Walk a parse node depth-first, preserving document order.

        Raises:
            UnsupportedAttributeExpression: A registered component got a non-literal prop
            UnhandledNodeKind: The node is not part of the markup grammar
        """
        match node:
            case Root(children=children):
                return Container(children=self._walk_children(children))
            case Element(tag=tag, children=children):
                return Container(tag=tag, children=self._walk_children(children))
            case ComponentTag():
                return self._walk_component(node)
            case Text(value="\n"):
                return LineBreak()
            case Text(value=value):
                return Display(text=(value,))
            case Import():
                return Dropped()
            case _:
                raise UnhandledNodeKind(node)

    def _walk_children(self, children: tuple[ParseNode, ...]) -> tuple[UiNode, ...]:
        return tuple(node for node in map(self.walk, children) if not _is_empty(node))

    def _walk_component(self, node: ComponentTag) -> UiNode:
        component = self.registry.lookup(node.name)
        if component is None:
            self.logger.warning(
                "component_not_registered",
                component=node.name,
                hint=MISSING_EXAMPLE_HINT,
            )
            if self.metrics:
                self.metrics.record_diagnostic("unresolved_component")
            return Dropped()

        props: dict[str, Scalar] = {}
        for attribute in node.attributes:
            if isinstance(attribute.value, ExpressionValue):
                raise UnsupportedAttributeExpression(
                    node.name, attribute.name, attribute.value.source
                )
            props[attribute.name] = attribute.value

        return Invocation(
            component=component,
            props=props,
            children=self._walk_children(node.children),
        )


def _is_empty(node: UiNode) -> bool:
    """Nodes that contribute no slot to their parent."""
    return isinstance(node, Display) and not any(node.text)


def walk(
    root: ParseNode,
    registry: ComponentRegistry,
    logger: Any | None = None,
) -> UiNode:
    """
    Convenience function to walk a parse tree

    Args:
        root: Parse tree, usually a Root
        registry: Components the markup may invoke
        logger: Diagnostics sink

    Returns:
        UI tree
    """
    return AstWalker(registry, logger=logger).walk(root)
