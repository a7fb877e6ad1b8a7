"""AST walker tests."""

from dataclasses import dataclass

import pytest

from conftest import Badge, Card, warnings_in
from mdxstream.core import UnhandledNodeKind, UnsupportedAttributeExpression
from mdxstream.hydration import (
    AstWalker,
    Container,
    Display,
    Dropped,
    Invocation,
    LineBreak,
    walk,
)
from mdxstream.hydration.walker import MISSING_EXAMPLE_HINT
from mdxstream.markup import (
    Attribute,
    ComponentTag,
    ExpressionValue,
    Import,
    MarkupParser,
    Root,
    Text,
)
from mdxstream.markup.parser import MAX_DEPTH


@dataclass(frozen=True)
class Comment:
    """A node kind the walker has never heard of."""

    value: str


@pytest.mark.unit
def test_walk_registered_component(walker, registry, parser):
    """Test nested components become invocations with literal props."""
    root = parser.parse("<Card>\n<Badge color='red' count={2} pill>New</Badge>\n</Card>")

    tree = walker.walk(root)

    badge = Invocation(
        component=registry.lookup("Badge"),
        props={"color": "red", "count": 2, "pill": True},
        children=(Display(text=("New",)),),
    )
    assert tree == Container(children=(
        Invocation(
            component=registry.lookup("Card"),
            props={},
            children=(LineBreak(), badge, LineBreak()),
        ),
    ))


@pytest.mark.unit
def test_walk_preserves_prop_order(walker, parser):
    """Test props keep attribute order."""
    tree = walker.walk(parser.parse("<Toggle title='t' subtitle='s' checked />"))

    invocation = tree.children[0]
    assert list(invocation.props) == ["title", "subtitle", "checked"]
    assert invocation.component.handle.__name__ == "Toggle"


@pytest.mark.unit
def test_walk_text_and_line_breaks(walker):
    """Test text becomes display nodes and newlines become line breaks."""
    root = Root(children=(Text("one"), Text("\n"), Text("two")))

    assert walker.walk(root) == Container(children=(
        Display(text=("one",)),
        LineBreak(),
        Display(text=("two",)),
    ))


@pytest.mark.unit
def test_walk_empty_text_is_filtered(walker):
    """Test empty display nodes contribute no slot."""
    root = Root(children=(Text(""), Text("x")))
    assert walker.walk(root) == Container(children=(Display(text=("x",)),))


@pytest.mark.unit
def test_walk_intrinsic_element(walker, registry, parser):
    """Test lowercase elements become tagged containers."""
    tree = walker.walk(parser.parse("<section><Badge /></section>"))

    assert tree == Container(children=(
        Container(
            tag="section",
            children=(Invocation(component=registry.lookup("Badge")),),
        ),
    ))


@pytest.mark.unit
def test_walk_import_is_dropped(walker):
    """Test module declarations render nothing."""
    root = Root(children=(Import("import x from 'y'"),))
    assert walker.walk(root) == Container(children=(Dropped(),))


@pytest.mark.unit
def test_walk_unregistered_component(walker, capture, parser):
    """Test unknown components are dropped with exactly one warning."""
    tree = walker.walk(parser.parse("<Card><Chart>inside</Chart></Card>"))

    assert tree.children[0].children == (Dropped(),)

    warnings = warnings_in(capture)
    assert len(warnings) == 1
    assert warnings[0].kwargs["event"] == "component_not_registered"
    assert warnings[0].kwargs["component"] == "Chart"
    assert warnings[0].kwargs["hint"] == MISSING_EXAMPLE_HINT


@pytest.mark.unit
def test_walk_unregistered_component_ignores_complex_attributes(walker, capture):
    """Test lookup happens before props are built."""
    root = Root(children=(
        ComponentTag(name="Chart", attributes=(Attribute("data", ExpressionValue("[1]")),)),
    ))

    assert walker.walk(root) == Container(children=(Dropped(),))
    assert len(warnings_in(capture)) == 1


@pytest.mark.unit
def test_walk_unregistered_component_records_metric(registry, diagnostics, metrics):
    """Test unresolved components are counted."""
    walker = AstWalker(registry, logger=diagnostics, metrics=metrics)
    walker.walk(Root(children=(ComponentTag(name="Chart"),)))

    value = metrics.registry.get_sample_value(
        "mdx_diagnostics_total", {"kind": "unresolved_component"}
    )
    assert value == 1.0


@pytest.mark.unit
def test_walk_complex_attribute_raises(walker, parser):
    """Test registered components reject non-literal props."""
    root = parser.parse('<Badge data={[[{"key": "value"}]]} />')

    with pytest.raises(UnsupportedAttributeExpression) as exc_info:
        walker.walk(root)

    assert exc_info.value.component == "Badge"
    assert exc_info.value.attribute == "data"
    assert exc_info.value.expression == '[[{"key": "value"}]]'


@pytest.mark.unit
def test_walk_spread_attribute_raises(walker, parser):
    """Test spread props are complex expressions."""
    with pytest.raises(UnsupportedAttributeExpression):
        walker.walk(parser.parse("<Badge {...props} />"))


@pytest.mark.unit
def test_walk_unknown_node_kind(walker):
    """Test node kinds outside the grammar are surfaced, not skipped."""
    root = Root(children=(Text("fine"), Comment("surprise")))

    with pytest.raises(UnhandledNodeKind) as exc_info:
        walker.walk(root)

    assert exc_info.value.node == Comment("surprise")


@pytest.mark.unit
def test_walk_is_pure(walker, parser):
    """Test walking the same tree twice gives equal UI trees."""
    root = parser.parse("<Card>\n  <Badge color='red'>New</Badge>\n</Card>")
    assert walker.walk(root) == walker.walk(root)


@pytest.mark.unit
def test_walk_convenience_function(badge_registry, diagnostics):
    """Test the module-level walk helper."""
    root = Root(children=(ComponentTag(name="Badge", children=(Text("Hi"),)),))

    tree = walk(root, badge_registry, logger=diagnostics)

    assert tree.children[0].component.handle is Badge
    assert tree.children[0].children == (Display(text=("Hi",)),)


@pytest.mark.unit
def test_walk_handles_are_callers_objects(walker, parser):
    """Test invocations carry the caller's handle unchanged."""
    tree = walker.walk(parser.parse("<Card />"))
    assert tree.children[0].component.handle is Card


@pytest.mark.unit
def test_ui_tree_serializes_without_handles(walker, parser):
    """Test UI trees dump to plain data, leaving handles out."""
    tree = walker.walk(parser.parse("<Badge color='red'>Hi</Badge>"))

    assert tree.model_dump() == {
        "kind": "container",
        "tag": None,
        "children": (
            {
                "kind": "invocation",
                "component": {"name": "Badge"},
                "props": {"color": "red"},
                "children": ({"kind": "display", "text": ("Hi",)},),
            },
        ),
    }


@pytest.mark.unit
def test_walk_at_maximum_nesting(walker):
    """Test the deepest tree the parser accepts walks without exhausting the stack."""
    parser = MarkupParser(max_depth=MAX_DEPTH)
    root = parser.parse("<Card>" * MAX_DEPTH + "x" + "</Card>" * MAX_DEPTH)

    node = walker.walk(root).children[0]
    depth = 1
    while node.children and isinstance(node.children[0], Invocation):
        node = node.children[0]
        depth += 1

    assert depth == MAX_DEPTH
    assert node.children == (Display(text=("x",)),)
