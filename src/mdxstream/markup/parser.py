"""Markup Parser - streamed markup text to parse tree, all or nothing."""

import ast
import re
from dataclasses import dataclass
from functools import lru_cache
from importlib.resources import files

from lark import Lark, Token, Transformer, Tree
from lark.exceptions import LarkError, UnexpectedInput, VisitError
from returns.result import Failure, Result, Success

from ..core.errors import MarkupParseError
from .nodes import (
    Attribute,
    AttributeValue,
    ComponentTag,
    Element,
    ExpressionValue,
    Import,
    ParseNode,
    Root,
    Text,
)

DEFAULT_MAX_DEPTH = 64
# Tree building and walking both recurse once per level
MAX_DEPTH = 128

_NOT_LITERAL = object()
_INTEGER = re.compile(r"-?\d+")
_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_QUOTED = re.compile(r"\"(?:[^\"\\\n]|\\.)*\"|'(?:[^'\\\n]|\\.)*'")
_TEMPLATE = re.compile(r"`[^`$\\]*`")
_COMMENTS_ONLY = re.compile(r"(?:/\*[\s\S]*?\*/\s*)+")


@lru_cache(maxsize=1)
def _markup_grammar() -> Lark:
    """Compile the markup grammar once per process."""
    grammar = (files(__package__) / "grammar.lark").read_text(encoding="utf-8")
    return Lark(grammar, parser="lalr", lexer="contextual")


def _literal_value(source: str) -> object:
    """Fold a scalar literal expression, or return ``_NOT_LITERAL``."""
    source = source.strip()
    match source:
        case "true":
            return True
        case "false":
            return False
        case "null":
            return None
    if _INTEGER.fullmatch(source):
        return int(source)
    if _NUMBER.fullmatch(source):
        return float(source)
    if _TEMPLATE.fullmatch(source):
        return source[1:-1]
    if _QUOTED.fullmatch(source):
        try:
            value = ast.literal_eval(source)
        except (ValueError, SyntaxError):
            return _NOT_LITERAL
        return value if isinstance(value, str) else _NOT_LITERAL
    return _NOT_LITERAL


@dataclass(frozen=True)
class _Expression:
    """Raw ``{...}`` body, resolved differently in content and attribute position."""

    source: str

    def as_attribute_value(self) -> AttributeValue:
        value = _literal_value(self.source)
        if value is _NOT_LITERAL:
            return ExpressionValue(self.source.strip())
        return value

    def as_content(self) -> Text | None:
        body = self.source.strip()
        if not body or _COMMENTS_ONLY.fullmatch(body):
            return None
        value = _literal_value(body)
        if value is _NOT_LITERAL:
            raise MarkupParseError(f"inline expressions are not supported: {{{body}}}")
        # JSX renders booleans and null as nothing
        if value is None or isinstance(value, bool):
            return None
        return Text(value=str(value))


@dataclass(frozen=True)
class _Tag:
    name: str
    attributes: tuple[Attribute, ...]


@dataclass(frozen=True)
class _ClosingTag:
    name: str
    line: int | None = None


def _is_intrinsic(name: str) -> bool:
    """Lowercase, undotted tag names are plain markup, not components."""
    return name[0].islower() and "." not in name


def _build_tag(tag: _Tag, children: tuple[ParseNode, ...]) -> ParseNode:
    if _is_intrinsic(tag.name):
        return Element(tag=tag.name, children=children)
    return ComponentTag(name=tag.name, attributes=tag.attributes, children=children)


class _TreeBuilder(Transformer):
    """Lark tree to :mod:`markup.nodes`. One instance per document."""

    def __init__(self, document: str):
        super().__init__(visit_tokens=True)
        self._document = document

    @staticmethod
    def _content(children: list) -> tuple[ParseNode, ...]:
        result = []
        for child in children:
            if isinstance(child, _Expression):
                child = child.as_content()
            if child is not None:
                result.append(child)
        return tuple(result)

    def start(self, children: list) -> Root:
        return Root(children=self._content(children))

    def esm(self, children: list) -> Import:
        return Import(source=str(children[0]))

    def TEXT(self, token: Token) -> Text | None:
        value = str(token)
        if token.column == 1:
            value = value.lstrip(" \t")
        return Text(value=value) if value else None

    def NEWLINE(self, token: Token) -> Text:
        return Text(value="\n")

    def expression(self, children: list) -> _Expression:
        opening, closing = children[0], children[-1]
        return _Expression(self._document[opening.end_pos:closing.start_pos])

    prop_expression = expression

    def string_attribute(self, children: list) -> Attribute:
        name, value = children
        return Attribute(name=str(name), value=str(value)[1:-1])

    def expression_attribute(self, children: list) -> Attribute:
        name, expression = children
        return Attribute(name=str(name), value=expression.as_attribute_value())

    def flag_attribute(self, children: list) -> Attribute:
        return Attribute(name=str(children[0]), value=True)

    def spread_attribute(self, children: list) -> Attribute:
        return Attribute(name="...", value=ExpressionValue(children[0].source.strip()))

    def open_tag(self, children: list) -> _Tag:
        name, *attributes = children
        return _Tag(name=str(name), attributes=tuple(attributes))

    self_closing_tag = open_tag

    def close_tag(self, children: list) -> _ClosingTag:
        name = children[0]
        return _ClosingTag(name=str(name), line=name.line)

    def element(self, children: list) -> ParseNode:
        tag, *rest = children
        if not rest:
            return _build_tag(tag, ())

        *content, closing = rest
        if closing.name != tag.name:
            raise MarkupParseError(
                f"expected closing tag </{tag.name}> but found </{closing.name}>",
                line=closing.line,
            )
        return _build_tag(tag, self._content(content))


class MarkupParser:
    """
    Parses streamed markup documents.

    A document either parses completely or not at all; no partial tree is
    ever returned. The parser keeps no state between calls.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        if not 1 <= max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH}, got {max_depth}")
        self.max_depth = max_depth

    def parse(self, document: str) -> Root:
        """
        Parse a markup document.

        Args:
            document: Markup text, possibly an incomplete prefix

        Returns:
            Root of the parse tree

        Raises:
            MarkupParseError: If the document is incomplete or malformed
        """
        try:
            tree = _markup_grammar().parse(document)
        except UnexpectedInput as e:
            raise MarkupParseError(_first_line(e), line=_position(e, "line"), column=_position(e, "column")) from e
        except LarkError as e:
            raise MarkupParseError(_first_line(e)) from e

        self._check_depth(tree)

        try:
            return _TreeBuilder(document).transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, MarkupParseError):
                raise e.orig_exc from None
            raise

    def try_parse(self, document: str) -> Result[Root, MarkupParseError]:
        """Parse without raising (Result pattern version)."""
        try:
            return Success(self.parse(document))
        except MarkupParseError as e:
            return Failure(e)

    def _check_depth(self, tree: Tree) -> None:
        stack = [(tree, 0)]
        while stack:
            node, depth = stack.pop()
            if node.data == "element":
                depth += 1
                if depth > self.max_depth:
                    raise MarkupParseError(f"elements nested deeper than {self.max_depth} levels")
            stack.extend((child, depth) for child in node.children if isinstance(child, Tree))


def _first_line(error: Exception) -> str:
    lines = str(error).strip().splitlines()
    return lines[0] if lines else type(error).__name__


def _position(error: UnexpectedInput, attribute: str) -> int | None:
    # lark reports "?" or -1 when the position is unknown
    value = getattr(error, attribute, None)
    return value if isinstance(value, int) and value > 0 else None


def try_parse(document: str) -> Result[Root, MarkupParseError]:
    """
    Convenience function to parse markup without raising

    Args:
        document: Markup text

    Returns:
        Success with the parse tree, or Failure with the parse error
    """
    return MarkupParser().try_parse(document)
