"""Hydration error taxonomy.

Per-frame failures are recovered by the stream coordinator; failures on the
final document propagate to the consumer.
"""

from typing import Any


class HydrationError(Exception):
    """Base class for all markup hydration errors."""

    pass


class MarkupParseError(HydrationError):
    """Document is incomplete or malformed markup.

    On an intermediate frame this only means "not ready yet".
    """

    def __init__(self, reason: str, *, line: int | None = None, column: int | None = None):
        self.reason = reason
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line and line > 0 else ""
        super().__init__(f"{reason}{location}")


class UnsupportedAttributeExpression(HydrationError):
    """A registered component received a non-literal attribute value."""

    def __init__(self, component: str, attribute: str, expression: str):
        self.component = component
        self.attribute = attribute
        self.expression = expression
        super().__init__(
            f"Unsupported attribute expression on <{component}>: "
            f"{attribute}={{{expression}}}"
        )


class UnhandledNodeKind(HydrationError):
    """The walker met a parse node outside the known grammar."""

    def __init__(self, node: Any):
        self.node = node
        super().__init__(f"Unhandled markup node kind: {type(node).__name__}: {node!r}")


class FinalDocumentUnparsable(HydrationError):
    """The complete document at the end of the stream did not parse."""

    def __init__(self, reason: str, document: str):
        self.reason = reason
        self.document = document
        super().__init__(f"Final document is not parsable: {reason}")
