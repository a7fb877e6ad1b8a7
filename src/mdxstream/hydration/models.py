"""UI Tree Models - renderer-agnostic output of hydration."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..markup.nodes import Scalar


class UiModel(BaseModel):
    """Base for immutable UI tree nodes."""

    model_config = ConfigDict(frozen=True)


class RegisteredComponent(UiModel):
    """A component discovered in the usage examples."""

    name: str = Field(..., description="Name the markup refers to the component by")
    handle: Any = Field(default=None, exclude=True, description="Caller-owned renderable")


class Container(UiModel):
    """Ordered group of nodes; ``tag`` names the intrinsic element, if any."""

    kind: Literal["container"] = "container"
    tag: str | None = None
    children: tuple["UiNode", ...] = ()


class Invocation(UiModel):
    """A registered component invoked with literal props."""

    kind: Literal["invocation"] = "invocation"
    component: RegisteredComponent
    props: dict[str, Scalar] = Field(default_factory=dict)
    children: tuple["UiNode", ...] = ()


class Display(UiModel):
    kind: Literal["display"] = "display"
    text: tuple[str, ...]


class LineBreak(UiModel):
    kind: Literal["line_break"] = "line_break"


class Dropped(UiModel):
    """Placeholder for a node that renders nothing."""

    kind: Literal["dropped"] = "dropped"


UiNode = Annotated[
    Union[Container, Invocation, Display, LineBreak, Dropped],
    Field(discriminator="kind"),
]


Container.model_rebuild()
Invocation.model_rebuild()
