"""Stream Coordinator - hydrate growing documents, emitting only parsable frames."""

import asyncio
import inspect
from collections.abc import AsyncGenerator, AsyncIterable, Awaitable, Callable
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from returns.result import Failure, Result, Success

from ..core import (
    get_logger,
    HydrationError,
    MarkupParseError,
    UnsupportedAttributeExpression,
    UnhandledNodeKind,
    FinalDocumentUnparsable,
)
from ..hydration import AstWalker, ComponentRegistry, UiNode
from ..markup import MarkupParser, Root
from ..monitoring import MetricsCollector, metrics_collector
from .source import GenerationSource, close_async_iterator

FinalDocument = Union[str, Awaitable[str], Callable[[], Awaitable[str]]]


class StreamState(str, Enum):
    """Lifecycle of one completion stream."""

    STREAMING = "streaming"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class FrameStats:
    """Frame counts for one stream."""

    seen: int = 0
    hydrated: int = 0
    skipped: int = 0


class StreamCoordinator:
    """
    Drives parse + walk over a stream of document frames.

    Intermediate frames that fail to hydrate are skipped without surfacing;
    the final document is always hydrated and emitted last, or its failure
    is raised. One coordinator serves exactly one stream.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        *,
        parser: MarkupParser | None = None,
        logger: Any | None = None,
        metrics: MetricsCollector | None = metrics_collector,
    ) -> None:
        self.registry = registry
        self.parser = parser or MarkupParser()
        self.logger = logger if logger is not None else get_logger(__name__)
        self.metrics = metrics
        self.walker = AstWalker(registry, logger=self.logger, metrics=metrics)

        self.state = StreamState.STREAMING
        self.last_hydrated: UiNode | None = None
        self.stats = FrameStats()
        self._started = False

    def hydrate(self, document: str) -> Result[UiNode, HydrationError]:
        """
        Parse and walk one document.

        Returns:
            Success with the UI tree, or Failure with a recoverable error

        Raises:
            UnhandledNodeKind: Parse tree and walker disagree on the grammar
        """
        timer = self.metrics.measure_hydration() if self.metrics else nullcontext()
        with timer:
            return self.parser.try_parse(document).bind(self._walk)

    def _walk(self, root: Root) -> Result[UiNode, HydrationError]:
        try:
            return Success(self.walker.walk(root))
        except UnsupportedAttributeExpression as e:
            return Failure(e)

    async def run(
        self, frames: AsyncIterable[str], final_document: FinalDocument
    ) -> AsyncGenerator[UiNode, None]:
        """
        Hydrate each frame as it arrives, then the final document.

        Args:
            frames: Growing document prefixes
            final_document: The complete document, or an awaitable / zero-argument
                async callable producing it once the frames are exhausted

        Yields:
            UI trees for frames that hydrated, then the final UI tree

        Raises:
            FinalDocumentUnparsable: The complete document does not parse
            UnsupportedAttributeExpression: The complete document uses a complex prop
            UnhandledNodeKind: On any frame
        """
        if self._started:
            raise RuntimeError("A StreamCoordinator can only run one stream")
        self._started = True

        iterator = aiter(frames)
        try:
            async for frame in iterator:
                node = self._on_frame(frame)
                if node is not None:
                    yield node

            self._transition(StreamState.FINALIZING)
            result = self._finalize(await _resolve(final_document))
        except (GeneratorExit, asyncio.CancelledError):
            self._cancel()
            raise
        except UnhandledNodeKind as e:
            self._transition(StreamState.DONE)
            self.logger.error("unhandled_node_kind", error=str(e))
            self._record_failure(e)
            raise
        finally:
            await close_async_iterator(iterator)
            if inspect.iscoroutine(final_document):
                final_document.close()

        yield result

    def _on_frame(self, frame: str) -> UiNode | None:
        self.stats.seen += 1
        match self.hydrate(frame):
            case Success(node):
                self.last_hydrated = node
                self.stats.hydrated += 1
                self.logger.debug("frame_hydrated", frame=self.stats.seen, length=len(frame))
                if self.metrics:
                    self.metrics.record_frame("hydrated")
                return node
            case Failure(error):
                self._swallow(frame, error)
                return None

    def _swallow(self, frame: str, error: HydrationError) -> None:
        """A frame that does not hydrate yet is dropped; the last good tree stands."""
        self.stats.skipped += 1
        self.logger.debug(
            "frame_skipped",
            frame=self.stats.seen,
            length=len(frame),
            error_type=type(error).__name__,
            reason=str(error),
        )
        if self.metrics:
            self.metrics.record_frame("skipped")

    def _finalize(self, document: str) -> UiNode:
        result = self.hydrate(document)
        self._transition(StreamState.DONE)

        match result:
            case Success(node):
                self.last_hydrated = node
                self.logger.info(
                    "stream_complete",
                    frames=self.stats.seen,
                    hydrated=self.stats.hydrated,
                    skipped=self.stats.skipped,
                )
                if self.metrics:
                    self.metrics.record_stream("complete")
                return node
            case Failure(MarkupParseError() as error):
                self.logger.error("final_document_unparsable", reason=str(error), length=len(document))
                self._record_failure(error)
                raise FinalDocumentUnparsable(str(error), document) from error
            case Failure(error):
                self.logger.error("final_document_failed", error_type=type(error).__name__, reason=str(error))
                self._record_failure(error)
                raise error

    def _transition(self, state: StreamState) -> None:
        self.logger.debug("stream_state", previous=self.state.value, state=state.value)
        self.state = state

    def _cancel(self) -> None:
        self.logger.info("stream_cancelled", state=self.state.value, frames=self.stats.seen)
        self._transition(StreamState.DONE)
        if self.metrics:
            self.metrics.record_stream("cancelled")

    def _record_failure(self, error: Exception) -> None:
        if self.metrics:
            self.metrics.record_error(type(error).__name__)
            self.metrics.record_stream("failed")


async def _resolve(final_document: FinalDocument) -> str:
    if callable(final_document):
        final_document = final_document()
    if inspect.isawaitable(final_document):
        return await final_document
    return final_document


def render_stream(
    frames: AsyncIterable[str],
    final_document: FinalDocument,
    registry: ComponentRegistry,
    *,
    parser: MarkupParser | None = None,
    logger: Any | None = None,
    metrics: MetricsCollector | None = metrics_collector,
) -> AsyncGenerator[UiNode, None]:
    """
    Hydrate a streamed markup document.

    Each call starts an independent stream.

    Args:
        frames: Growing document prefixes
        final_document: Complete document (string, awaitable, or async callable)
        registry: Components the markup may invoke

    Returns:
        Async iterator of UI trees; the last one is always the final document's
    """
    coordinator = StreamCoordinator(registry, parser=parser, logger=logger, metrics=metrics)
    return coordinator.run(frames, final_document)


def render_source(
    source: GenerationSource,
    registry: ComponentRegistry,
    **kwargs: Any,
) -> AsyncGenerator[UiNode, None]:
    """Hydrate everything a generation source produces."""
    return render_stream(source.frames(), source.final, registry, **kwargs)
