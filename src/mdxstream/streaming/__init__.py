"""Streaming: frame-by-frame hydration of a growing markup document."""

from .coordinator import (
    FinalDocument,
    FrameStats,
    StreamCoordinator,
    StreamState,
    render_source,
    render_stream,
)
from .source import GenerationSource, TokenStreamSource

__all__ = [
    "FinalDocument",
    "FrameStats",
    "StreamCoordinator",
    "StreamState",
    "render_source",
    "render_stream",
    "GenerationSource",
    "TokenStreamSource",
]
