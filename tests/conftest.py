"""Pytest configuration and fixtures."""

import os
from typing import AsyncIterator

import pytest
import structlog
from prometheus_client import CollectorRegistry
from structlog.testing import CapturingLogger

from mdxstream.hydration import AstWalker, ComponentRegistry, UsageExample
from mdxstream.markup import MarkupParser
from mdxstream.monitoring import MetricsCollector
from mdxstream.streaming import StreamCoordinator


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['MDX_LOG_LEVEL'] = 'DEBUG'
    os.environ['MDX_METRICS_ENABLED'] = 'false'


# ============================================================================
# Component Handles
# ============================================================================

class Badge:
    """Stand-in renderable."""


class Card:
    """Stand-in renderable."""


def Toggle(**props):
    """Function components work as handles too."""
    return props


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def usage_examples():
    """Usage examples in the shape a caller supplies them."""
    return [
        "Use cards to group content:",
        UsageExample(
            component=Card,
            children=[
                UsageExample(component=Badge, props={"color": "red"}, children=["New"]),
                UsageExample(component=Toggle, props={"title": "Dark mode", "checked": True}),
            ],
        ),
    ]


@pytest.fixture
def registry(usage_examples):
    """Registry with Card, Badge and Toggle."""
    return ComponentRegistry.build(usage_examples)


@pytest.fixture
def badge_registry():
    """Registry with only Badge."""
    return ComponentRegistry.build(UsageExample(component=Badge, props={"color": "red"}))


@pytest.fixture
def parser():
    """Markup parser fixture."""
    return MarkupParser()


@pytest.fixture
def capture():
    """Records every log call as a CapturedCall."""
    return CapturingLogger()


@pytest.fixture
def diagnostics(capture):
    """Logger writing raw event dicts into ``capture``."""
    return structlog.wrap_logger(capture, processors=[], wrapper_class=structlog.BoundLogger)


@pytest.fixture
def metrics():
    """Metrics collector on an isolated Prometheus registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def walker(registry, diagnostics):
    """Walker with captured diagnostics."""
    return AstWalker(registry, logger=diagnostics)


@pytest.fixture
def coordinator(registry, diagnostics, metrics):
    """Stream coordinator with captured diagnostics and isolated metrics."""
    return StreamCoordinator(registry, logger=diagnostics, metrics=metrics)


# ============================================================================
# Stream Helpers
# ============================================================================

async def frames_from(frames: list[str]) -> AsyncIterator[str]:
    """Async frame source over a fixed list."""
    for frame in frames:
        yield frame


def warnings_in(capture: CapturingLogger) -> list:
    """Captured warning-level calls."""
    return [call for call in capture.calls if call.method_name == "warning"]
