"""Dependency Injection Container."""

import uuid

from injector import Injector, Module, inject, provider, singleton

from ..hydration import ComponentRegistry
from ..markup import MarkupParser
from ..monitoring import metrics_collector
from ..streaming import StreamCoordinator
from .config import Settings, get_settings
from .logging_config import session_logger


class CoordinatorFactory:
    """Builds one coordinator per completion session."""

    @inject
    def __init__(self, parser: MarkupParser, settings: Settings) -> None:
        self.parser = parser
        self.metrics = metrics_collector if settings.metrics_enabled else None

    def create(self, registry: ComponentRegistry, session_id: str | None = None) -> StreamCoordinator:
        """Create a coordinator with a logger bound to the session."""
        logger = session_logger(session_id or uuid.uuid4().hex)
        return StreamCoordinator(
            registry, parser=self.parser, logger=logger, metrics=self.metrics
        )


class HydrationModule(Module):
    """Hydration dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings singleton."""
        return self.settings if self.settings is not None else get_settings()

    @singleton
    @provider
    def provide_parser(self, settings: Settings) -> MarkupParser:
        """Provide markup parser with the configured nesting limit."""
        return MarkupParser(max_depth=settings.max_nesting_depth)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([HydrationModule(settings)])
