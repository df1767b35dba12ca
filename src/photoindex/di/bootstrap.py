import logging

from .container import Container
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..library.manager import PhotoManager
from ..settings.manager import Settings
from ..utils.logging import get_logger


def bootstrap(container: Container, settings: Settings) -> Container:
    """Register the manager and its collaborators for *settings*."""

    container.register_instance(Settings, settings)
    container.register_factory(logging.Logger, get_logger, singleton=True)
    container.register_factory(
        EventBus, lambda: EventBus(logger=container.resolve(logging.Logger)), singleton=True
    )
    container.register_factory(
        ErrorHandler,
        lambda: ErrorHandler(container.resolve(logging.Logger), container.resolve(EventBus)),
        singleton=True,
    )
    container.register_factory(
        PhotoManager,
        lambda: PhotoManager.from_settings(
            container.resolve(Settings),
            event_bus=container.resolve(EventBus),
            error_handler=container.resolve(ErrorHandler),
        ),
        singleton=True,
    )
    return container
