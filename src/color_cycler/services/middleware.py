"""
Middleware for EventBus

Middleware = functions run on every event before handlers.
Return the (possibly modified) event, or None to drop it.
"""

from color_cycler.models.enums import LogCategory
from color_cycler.models.events import Event
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Trace every event at DEBUG level

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source = event.source.name if event.source else "-"
    log.debug(f"{event.type.name} from {source} | {event.describe()}")
    return event
