"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
"""

from frameview.models.events import Event
from frameview.models.events.types import EventType
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

# Snapshot events carry full render models; too noisy to print
_QUIET_EVENTS = {EventType.VIEWER_SNAPSHOT_UPDATED}


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    if event.type in _QUIET_EVENTS:
        return event

    source_str = event.source.name if event.source else "-"
    log.debug(f"Event: {event.type.name} from {source_str} | {event.to_data()}")
    return event
