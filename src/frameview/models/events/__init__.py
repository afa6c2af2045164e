"""
Event system for the frame viewer

Specific backend events (input, viewer state) and a generic frontend snapshot event.
"""

from frameview.models.events.types import EventType
from frameview.models.events.base import Event
from frameview.models.events.sources import EventSource, KeyboardSource

from frameview.models.events.input_events import (
    KeyboardKeyPressEvent,
    PointerDragEvent,
    SliderInputEvent,
)

from frameview.models.events.viewer_events import (
    ViewerColorSelectedEvent,
    ViewerFramesUpdatedEvent,
    ViewerFrameChangedEvent,
    ViewerProbeCompletedEvent,
    ViewerClosedEvent,
    ViewerSnapshotUpdatedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",
    "KeyboardSource",

    "KeyboardKeyPressEvent",
    "PointerDragEvent",
    "SliderInputEvent",

    "ViewerColorSelectedEvent",
    "ViewerFramesUpdatedEvent",
    "ViewerFrameChangedEvent",
    "ViewerProbeCompletedEvent",
    "ViewerClosedEvent",
    "ViewerSnapshotUpdatedEvent",
]
