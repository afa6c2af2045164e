"""Viewer state events (backend, specific)"""

from dataclasses import dataclass
from typing import Any, List, Optional

from frameview.models.enums import ViewerPhase
from frameview.models.events.base import Event
from frameview.models.events.types import EventType
from frameview.models.events.sources import EventSource


@dataclass(init=False)
class ViewerColorSelectedEvent(Event):
    viewer_id: str
    color_id: str
    previous_color_id: Optional[str]

    def __init__(self, viewer_id: str, color_id: str, previous_color_id: Optional[str] = None):
        super().__init__(type=EventType.VIEWER_COLOR_SELECTED, source=EventSource.VIEWER)
        self.viewer_id = viewer_id
        self.color_id = color_id
        self.previous_color_id = previous_color_id


@dataclass(init=False)
class ViewerFramesUpdatedEvent(Event):
    """Available frames or load progress of the active color changed"""
    viewer_id: str
    color_id: str
    available: List[int]
    loaded_count: int

    def __init__(self, viewer_id: str, color_id: str, available: List[int], loaded_count: int):
        super().__init__(type=EventType.VIEWER_FRAMES_UPDATED, source=EventSource.VIEWER)
        self.viewer_id = viewer_id
        self.color_id = color_id
        self.available = list(available)
        self.loaded_count = loaded_count


@dataclass(init=False)
class ViewerFrameChangedEvent(Event):
    viewer_id: str
    frame: int
    previous_frame: int

    def __init__(self, viewer_id: str, frame: int, previous_frame: int):
        super().__init__(type=EventType.VIEWER_FRAME_CHANGED, source=EventSource.VIEWER)
        self.viewer_id = viewer_id
        self.frame = frame
        self.previous_frame = previous_frame


@dataclass(init=False)
class ViewerProbeCompletedEvent(Event):
    viewer_id: str
    color_id: str
    phase: ViewerPhase
    available: List[int]

    def __init__(self, viewer_id: str, color_id: str, phase: ViewerPhase, available: List[int]):
        super().__init__(type=EventType.VIEWER_PROBE_COMPLETED, source=EventSource.VIEWER)
        self.viewer_id = viewer_id
        self.color_id = color_id
        self.phase = phase
        self.available = list(available)


@dataclass(init=False)
class ViewerClosedEvent(Event):
    viewer_id: str

    def __init__(self, viewer_id: str):
        super().__init__(type=EventType.VIEWER_CLOSED, source=EventSource.VIEWER)
        self.viewer_id = viewer_id


@dataclass(init=False)
class ViewerSnapshotUpdatedEvent(Event):
    """Generic UI-facing snapshot of one viewer"""
    viewer_id: str
    snapshot: Any

    def __init__(self, viewer_id: str, snapshot: Any):
        super().__init__(type=EventType.VIEWER_SNAPSHOT_UPDATED, source=EventSource.SNAPSHOT_PUBLISHER)
        self.viewer_id = viewer_id
        self.snapshot = snapshot
