from enum import Enum, auto


class EventType(Enum):
    # Input
    KEYBOARD_KEYPRESS = auto()
    POINTER_DRAG = auto()
    SLIDER_INPUT = auto()

    # Viewer
    VIEWER_COLOR_SELECTED = auto()
    VIEWER_FRAMES_UPDATED = auto()
    VIEWER_FRAME_CHANGED = auto()
    VIEWER_PROBE_COMPLETED = auto()
    VIEWER_CLOSED = auto()

    # Snapshot (UI)
    VIEWER_SNAPSHOT_UPDATED = auto()
