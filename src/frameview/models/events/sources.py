from enum import Enum, auto


class KeyboardSource(Enum):
    STDIN = auto()
    API = auto()


class EventSource(Enum):
    """Event source identifiers for application events"""
    INPUT = auto()              # Keyboard / pointer / slider input
    API = auto()                # REST requests
    VIEWER = auto()             # Viewer state changes
    SNAPSHOT_PUBLISHER = auto() # UI/frontend snapshot events
