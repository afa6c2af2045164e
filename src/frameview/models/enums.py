"""
Enums for the frame viewer state machine
"""

from enum import Enum, auto


class ViewerPhase(Enum):
    """
    Per-color-selection viewer phase

    INIT: No color selected yet / nothing probed
    PROBING: Frame loads or probes in flight
    READY: Probing finished with at least one frame
    EMPTY: Probing finished without a single usable frame
    CLOSED: Viewer closed; unfinished loads were cancelled
    """
    INIT = auto()
    PROBING = auto()
    READY = auto()
    EMPTY = auto()
    CLOSED = auto()


class ProbeMode(Enum):
    """How the set of frame indices is discovered for a color"""
    EXPLICIT = auto()      # Known-good list supplied by the color option
    AUTO_DETECT = auto()   # Brute-force probe of 0..total_frames-1


class DragPhase(Enum):
    """Pointer drag gesture phases"""
    START = auto()
    MOVE = auto()
    END = auto()


class SliderAction(Enum):
    """Slider track interactions"""
    CLICK = auto()
    PRESS = auto()
    MOVE = auto()
    RELEASE = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    PROBE = auto()       # Frame probing / loading
    CACHE = auto()       # Frame cache updates
    VIEWER = auto()      # Viewer state changes, color switches
    NAVIGATION = auto()  # Drag / slider / keyboard navigation
    RENDER = auto()      # Render snapshots
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    API = auto()
    SOCKETIO = auto()
    INPUT = auto()       # Keyboard adapters

    LIFECYCLE = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
