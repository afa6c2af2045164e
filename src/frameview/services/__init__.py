"""Services layer"""

from .event_bus import EventBus
from .frame_loader import HttpFrameLoader, IFrameLoader
from .frame_prober import FrameProber
from .frame_viewer import FrameViewer
from .viewer_service import ViewerService, ViewerSession
from .snapshot_publisher import SnapshotPublisher
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "HttpFrameLoader",
    "IFrameLoader",
    "FrameProber",
    "FrameViewer",
    "ViewerService",
    "ViewerSession",
    "SnapshotPublisher",
    "ServiceContainer",
]
