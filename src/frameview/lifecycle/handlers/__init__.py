from .api_server_shutdown_handler import APIServerShutdownHandler
from .frame_loader_shutdown_handler import FrameLoaderShutdownHandler
from .task_cancellation_handler import AllTasksCancellationHandler
from .viewer_shutdown_handler import ViewerShutdownHandler

__all__ = [
    "APIServerShutdownHandler",
    "FrameLoaderShutdownHandler",
    "AllTasksCancellationHandler",
    "ViewerShutdownHandler",
]
