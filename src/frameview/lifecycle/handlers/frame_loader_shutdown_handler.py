from __future__ import annotations

from frameview.lifecycle.shutdown_protocol import IShutdownHandler
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)


class FrameLoaderShutdownHandler(IShutdownHandler):
    """
    Closes the shared HTTP session of the frame loader.

    Priority: 60
    """

    def __init__(self, loader):
        self.loader = loader

    @property
    def shutdown_priority(self) -> int:
        return 60

    async def shutdown(self) -> None:
        close = getattr(self.loader, "close", None)
        if close is None:
            return
        await close()
        log.debug("Frame loader closed")
