from __future__ import annotations

from typing import TYPE_CHECKING

from frameview.lifecycle.shutdown_protocol import IShutdownHandler
from frameview.utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from frameview.services.viewer_service import ViewerService

log = get_logger().for_category(LogCategory.LIFECYCLE)


class ViewerShutdownHandler(IShutdownHandler):
    """
    Closes every open viewer, cancelling their in-flight frame loads.

    Priority: 80
    """

    def __init__(self, viewer_service: "ViewerService"):
        self.viewer_service = viewer_service

    @property
    def shutdown_priority(self) -> int:
        return 80

    async def shutdown(self) -> None:
        count = len(self.viewer_service.list_sessions())
        await self.viewer_service.close_all()
        log.info(f"Closed {count} viewer(s)")
