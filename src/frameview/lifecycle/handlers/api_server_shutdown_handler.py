from __future__ import annotations

from typing import TYPE_CHECKING

from frameview.lifecycle.shutdown_protocol import IShutdownHandler
from frameview.utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from frameview.lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.LIFECYCLE)


class APIServerShutdownHandler(IShutdownHandler):
    """
    Stops the HTTP / Socket.IO server first so no new input arrives.

    Priority: 100
    """

    def __init__(self, api_wrapper: "APIServerWrapper"):
        self.api_wrapper = api_wrapper

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        if not self.api_wrapper.is_running:
            log.debug("API server not running")
            return
        await self.api_wrapper.stop()
