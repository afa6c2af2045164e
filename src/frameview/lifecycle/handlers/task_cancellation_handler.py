from __future__ import annotations

import asyncio
from typing import List, Optional

from frameview.lifecycle.task_registry import TaskRegistry
from frameview.lifecycle.shutdown_protocol import IShutdownHandler
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels and awaits every task still running in the TaskRegistry.

    Priority: 40
    """

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    @property
    def shutdown_priority(self) -> int:
        return 40

    async def shutdown(self) -> None:
        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=self.exclude_tasks)
        if not tasks:
            return

        log.info(f"Cancelling {len(tasks)} remaining task(s)...")
        for task in tasks:
            task.cancel()

        await asyncio.gather(*tasks, return_exceptions=True)
        log.debug("All tasks cancelled")
