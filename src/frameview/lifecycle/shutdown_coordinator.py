"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import Dict, List, Optional, Set

from frameview.lifecycle.shutdown_protocol import IShutdownHandler
from frameview.lifecycle.task_registry import TaskRegistry
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)

# A failure in one of these task categories shuts the application down
CRITICAL_CATEGORIES: Set[str] = {"API", "INPUT"}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(ViewerShutdownHandler(viewer_service))
        coordinator.register(APIServerShutdownHandler(api_wrapper))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        self._handlers: List[IShutdownHandler] = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    def register(self, handler: IShutdownHandler) -> None:
        """
        Register a shutdown handler.

        Handler must have a shutdown_priority property and an async shutdown().
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT / SIGTERM handlers that trigger shutdown."""

        def signal_handler(sig: signal.Signals) -> None:
            self._shutdown_trigger["reason"] = sig.name
            log.info(f"Signal {sig.name} received, triggering shutdown")
            self._shutdown_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        self._shutdown_trigger["reason"] = reason
        self._shutdown_event.set()

    def _critical_failure(self) -> Optional[str]:
        for record in TaskRegistry.instance().failed():
            if record.info.category.name in CRITICAL_CATEGORIES:
                return record.info.description
        return None

    async def wait_for_shutdown(self, poll_interval: float = 0.2) -> None:
        """
        Wait for a shutdown signal or a critical task failure.
        """
        while not self._shutdown_event.is_set():
            failed = self._critical_failure()
            if failed:
                log.error(f"Critical task failed: {failed}")
                self._shutdown_trigger["reason"] = f"Task failure: {failed}"
                return

            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue

    async def shutdown_all(self) -> None:
        """
        Execute all handlers in descending priority order.

        Each handler has its own timeout and the whole sequence has a global
        timeout. A failing handler does not stop the ones after it.
        """
        log.info("Initiating graceful shutdown sequence...", reason=self._shutdown_trigger["reason"])

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                log.error(f"Error shutting down {handler_name}: {e}")

        log.info("Shutdown sequence complete")
