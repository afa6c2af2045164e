"""
Shutdown handler protocol for component-based graceful shutdown.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Protocol for components that need graceful shutdown.

    The ShutdownCoordinator calls shutdown() on each handler in priority
    order (higher priority shuts down earlier).
    """

    @property
    def shutdown_priority(self) -> int:
        ...

    async def shutdown(self) -> None:
        ...
