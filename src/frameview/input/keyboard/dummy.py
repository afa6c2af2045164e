"""
Dummy keyboard adapter for terminals without termios (e.g., Windows) or
when stdin is not interactive.
"""

import asyncio
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from frameview.services.event_bus import EventBus


class DummyKeyboardAdapter:
    """Keyboard adapter that never publishes anything."""

    def __init__(self, event_bus: "EventBus", viewer_id: Optional[str] = None):
        self.event_bus = event_bus
        self.viewer_id = viewer_id

    async def run(self) -> None:
        while True:
            await asyncio.sleep(1.0)
