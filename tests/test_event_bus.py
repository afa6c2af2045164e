"""
Event bus: publishing, subscription, middleware, filtering and priorities.
"""

import pytest

from frameview.models.events import (
    EventType,
    KeyboardKeyPressEvent,
    KeyboardSource,
    ViewerFrameChangedEvent,
)
from frameview.services.event_bus import EventBus
from frameview.services.middleware import log_middleware


class TestEventBus:
    @pytest.mark.asyncio
    async def test_basic_pub_sub(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, handler)
        await bus.publish(KeyboardKeyPressEvent("LEFT"))

        assert len(received) == 1
        assert received[0].key == "LEFT"

    @pytest.mark.asyncio
    async def test_filtering(self):
        bus = EventBus()
        api_events = []
        stdin_events = []

        async def api_handler(event):
            api_events.append(event)

        async def stdin_handler(event):
            stdin_events.append(event)

        bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            api_handler,
            filter_fn=lambda e: e.keyboard == KeyboardSource.API
        )
        bus.subscribe(
            EventType.KEYBOARD_KEYPRESS,
            stdin_handler,
            filter_fn=lambda e: e.keyboard == KeyboardSource.STDIN
        )

        await bus.publish(KeyboardKeyPressEvent("LEFT", keyboard=KeyboardSource.API))
        await bus.publish(KeyboardKeyPressEvent("RIGHT"))
        await bus.publish(KeyboardKeyPressEvent("ArrowLeft", keyboard=KeyboardSource.API))

        assert len(api_events) == 2
        assert len(stdin_events) == 1

    @pytest.mark.asyncio
    async def test_middleware_blocking(self):
        bus = EventBus()
        received = []

        def block_api(event):
            if event.keyboard == KeyboardSource.API:
                return None
            return event

        bus.add_middleware(block_api)
        bus.add_middleware(log_middleware)

        async def handler(event):
            received.append(event)

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, handler)

        await bus.publish(KeyboardKeyPressEvent("LEFT"))
        await bus.publish(KeyboardKeyPressEvent("LEFT", keyboard=KeyboardSource.API))

        assert len(received) == 1
        assert received[0].keyboard == KeyboardSource.STDIN

    @pytest.mark.asyncio
    async def test_priority(self):
        bus = EventBus()
        execution_order = []

        async def low(event):
            execution_order.append("low")

        async def high(event):
            execution_order.append("high")

        async def medium(event):
            execution_order.append("medium")

        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, low, priority=1)
        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, high, priority=20)
        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, medium, priority=10)

        await bus.publish(ViewerFrameChangedEvent("v1", 1, 0))

        assert execution_order == ["high", "medium", "low"]

    @pytest.mark.asyncio
    async def test_fault_tolerance(self):
        bus = EventBus()
        received = []

        async def broken(event):
            raise RuntimeError("handler crashed")

        def sync_handler(event):
            received.append(event.frame)

        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, broken, priority=10)
        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, sync_handler)

        await bus.publish(ViewerFrameChangedEvent("v1", 3, 0))

        assert received == [3]

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(EventType.KEYBOARD_KEYPRESS, handler)
        assert bus.handler_count(EventType.KEYBOARD_KEYPRESS) == 1

        assert bus.unsubscribe(EventType.KEYBOARD_KEYPRESS, handler) is True
        assert bus.unsubscribe(EventType.KEYBOARD_KEYPRESS, handler) is False

        await bus.publish(KeyboardKeyPressEvent("LEFT"))
        assert received == []

    @pytest.mark.asyncio
    async def test_history(self):
        bus = EventBus()
        for i in range(105):
            await bus.publish(ViewerFrameChangedEvent("v1", i, i - 1))

        history = bus.get_event_history(limit=3)
        assert [e.frame for e in history] == [102, 103, 104]

        bus.clear_history()
        assert bus.get_event_history() == []
