import pytest

pytest.importorskip("termios")

from frameview.input.keyboard.stdin import StdinKeyboardAdapter
from frameview.models.events import EventType, KeyboardSource
from frameview.services.event_bus import EventBus


class RecordingBus(EventBus):
    def __init__(self):
        super().__init__()
        self.published = []

    async def publish(self, event):
        self.published.append(event)


@pytest.fixture
def bus():
    return RecordingBus()


async def feed(adapter, text):
    adapter._buffer += text
    await adapter._process_buffer()


class TestStdinDecoding:
    @pytest.mark.asyncio
    async def test_arrow_keys(self, bus):
        adapter = StdinKeyboardAdapter(bus, viewer_id="v1")
        await feed(adapter, "\x1b[D\x1b[C")

        assert [e.key for e in bus.published] == ["LEFT", "RIGHT"]
        event = bus.published[0]
        assert event.type == EventType.KEYBOARD_KEYPRESS
        assert event.viewer_id == "v1"
        assert event.keyboard == KeyboardSource.STDIN

    @pytest.mark.asyncio
    async def test_partial_sequence_waits(self, bus):
        adapter = StdinKeyboardAdapter(bus)
        await feed(adapter, "\x1b")
        await feed(adapter, "[")
        assert bus.published == []

        await feed(adapter, "D")
        assert [e.key for e in bus.published] == ["LEFT"]

    @pytest.mark.asyncio
    async def test_plain_characters(self, bus):
        adapter = StdinKeyboardAdapter(bus)
        await feed(adapter, "aQ \n")

        assert [(e.key, e.modifiers) for e in bus.published] == [
            ("A", []),
            ("Q", ["SHIFT"]),
            ("SPACE", []),
            ("ENTER", []),
        ]

    @pytest.mark.asyncio
    async def test_ctrl_and_escape(self, bus):
        adapter = StdinKeyboardAdapter(bus)
        await feed(adapter, "\x03\x1bx")

        assert [(e.key, e.modifiers) for e in bus.published] == [
            ("C", ["CTRL"]),
            ("ESCAPE", []),
            ("X", []),
        ]
