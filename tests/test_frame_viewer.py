import asyncio

import pytest

from conftest import BASE_URL, FakeFrameLoader, drain
from frameview.lifecycle.task_registry import TaskRegistry
from frameview.models.color_option import ColorOption
from frameview.models.enums import ViewerPhase
from frameview.models.events import EventType
from frameview.services.event_bus import EventBus
from frameview.services.frame_viewer import FrameViewer


def make_viewer(colors, loader, event_bus=None, total_frames=10, **kwargs):
    return FrameViewer(
        "tank-300",
        colors,
        loader=loader,
        event_bus=event_bus,
        total_frames=total_frames,
        base_url=BASE_URL,
        **kwargs,
    )


class TestLifecycle:
    def test_requires_colors(self):
        with pytest.raises(ValueError):
            FrameViewer("tank-300", [], loader=FakeFrameLoader())

    def test_initial_state(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader())
        assert viewer.phase == ViewerPhase.INIT
        assert viewer.selected_color_id == "orange"
        assert viewer.current_frame == 0
        assert viewer.available_frames == []
        assert viewer.is_loading

    @pytest.mark.asyncio
    async def test_open_probes_first_color(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [0, 1, 2]}))

        await viewer.open()
        assert viewer.phase == ViewerPhase.PROBING

        await viewer.wait_until_loaded()
        await drain()
        assert viewer.phase == ViewerPhase.READY
        assert viewer.available_frames == [0, 1, 2]
        assert not viewer.is_loading
        assert viewer.all_frames_preloaded()

    @pytest.mark.asyncio
    async def test_empty_when_no_frame_exists(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({}))
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        assert viewer.phase == ViewerPhase.EMPTY
        assert viewer.available_frames == []
        assert await viewer.step(1) is False
        assert await viewer.show_position(0) is False

    @pytest.mark.asyncio
    async def test_close_cancels_in_flight_loads(self, colors):
        gate = asyncio.Event()
        bus = EventBus()
        closed = []
        bus.subscribe(EventType.VIEWER_CLOSED, lambda e: closed.append(e.viewer_id))

        viewer = make_viewer(colors, FakeFrameLoader({"orange": [0]}, gate=gate), event_bus=bus)
        await viewer.open()
        await drain()
        assert TaskRegistry.instance().active(owner=viewer.id)

        await viewer.close()
        await drain()

        assert viewer.closed
        assert TaskRegistry.instance().active(owner=viewer.id) == []
        assert closed == [viewer.id]

        with pytest.raises(RuntimeError):
            await viewer.select_color("black")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, colors):
        bus = EventBus()
        closed = []
        bus.subscribe(EventType.VIEWER_CLOSED, lambda e: closed.append(e))
        viewer = make_viewer(colors, FakeFrameLoader(), event_bus=bus)

        await viewer.close()
        await viewer.close()
        assert len(closed) == 1

    @pytest.mark.asyncio
    async def test_close_releases_waiters(self, colors):
        gate = asyncio.Event()
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [0]}, gate=gate))
        probe_pass = await viewer.open()
        await drain()

        waiter = asyncio.create_task(viewer.wait_until_loaded())
        await drain()
        assert not waiter.done()

        await viewer.close()
        await asyncio.wait_for(waiter, 0.5)

        assert probe_pass.cancelled
        assert not probe_pass.complete
        assert viewer.phase == ViewerPhase.CLOSED

    @pytest.mark.asyncio
    async def test_close_before_probing_started(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [0]}))
        await viewer.open()
        await viewer.close()

        await asyncio.wait_for(viewer.wait_until_loaded(), 0.5)
        assert viewer.probe_pass.cancelled


class TestCurrentFrame:
    @pytest.mark.asyncio
    async def test_snaps_to_first_available_frame(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [2, 5, 9]}))
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        assert viewer.available_frames == [2, 5, 9]
        assert viewer.current_frame == 2

    @pytest.mark.asyncio
    async def test_stays_member_of_available_while_probing(self, colors):
        gate = asyncio.Event()
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [3, 6]}, gate=gate))
        await viewer.open()

        gate.set()
        while not viewer.probe_pass.complete:
            await asyncio.sleep(0)
            if viewer.available_frames:
                assert viewer.current_frame in viewer.available_frames
        await drain()
        assert viewer.current_frame in (3, 6)

    @pytest.mark.asyncio
    async def test_wraparound(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [2, 5, 9]}))
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        assert await viewer.step(-1)
        assert viewer.current_frame == 9
        assert await viewer.step(1)
        assert viewer.current_frame == 2
        assert await viewer.step(4)
        assert viewer.current_frame == 5

    @pytest.mark.asyncio
    async def test_show_position_clamps(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [2, 5, 9]}))
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        await viewer.show_position(99)
        assert viewer.current_frame == 9
        await viewer.show_position(-3)
        assert viewer.current_frame == 2

    @pytest.mark.asyncio
    async def test_show_frame_ignores_unavailable(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [2, 5]}))
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        assert await viewer.show_frame(3) is False
        assert viewer.current_frame == 2
        assert await viewer.show_frame(5) is True
        assert viewer.current_frame == 5

    @pytest.mark.asyncio
    async def test_closest_available_frame(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader({"orange": [2, 6, 9]}))
        assert viewer.closest_available_frame(4) is None

        await viewer.open()
        await viewer.wait_until_loaded()

        assert viewer.closest_available_frame(6) == 6
        assert viewer.closest_available_frame(4) == 2
        assert viewer.closest_available_frame(8) == 9
        assert viewer.closest_available_frame(0) == 2


class TestColorSelection:
    @pytest.mark.asyncio
    async def test_unknown_color(self, colors):
        viewer = make_viewer(colors, FakeFrameLoader())
        with pytest.raises(ValueError):
            await viewer.select_color("purple")

    @pytest.mark.asyncio
    async def test_switch_keeps_other_color_cached(self, colors):
        loader = FakeFrameLoader({"orange": [0, 1], "black": [4]})
        viewer = make_viewer(colors, loader)

        await viewer.open()
        await viewer.wait_until_loaded()
        await viewer.select_color("black")
        await viewer.wait_until_loaded()
        await drain()

        assert viewer.available_frames == [4]
        assert viewer.current_frame == 4
        assert viewer.cache.loaded_frames("orange") == [0, 1]

        loader.calls.clear()
        orange_pass = await viewer.select_color("orange")
        # Every orange index was resolved by the first pass
        assert orange_pass.complete
        assert viewer.available_frames == [0, 1]
        assert viewer.current_frame == 0
        assert loader.calls == []

    @pytest.mark.asyncio
    async def test_explicit_color_cached_completes_synchronously(self, explicit_color, colors):
        events = []
        bus = EventBus()
        bus.subscribe(EventType.VIEWER_PROBE_COMPLETED, lambda e: events.append(e))

        viewer = make_viewer([explicit_color, *colors], FakeFrameLoader({"grey": [0, 2, 4]}), event_bus=bus)
        await viewer.open()
        await viewer.wait_until_loaded()
        await viewer.select_color("orange")
        events.clear()

        probe_pass = await viewer.select_color("grey")

        assert probe_pass.complete
        assert viewer.phase == ViewerPhase.READY
        assert viewer.available_frames == [0, 2, 4]
        assert len(events) == 1
        assert events[0].phase == ViewerPhase.READY

    @pytest.mark.asyncio
    async def test_stale_pass_only_fills_cache(self, colors):
        gate = asyncio.Event()
        loader = FakeFrameLoader({"orange": [1, 2], "black": [7]}, gate=gate)
        viewer = make_viewer(colors, loader)

        orange_pass = await viewer.open()
        black_pass = await viewer.select_color("black")

        gate.set()
        await orange_pass.wait()
        await black_pass.wait()
        await drain()

        assert viewer.selected_color_id == "black"
        assert viewer.available_frames == [7]
        assert viewer.current_frame == 7
        assert viewer.cache.loaded_frames("orange") == [1, 2]

    @pytest.mark.asyncio
    async def test_missing_frame_not_requested_again_after_switching_back(self):
        colors = [ColorOption(id="a", name="A", hex="#111111"), ColorOption(id="b", name="B", hex="#222222")]
        loader = FakeFrameLoader({"a": [0, 1, 2], "b": [0]})
        viewer = make_viewer(colors, loader, total_frames=4)

        await viewer.open()
        await viewer.wait_until_loaded()
        await viewer.select_color("b")
        await viewer.wait_until_loaded()
        a_pass = await viewer.select_color("a")
        await viewer.wait_until_loaded()
        await drain()

        assert loader.calls_for("a").count(3) == 1
        assert a_pass.complete
        assert a_pass.failed == {3}
        assert viewer.available_frames == [0, 1, 2]
        assert viewer.phase == ViewerPhase.READY


class TestEvents:
    @pytest.mark.asyncio
    async def test_frame_changed_published_on_real_changes_only(self, colors):
        bus = EventBus()
        changes = []
        bus.subscribe(EventType.VIEWER_FRAME_CHANGED, lambda e: changes.append((e.previous_frame, e.frame)))

        viewer = make_viewer(colors, FakeFrameLoader({"orange": [0, 1, 2]}), event_bus=bus)
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()
        assert changes == []

        await viewer.step(1)
        await viewer.show_frame(1)
        assert changes == [(0, 1)]

    @pytest.mark.asyncio
    async def test_color_and_completion_events(self, colors):
        bus = EventBus()
        seen = []
        for event_type in (EventType.VIEWER_COLOR_SELECTED, EventType.VIEWER_PROBE_COMPLETED):
            bus.subscribe(event_type, lambda e: seen.append(e))

        viewer = make_viewer(colors, FakeFrameLoader({"orange": [3]}), event_bus=bus)
        await viewer.open()
        await viewer.wait_until_loaded()
        await drain()

        assert seen[0].type == EventType.VIEWER_COLOR_SELECTED
        assert seen[0].color_id == "orange"
        assert seen[0].previous_color_id is None
        assert seen[-1].type == EventType.VIEWER_PROBE_COMPLETED
        assert seen[-1].available == [3]
