"""
Frame Viewer - one interactive 360° view instance.

Owns the frame cache, the active probing pass and the current frame, and
publishes viewer events on the EventBus. Input channels (drag, slider,
keyboard) go through NavigationController, which calls step() and
show_position() here.

State machine per color selection:
    INIT -> PROBING -> READY (>= 1 frame) | EMPTY (0 frames)
"""

from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

from frameview.lifecycle.task_registry import TaskRegistry
from frameview.models.color_option import ColorOption
from frameview.models.config import DEFAULT_TOTAL_FRAMES
from frameview.models.enums import ViewerPhase
from frameview.models.events import (
    ViewerClosedEvent,
    ViewerColorSelectedEvent,
    ViewerFrameChangedEvent,
    ViewerFramesUpdatedEvent,
    ViewerProbeCompletedEvent,
)
from frameview.models.frame_cache import FrameCache
from frameview.models.probe import ProbePass
from frameview.services.event_bus import EventBus
from frameview.services.frame_loader import IFrameLoader
from frameview.services.frame_prober import FrameProber
from frameview.utils.frame_url import DEFAULT_BASE_URL, resolve_frame_url
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.VIEWER)


class FrameViewer:
    """
    Interactive frame viewer for one product.

    Invariants:
    - available_frames is ascending and duplicate-free
    - current_frame is a member of available_frames whenever it is non-empty
    - cache entries are never cleared; switching colors keeps other colors cached

    Example:
        viewer = FrameViewer("tank-300", colors, loader=HttpFrameLoader(), event_bus=bus)
        await viewer.open()             # probes the first color
        await viewer.wait_until_loaded()
        await viewer.step(1)            # next frame, wraps at the end
        await viewer.select_color("black")
    """

    def __init__(
        self,
        product_id: str,
        colors: Sequence[ColorOption],
        *,
        loader: IFrameLoader,
        event_bus: Optional[EventBus] = None,
        viewer_id: Optional[str] = None,
        total_frames: int = DEFAULT_TOTAL_FRAMES,
        base_url: str = DEFAULT_BASE_URL,
        max_concurrent_loads: int = 0,
    ):
        if not colors:
            raise ValueError("FrameViewer requires at least one color option")

        self.id = viewer_id or uuid.uuid4().hex
        self.product_id = product_id
        self.colors: List[ColorOption] = list(colors)
        self.total_frames = total_frames
        self.base_url = base_url
        self.event_bus = event_bus or EventBus()

        self.cache = FrameCache()
        self.prober = FrameProber(
            loader,
            self.cache,
            base_url=base_url,
            total_frames=total_frames,
            max_concurrent_loads=max_concurrent_loads,
            owner=self.id,
        )

        self.selected_color_id: str = self.colors[0].id
        self.current_frame: int = 0
        self._probe_pass: Optional[ProbePass] = None
        self._closed = False

        log.debug(
            "FrameViewer created",
            viewer=self.id,
            product=product_id,
            colors=len(self.colors),
            total_frames=total_frames
        )

    # ============================================================
    # State accessors
    # ============================================================

    def get_color(self, color_id: str) -> Optional[ColorOption]:
        for color in self.colors:
            if color.id == color_id:
                return color
        return None

    @property
    def selected_color(self) -> ColorOption:
        return self.get_color(self.selected_color_id) or self.colors[0]

    @property
    def probe_pass(self) -> Optional[ProbePass]:
        return self._probe_pass

    @property
    def available_frames(self) -> List[int]:
        if self._probe_pass is None:
            return []
        return list(self._probe_pass.available)

    @property
    def loaded_count(self) -> int:
        return self._probe_pass.loaded_count if self._probe_pass else 0

    @property
    def is_loading(self) -> bool:
        return self._probe_pass is None or not self._probe_pass.complete

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def phase(self) -> ViewerPhase:
        if self._closed:
            return ViewerPhase.CLOSED
        if self._probe_pass is None:
            return ViewerPhase.INIT
        if not self._probe_pass.complete:
            return ViewerPhase.PROBING
        return ViewerPhase.READY if self._probe_pass.available else ViewerPhase.EMPTY

    def all_frames_preloaded(self) -> bool:
        """Every available frame of the active color is cache-confirmed."""
        return self.cache.all_loaded(self.selected_color_id, self.available_frames)

    def current_position(self) -> Optional[int]:
        """Position of current_frame within available_frames (None if absent)."""
        try:
            return self.available_frames.index(self.current_frame)
        except ValueError:
            return None

    def frame_url(self, frame_index: int) -> str:
        return resolve_frame_url(self.base_url, self.product_id, self.selected_color_id, frame_index)

    def closest_available_frame(self, frame_index: int) -> Optional[int]:
        """Nearest available frame to an arbitrary index (ties go to the lower frame)."""
        frames = self.available_frames
        if not frames:
            return None
        if frame_index in frames:
            return frame_index
        return min(frames, key=lambda f: (abs(f - frame_index), f))

    # ============================================================
    # Lifecycle
    # ============================================================

    async def open(self) -> ProbePass:
        """Start probing the default (first) color."""
        return await self.select_color(self.selected_color_id)

    async def wait_until_loaded(self) -> None:
        if self._probe_pass is not None:
            await self._probe_pass.wait()

    async def close(self) -> None:
        """
        Tear down the viewer.

        Cancels every in-flight load this viewer started and releases anyone
        awaiting wait_until_loaded(). Color switches do not cancel anything;
        only close() does.
        """
        if self._closed:
            return
        self._closed = True

        cancelled = TaskRegistry.instance().cancel_owner(self.id)
        # A pass whose aggregator never got to run is not released by the cancellation
        if self._probe_pass is not None:
            self._probe_pass.cancel()
        log.info("FrameViewer closed", viewer=self.id, cancelled_loads=len(cancelled))

        await self.event_bus.publish(ViewerClosedEvent(self.id))

    # ============================================================
    # Color selection / probing
    # ============================================================

    async def select_color(self, color_id: str) -> ProbePass:
        """
        Select a color and (re)start probing for it.

        Cached frames of the color are reused. In-flight loads of the previous
        color keep running and keep filling that color's cache entry.
        """
        color = self.get_color(color_id)
        if color is None:
            raise ValueError(f"Unknown color '{color_id}' for product '{self.product_id}'")
        if self._closed:
            raise RuntimeError(f"Viewer {self.id} is closed")

        previous = self._probe_pass.color_id if self._probe_pass else None
        self.selected_color_id = color.id

        log.info("Color selected", viewer=self.id, color=color.id, previous=previous)

        self._probe_pass = self.prober.start(self.product_id, color, on_update=self._on_probe_update)

        await self.event_bus.publish(ViewerColorSelectedEvent(self.id, color.id, previous))
        await self._publish_frames_updated()
        await self._reconcile_current_frame()

        if self._probe_pass.complete:
            await self._publish_completion()

        return self._probe_pass

    async def _on_probe_update(self, probe_pass: ProbePass) -> None:
        # Results of a superseded pass only fill the cache
        if probe_pass is not self._probe_pass or self._closed:
            return

        await self._publish_frames_updated()
        await self._reconcile_current_frame()

        if probe_pass.complete:
            await self._publish_completion()

    async def _reconcile_current_frame(self) -> None:
        """Snap current_frame to the first available frame when it became invalid."""
        frames = self.available_frames
        if frames and self.current_frame not in frames:
            log.debug(
                "Current frame not available, snapping to first",
                viewer=self.id,
                frame=self.current_frame,
                first=frames[0]
            )
            await self._set_frame(frames[0])

    async def _publish_frames_updated(self) -> None:
        await self.event_bus.publish(
            ViewerFramesUpdatedEvent(
                self.id,
                self.selected_color_id,
                self.available_frames,
                self.loaded_count,
            )
        )

    async def _publish_completion(self) -> None:
        phase = self.phase
        if phase == ViewerPhase.EMPTY:
            log.warn("No frames available for color", viewer=self.id, color=self.selected_color_id)
        await self.event_bus.publish(
            ViewerProbeCompletedEvent(self.id, self.selected_color_id, phase, self.available_frames)
        )

    # ============================================================
    # Frame navigation
    # ============================================================

    async def _set_frame(self, frame_index: int) -> bool:
        if frame_index == self.current_frame:
            return False
        previous = self.current_frame
        self.current_frame = frame_index
        await self.event_bus.publish(ViewerFrameChangedEvent(self.id, frame_index, previous))
        return True

    async def show_frame(self, frame_index: int) -> bool:
        """Display a specific frame; ignored unless it is available."""
        if frame_index not in self.available_frames:
            return False
        await self._set_frame(frame_index)
        return True

    async def step(self, delta: int) -> bool:
        """
        Move delta positions within available_frames, wrapping at both ends.

        Returns:
            False when there is nothing to navigate (no frames, or the current
            frame is not part of the available set)
        """
        frames = self.available_frames
        if not frames:
            return False

        position = self.current_position()
        if position is None:
            return False

        new_position = (position + delta) % len(frames)
        await self._set_frame(frames[new_position])
        return True

    async def show_position(self, position: int) -> bool:
        """Display the frame at a position of available_frames (clamped)."""
        frames = self.available_frames
        if not frames:
            return False

        position = max(0, min(len(frames) - 1, position))
        await self._set_frame(frames[position])
        return True
