"""
Playback / navigation controller.

Maps three independent input channels onto "move within available frames,
with wraparound":

- Pointer drag on the image surface: horizontal displacement since the last
  sample x sensitivity, floored to a whole step count
- Slider track (click / press+move+release / touch): normalized position
  mapped to floor(ratio x (N-1))
- Keyboard: ArrowLeft / ArrowRight step one frame back / forward

Pointer drag is suppressed while a slider drag is active.

Integrates with EventBus: subscribes to KEYBOARD_KEYPRESS, POINTER_DRAG and
SLIDER_INPUT events addressed to its viewer. The methods can also be called
directly (API routes, tests).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from frameview.models.config import DEFAULT_DRAG_SENSITIVITY
from frameview.models.enums import DragPhase, SliderAction
from frameview.models.events import (
    EventType,
    KeyboardKeyPressEvent,
    PointerDragEvent,
    SliderInputEvent,
)
from frameview.models.navigation_state import NavigationState
from frameview.utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from frameview.services.event_bus import EventBus
    from frameview.services.frame_viewer import FrameViewer

log = get_category_logger(LogCategory.NAVIGATION)

# Browser key names and terminal adapter key names
PREVIOUS_KEYS = {"ArrowLeft", "LEFT"}
NEXT_KEYS = {"ArrowRight", "RIGHT"}


def clamp_ratio(ratio: float) -> float:
    return max(0.0, min(1.0, ratio))


def ratio_from_track(x: float, track_left: float, track_width: float) -> float:
    """Normalize a pointer x coordinate to [0, 1] within a slider track."""
    if track_width <= 0:
        return 0.0
    return clamp_ratio((x - track_left) / track_width)


def slider_position(ratio: float, frame_count: int) -> int:
    """Position within available frames for a slider ratio: floor(r x (N-1))."""
    if frame_count <= 0:
        return 0
    position = math.floor(clamp_ratio(ratio) * (frame_count - 1))
    return max(0, min(frame_count - 1, position))


def drag_steps(delta_x: float, sensitivity: float) -> int:
    return math.floor(delta_x * sensitivity)


class NavigationController:
    """
    Navigation controller bound to one FrameViewer.

    Usage:
        controller = NavigationController(viewer, event_bus, sensitivity=0.5)

        await controller.drag_start(100)
        await controller.drag_move(110)   # 5 steps -> retreats 5 frames
        await controller.drag_end()

        await controller.slider_click(0.5)
        await controller.key_press("ArrowRight")

        controller.detach()               # on viewer close
    """

    def __init__(
        self,
        viewer: "FrameViewer",
        event_bus: Optional["EventBus"] = None,
        sensitivity: float = DEFAULT_DRAG_SENSITIVITY,
    ) -> None:
        self.viewer = viewer
        self.event_bus = event_bus
        self.sensitivity = sensitivity
        self.state = NavigationState()

        if self.event_bus is not None:
            self._subscribe()

        log.debug("NavigationController initialized", viewer=viewer.id, sensitivity=sensitivity)

    # ============================================================
    # Event Handling
    # ============================================================

    def _accepts(self, event) -> bool:
        return event.viewer_id is None or event.viewer_id == self.viewer.id

    def _subscribe(self) -> None:
        self.event_bus.subscribe(EventType.KEYBOARD_KEYPRESS, self._handle_keyboard_event, filter_fn=self._accepts)
        self.event_bus.subscribe(EventType.POINTER_DRAG, self._handle_drag_event, filter_fn=self._accepts)
        self.event_bus.subscribe(EventType.SLIDER_INPUT, self._handle_slider_event, filter_fn=self._accepts)

    def detach(self) -> None:
        """Stop listening to the event bus."""
        if self.event_bus is None:
            return
        self.event_bus.unsubscribe(EventType.KEYBOARD_KEYPRESS, self._handle_keyboard_event)
        self.event_bus.unsubscribe(EventType.POINTER_DRAG, self._handle_drag_event)
        self.event_bus.unsubscribe(EventType.SLIDER_INPUT, self._handle_slider_event)
        self.state.reset()

    async def _handle_keyboard_event(self, event: KeyboardKeyPressEvent) -> None:
        await self.key_press(event.key)

    async def _handle_drag_event(self, event: PointerDragEvent) -> None:
        if event.phase == DragPhase.START:
            await self.drag_start(event.x)
        elif event.phase == DragPhase.MOVE:
            await self.drag_move(event.x)
        else:
            await self.drag_end()

    async def _handle_slider_event(self, event: SliderInputEvent) -> None:
        if event.action == SliderAction.CLICK:
            await self.slider_click(event.ratio)
        elif event.action == SliderAction.PRESS:
            await self.slider_press()
        elif event.action == SliderAction.MOVE:
            await self.slider_move(event.ratio)
        else:
            await self.slider_release()

    # ============================================================
    # Pointer drag
    # ============================================================

    async def drag_start(self, x: float) -> bool:
        if self.state.slider_dragging or not self.viewer.available_frames:
            return False
        self.state.begin_drag(x)
        return True

    async def drag_move(self, x: float) -> bool:
        """
        Apply a drag sample.

        Returns:
            True if the frame moved
        """
        if self.state.slider_dragging or not self.state.is_dragging:
            return False
        if not self.viewer.available_frames:
            return False

        steps = drag_steps(x - self.state.last_x, self.sensitivity)
        if steps == 0:
            return False

        # Dragging right rotates backwards through the sequence
        moved = await self.viewer.step(-steps)
        if moved:
            self.state.advance_drag(x)
        return moved

    async def drag_end(self) -> None:
        self.state.end_drag()

    # ============================================================
    # Slider
    # ============================================================

    async def slider_click(self, ratio: float) -> bool:
        frames = self.viewer.available_frames
        if not frames:
            return False
        return await self.viewer.show_position(slider_position(ratio, len(frames)))

    async def slider_press(self) -> None:
        self.state.begin_slider()

    async def slider_move(self, ratio: float) -> bool:
        if not self.state.slider_dragging:
            return False
        return await self.slider_click(ratio)

    async def slider_release(self) -> None:
        self.state.end_slider()

    # ============================================================
    # Keyboard
    # ============================================================

    async def key_press(self, key: str) -> bool:
        """
        Handle a key press. Other keys are ignored.

        Returns:
            True if the frame moved
        """
        if key in PREVIOUS_KEYS:
            return await self.viewer.step(-1)
        if key in NEXT_KEYS:
            return await self.viewer.step(1)
        return False
