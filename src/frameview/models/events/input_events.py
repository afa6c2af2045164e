"""Input events (keyboard, pointer drag, slider)"""

from dataclasses import dataclass
from typing import List, Optional

from frameview.models.enums import DragPhase, SliderAction
from frameview.models.events.base import Event
from frameview.models.events.types import EventType
from frameview.models.events.sources import EventSource, KeyboardSource


@dataclass(init=False)
class KeyboardKeyPressEvent(Event):
    """Key press addressed to a viewer"""
    viewer_id: Optional[str]
    key: str
    modifiers: List[str]
    keyboard: KeyboardSource

    def __init__(
        self,
        key: str,
        modifiers: Optional[List[str]] = None,
        *,
        viewer_id: Optional[str] = None,
        keyboard: KeyboardSource = KeyboardSource.STDIN,
    ):
        """
        Args:
            key: Key name ("ArrowLeft", "LEFT", "A", ...)
            modifiers: Active modifiers (["CTRL"], ["SHIFT"])
            viewer_id: Target viewer (None = every viewer listening)
            keyboard: Which adapter produced the key
        """
        super().__init__(
            type=EventType.KEYBOARD_KEYPRESS,
            source=EventSource.INPUT,
        )
        self.viewer_id = viewer_id
        self.key = key
        self.modifiers = modifiers or []
        self.keyboard = keyboard


@dataclass(init=False)
class PointerDragEvent(Event):
    """Pointer drag on the image surface"""
    viewer_id: Optional[str]
    phase: DragPhase
    x: float

    def __init__(self, phase: DragPhase, x: float = 0.0, *, viewer_id: Optional[str] = None):
        super().__init__(
            type=EventType.POINTER_DRAG,
            source=EventSource.INPUT,
        )
        self.viewer_id = viewer_id
        self.phase = phase
        self.x = x


@dataclass(init=False)
class SliderInputEvent(Event):
    """Slider track interaction; ratio is the normalized track position"""
    viewer_id: Optional[str]
    action: SliderAction
    ratio: float

    def __init__(self, action: SliderAction, ratio: float = 0.0, *, viewer_id: Optional[str] = None):
        super().__init__(
            type=EventType.SLIDER_INPUT,
            source=EventSource.INPUT,
        )
        self.viewer_id = viewer_id
        self.action = action
        self.ratio = ratio
