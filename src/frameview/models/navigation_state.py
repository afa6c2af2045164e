"""
Navigation state - gesture bookkeeping owned by the navigation controller.
"""

from dataclasses import dataclass


@dataclass
class NavigationState:
    """
    Pointer drag / slider drag state.

    Only mutated through the transition methods below.
    """
    is_dragging: bool = False
    last_x: float = 0.0
    slider_dragging: bool = False

    def begin_drag(self, x: float) -> None:
        self.is_dragging = True
        self.last_x = x

    def advance_drag(self, x: float) -> None:
        """Resample the drag origin after a frame step was applied."""
        self.last_x = x

    def end_drag(self) -> None:
        self.is_dragging = False

    def begin_slider(self) -> None:
        self.slider_dragging = True

    def end_slider(self) -> None:
        self.slider_dragging = False

    def reset(self) -> None:
        self.is_dragging = False
        self.last_x = 0.0
        self.slider_dragging = False
