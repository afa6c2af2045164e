"""
Render Surface - what a front-end must draw for a viewer.

One layer per available frame (not per theoretical frame), all stacked on top
of each other. Exactly one layer is opaque and on top: the current frame.
Switching frames only toggles opacity / z-order, so no frame is ever fetched
or decoded twice.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from frameview.services.frame_viewer import FrameViewer

UNAVAILABLE_MESSAGE = (
    "Sorry, the 360° view for this color is not available yet. "
    "Please choose another color."
)
INSTRUCTIONS = "Drag to rotate the view"

VISIBLE_Z = 10
HIDDEN_Z = 0


@dataclass
class FrameLayer:
    frame: int
    url: str
    alt: str
    opacity: float
    z_index: int
    animate: bool


@dataclass
class LoadingOverlay:
    visible: bool
    percent: int


@dataclass
class SliderModel:
    position_ratio: float
    value_now: int
    value_max: int
    value_text: str


@dataclass
class ColorSwatch:
    id: str
    name: str
    hex: str
    selected: bool


@dataclass
class RenderSnapshot:
    viewer_id: str
    product_id: str
    color_id: str
    phase: str
    background_color: str
    current_frame: int
    available_frames: List[int]
    layers: List[FrameLayer]
    loading: LoadingOverlay
    unavailable_message: Optional[str]
    slider: Optional[SliderModel]
    show_instructions: bool
    colors: List[ColorSwatch]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def loading_percent(loaded_count: int, available_count: int, total_frames: int) -> int:
    """loaded / max(available, total) as a rounded percentage (0..100)."""
    denominator = max(available_count, total_frames)
    if denominator <= 0:
        return 0
    return min(100, math.floor(loaded_count / denominator * 100 + 0.5))


def position_ratio(position: Optional[int], frame_count: int) -> float:
    """Slider handle position for a frame position (0.0 when unknown)."""
    if position is None or frame_count <= 1:
        return 0.0
    return position / (frame_count - 1)


def build_layers(viewer: "FrameViewer") -> List[FrameLayer]:
    color_id = viewer.selected_color_id
    loading = viewer.is_loading
    layers = []
    for frame in viewer.available_frames:
        visible = frame == viewer.current_frame
        preloaded = viewer.cache.is_loaded(color_id, frame)
        layers.append(FrameLayer(
            frame=frame,
            url=viewer.frame_url(frame),
            alt=f"{viewer.product_id} {color_id} view {frame}",
            opacity=1.0 if visible else 0.0,
            z_index=VISIBLE_Z if visible else HIDDEN_Z,
            animate=not preloaded and loading,
        ))
    return layers


def build_render_snapshot(viewer: "FrameViewer") -> RenderSnapshot:
    """Build the complete render model of a viewer's current state."""
    frames = viewer.available_frames
    show_loading = viewer.is_loading and not viewer.all_frames_preloaded()

    slider = None
    if frames:
        position = viewer.current_position()
        slider = SliderModel(
            position_ratio=position_ratio(position, len(frames)),
            value_now=position if position is not None else -1,
            value_max=len(frames) - 1,
            value_text=f"Frame {viewer.current_frame} of {len(frames)} available frames",
        )

    return RenderSnapshot(
        viewer_id=viewer.id,
        product_id=viewer.product_id,
        color_id=viewer.selected_color_id,
        phase=viewer.phase.name,
        background_color=viewer.selected_color.display_background,
        current_frame=viewer.current_frame,
        available_frames=frames,
        layers=build_layers(viewer),
        loading=LoadingOverlay(
            visible=show_loading,
            percent=loading_percent(viewer.loaded_count, len(frames), viewer.total_frames),
        ),
        unavailable_message=UNAVAILABLE_MESSAGE if not viewer.is_loading and not frames else None,
        slider=slider,
        show_instructions=bool(frames),
        colors=[
            ColorSwatch(id=c.id, name=c.name, hex=c.hex, selected=c.id == viewer.selected_color_id)
            for c in viewer.colors
        ],
    )
