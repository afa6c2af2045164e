"""
Viewer schemas - Pydantic models for viewer session requests/responses
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from frameview.services.render_surface import RenderSnapshot


# ============================================================================
# Requests
# ============================================================================

class CreateViewerRequest(BaseModel):
    """Request to open a viewer session for a product"""
    product_id: str = Field(min_length=1, description="Catalog product id")
    color_id: Optional[str] = Field(None, description="Initial color (default: first color)")


class SelectColorRequest(BaseModel):
    color_id: str = Field(min_length=1)


class KeyPressRequest(BaseModel):
    """Keyboard navigation. ArrowLeft / ArrowRight move; other keys are ignored."""
    key: str = Field(min_length=1, description="Key name, e.g. 'ArrowLeft'")


class DragRequest(BaseModel):
    """Pointer drag sample on the image surface"""
    phase: Literal["start", "move", "end"]
    x: float = Field(0.0, description="Pointer x coordinate (px)")


class SliderRequest(BaseModel):
    """
    Slider track interaction.

    Position is given either as a normalized ratio or as a pointer x coordinate
    plus the track's left edge and width (converted and clamped to [0, 1]).
    """
    action: Literal["click", "press", "move", "release"]
    ratio: Optional[float] = Field(None, description="Normalized track position")
    x: Optional[float] = None
    track_left: float = 0.0
    track_width: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def validate_position(self):
        if self.action in ("click", "move") and self.ratio is None:
            if self.x is None or self.track_width is None:
                raise ValueError("ratio or x + track_width is required for click/move")
        return self


# ============================================================================
# Responses
# ============================================================================

class FrameLayerResponse(BaseModel):
    frame: int
    url: str
    alt: str
    opacity: float
    z_index: int
    animate: bool


class LoadingOverlayResponse(BaseModel):
    visible: bool
    percent: int = Field(ge=0, le=100)


class SliderResponse(BaseModel):
    position_ratio: float
    value_now: int
    value_max: int
    value_text: str


class ColorSwatchResponse(BaseModel):
    id: str
    name: str
    hex: str
    selected: bool


class ViewerSnapshotResponse(BaseModel):
    """Complete render model of a viewer"""
    viewer_id: str
    product_id: str
    color_id: str
    phase: Literal["INIT", "PROBING", "READY", "EMPTY", "CLOSED"]
    background_color: str
    current_frame: int
    available_frames: List[int]
    layers: List[FrameLayerResponse]
    loading: LoadingOverlayResponse
    unavailable_message: Optional[str] = None
    slider: Optional[SliderResponse] = None
    show_instructions: bool
    colors: List[ColorSwatchResponse]

    @classmethod
    def from_snapshot(cls, snapshot: RenderSnapshot) -> "ViewerSnapshotResponse":
        return cls.model_validate(snapshot.to_dict())


class ViewerListResponse(BaseModel):
    viewers: List[ViewerSnapshotResponse]
    count: int
