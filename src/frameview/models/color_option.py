"""Color option model"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

DEFAULT_BACKGROUND = "#FFFFFF"


@dataclass(frozen=True)
class ColorOption:
    """
    One selectable color of a product.

    Attributes:
        id: Color identifier, used verbatim in asset URLs ("orange", "black")
        name: Display name
        hex: Swatch color ("#FF6B00")
        background_color: Optional viewer background (falls back to hex)
        explicit_frames: Optional known-good frame indices; skips auto-detection
    """
    id: str
    name: str
    hex: str
    background_color: Optional[str] = None
    explicit_frames: Optional[Tuple[int, ...]] = None

    @property
    def has_explicit_frames(self) -> bool:
        return bool(self.explicit_frames)

    @property
    def display_background(self) -> str:
        return self.background_color or self.hex or DEFAULT_BACKGROUND

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorOption":
        """Build from a config / request dict (accepts camelCase keys too)."""
        frames = data.get("explicit_frames", data.get("explicitFrames"))
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            hex=str(data.get("hex", "")),
            background_color=data.get("background_color", data.get("backgroundColor")),
            explicit_frames=tuple(int(f) for f in frames) if frames else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hex": self.hex,
            "background_color": self.background_color,
            "explicit_frames": list(self.explicit_frames) if self.explicit_frames else None,
        }
