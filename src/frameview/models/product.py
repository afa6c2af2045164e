"""Product catalog model"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from frameview.models.color_option import ColorOption


@dataclass(frozen=True)
class ProductConfig:
    """
    A vehicle model with a 360° view.

    total_frames overrides the viewer default when set.
    """
    id: str
    name: str
    colors: Tuple[ColorOption, ...]
    total_frames: Optional[int] = None

    def get_color(self, color_id: str) -> Optional[ColorOption]:
        for color in self.colors:
            if color.id == color_id:
                return color
        return None

    @property
    def color_ids(self) -> List[str]:
        return [c.id for c in self.colors]

    @classmethod
    def from_dict(cls, product_id: str, data: Dict[str, Any]) -> "ProductConfig":
        colors = tuple(ColorOption.from_dict(c) for c in data.get("colors", []))
        if not colors:
            raise ValueError(f"Product '{product_id}' has no colors")
        total = data.get("total_frames")
        return cls(
            id=product_id,
            name=str(data.get("name", product_id)),
            colors=colors,
            total_frames=int(total) if total is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "total_frames": self.total_frames,
            "colors": [c.to_dict() for c in self.colors],
        }
