"""Typed settings sections of the YAML configuration"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from frameview.utils.frame_url import DEFAULT_BASE_URL

DEFAULT_TOTAL_FRAMES = 24
DEFAULT_DRAG_SENSITIVITY = 0.5
DEFAULT_MAX_CONCURRENT_LOADS = 8


@dataclass
class ViewerSettings:
    """Defaults applied to every viewer session"""
    base_url: str = DEFAULT_BASE_URL
    total_frames: int = DEFAULT_TOTAL_FRAMES
    drag_sensitivity: float = DEFAULT_DRAG_SENSITIVITY
    max_concurrent_loads: int = DEFAULT_MAX_CONCURRENT_LOADS   # 0 = unbounded
    request_timeout: float = 10.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewerSettings":
        return cls(
            base_url=str(data.get("base_url", DEFAULT_BASE_URL)),
            total_frames=int(data.get("total_frames", DEFAULT_TOTAL_FRAMES)),
            drag_sensitivity=float(data.get("drag_sensitivity", DEFAULT_DRAG_SENSITIVITY)),
            max_concurrent_loads=int(data.get("max_concurrent_loads", DEFAULT_MAX_CONCURRENT_LOADS)),
            request_timeout=float(data.get("request_timeout", 10.0)),
        )


@dataclass
class APISettings:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "APISettings":
        defaults = cls()
        return cls(
            host=str(data.get("host", defaults.host)),
            port=int(data.get("port", defaults.port)),
            cors_origins=list(data.get("cors_origins", defaults.cors_origins)),
        )


@dataclass
class TerminalSettings:
    """Local terminal viewer driven by the stdin keyboard adapter"""
    enabled: bool = False
    product_id: str = ""
    color_id: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TerminalSettings":
        return cls(
            enabled=bool(data.get("enabled", False)),
            product_id=str(data.get("product_id", "")),
            color_id=str(data.get("color_id", "")),
        )
