"""
Models package - Data models for the frame viewer
"""

from .enums import ViewerPhase, ProbeMode, DragPhase, SliderAction, LogLevel, LogCategory
from .color_option import ColorOption
from .frame_cache import FrameCache
from .navigation_state import NavigationState
from .probe import ProbePass, FrameLoadResult
from .product import ProductConfig

__all__ = [
    'ViewerPhase',
    'ProbeMode',
    'DragPhase',
    'SliderAction',
    'LogLevel',
    'LogCategory',
    'ColorOption',
    'FrameCache',
    'NavigationState',
    'ProbePass',
    'FrameLoadResult',
    'ProductConfig',
]
