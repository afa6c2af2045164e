"""
Utility functions for the frame viewer
"""

from .frame_url import (
    normalize_product_id,
    resolve_frame_url,
    DEFAULT_BASE_URL,
    DEFAULT_FRAME_EXT,
)

__all__ = [
    'normalize_product_id',
    'resolve_frame_url',
    'DEFAULT_BASE_URL',
    'DEFAULT_FRAME_EXT',
]
