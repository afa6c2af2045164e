"""
Frame asset URL resolution

Asset layout expected on the asset host:

    {base_url}/{product_id with '-' replaced by '_'}/{color_id}/{frame_index}.webp
"""

DEFAULT_BASE_URL = "https://gwm.kopimap.com/180_view"
DEFAULT_FRAME_EXT = "webp"


def normalize_product_id(product_id: str) -> str:
    """Convert hyphens to underscores (asset folders use snake_case)."""
    return product_id.replace("-", "_")


def resolve_frame_url(
    base_url: str,
    product_id: str,
    color_id: str,
    frame_index: int,
    ext: str = DEFAULT_FRAME_EXT,
) -> str:
    """
    Build the asset URL for one frame.

    Pure function. Malformed inputs produce a URL that simply fails to load.

    Example:
        >>> resolve_frame_url("https://cdn/360", "tank-300", "orange", 3)
        'https://cdn/360/tank_300/orange/3.webp'
    """
    return f"{base_url}/{normalize_product_id(product_id)}/{color_id}/{frame_index}.{ext}"
