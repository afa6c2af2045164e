"""
Product schemas - catalog responses
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from frameview.models.color_option import ColorOption
from frameview.models.product import ProductConfig


class ColorOptionResponse(BaseModel):
    id: str
    name: str
    hex: str
    background_color: Optional[str] = None
    explicit_frames: Optional[List[int]] = Field(
        None,
        description="Known-good frame indices; absent means frames are auto-detected"
    )

    @classmethod
    def from_color(cls, color: ColorOption) -> "ColorOptionResponse":
        return cls(**color.to_dict())


class ProductResponse(BaseModel):
    id: str = Field(description="Product id, e.g. 'tank-300'")
    name: str
    total_frames: Optional[int] = Field(None, description="Overrides the default frame range")
    colors: List[ColorOptionResponse]

    @classmethod
    def from_product(cls, product: ProductConfig) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            total_frames=product.total_frames,
            colors=[ColorOptionResponse.from_color(c) for c in product.colors],
        )


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    count: int
