"""
Product Endpoints - read-only product catalog
"""

from fastapi import APIRouter, Depends

from frameview.api.dependencies import get_viewer_api_service
from frameview.api.schemas.product import ProductListResponse, ProductResponse
from frameview.api.services.viewer_api_service import ViewerAPIService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description="All products with their color options"
)
async def list_products(
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ProductListResponse:
    return api.list_products()


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get product details"
)
async def get_product(
    product_id: str,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ProductResponse:
    """
    Get a single product.

    **Errors:**
    - 404: Product not found
    """
    return api.get_product(product_id)
