"""
Viewer Endpoints - HTTP routes for 360° viewer sessions

A viewer session is created for a product, probes frames for the selected
color in the background, and is navigated through key / drag / slider input.
Every mutating endpoint returns the viewer's render snapshot after the input
was applied; live updates are pushed over Socket.IO ("viewer.snapshot").
"""

from fastapi import APIRouter, Depends, status

from frameview.api.dependencies import get_viewer_api_service
from frameview.api.schemas.viewer import (
    CreateViewerRequest,
    DragRequest,
    KeyPressRequest,
    SelectColorRequest,
    SliderRequest,
    ViewerListResponse,
    ViewerSnapshotResponse,
)
from frameview.api.services.viewer_api_service import ViewerAPIService
from frameview.models.enums import LogCategory
from frameview.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/viewers", tags=["Viewers"])


# ============================================================================
# Sessions
# ============================================================================

@router.post(
    "",
    response_model=ViewerSnapshotResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open a viewer",
    description="Create a viewer session for a product and start probing frames"
)
async def create_viewer(
    request: CreateViewerRequest,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    """
    Open a viewer.

    Probing runs in the background; the returned snapshot is usually in phase
    PROBING. Colors with an explicit frame list report those frames at once.

    **Errors:**
    - 404: Product not found
    - 422: Color not offered for the product
    """
    snapshot = await api.create_viewer(request)
    log.info("Viewer opened via API", viewer=snapshot.viewer_id, product=snapshot.product_id)
    return snapshot


@router.get(
    "",
    response_model=ViewerListResponse,
    summary="List open viewers"
)
async def list_viewers(
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerListResponse:
    return api.list_viewers()


@router.get(
    "/{viewer_id}",
    response_model=ViewerSnapshotResponse,
    summary="Get viewer snapshot"
)
async def get_viewer(
    viewer_id: str,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    return api.get_viewer(viewer_id)


@router.delete(
    "/{viewer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close a viewer",
    description="Close the session and cancel its in-flight frame loads"
)
async def close_viewer(
    viewer_id: str,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> None:
    await api.close_viewer(viewer_id)


# ============================================================================
# Color selection
# ============================================================================

@router.put(
    "/{viewer_id}/color",
    response_model=ViewerSnapshotResponse,
    summary="Select color"
)
async def select_color(
    viewer_id: str,
    request: SelectColorRequest,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    """
    Switch the viewer to another color.

    Frames already cached for the color are shown immediately; the rest are
    probed in the background. Loads of the previous color are not cancelled.
    """
    return await api.select_color(viewer_id, request.color_id)


# ============================================================================
# Navigation
# ============================================================================

@router.post(
    "/{viewer_id}/keys",
    response_model=ViewerSnapshotResponse,
    summary="Key press"
)
async def press_key(
    viewer_id: str,
    request: KeyPressRequest,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    return await api.press_key(viewer_id, request)


@router.post(
    "/{viewer_id}/drag",
    response_model=ViewerSnapshotResponse,
    summary="Pointer drag sample"
)
async def drag(
    viewer_id: str,
    request: DragRequest,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    """
    Feed one drag sample: `start` at the press position, `move` for every
    pointer move, `end` on release. Ignored while the slider is being dragged.
    """
    return await api.drag(viewer_id, request)


@router.post(
    "/{viewer_id}/slider",
    response_model=ViewerSnapshotResponse,
    summary="Slider interaction"
)
async def slider(
    viewer_id: str,
    request: SliderRequest,
    api: ViewerAPIService = Depends(get_viewer_api_service)
) -> ViewerSnapshotResponse:
    return await api.slider(viewer_id, request)
