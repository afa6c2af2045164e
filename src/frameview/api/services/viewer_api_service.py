"""
API Viewer Service - layer between routes and the domain ViewerService

1. Converts API requests into domain calls / input events
2. Converts viewer state into response schemas
3. Maps domain failures (unknown product, viewer, color) to DomainErrors
"""

from frameview.api.middleware.error_handler import (
    ColorNotFoundError,
    ProductNotFoundError,
    ViewerNotFoundError,
)
from frameview.api.schemas.product import ProductListResponse, ProductResponse
from frameview.api.schemas.viewer import (
    CreateViewerRequest,
    DragRequest,
    KeyPressRequest,
    SliderRequest,
    ViewerListResponse,
    ViewerSnapshotResponse,
)
from frameview.controllers.navigation_controller import ratio_from_track
from frameview.managers.config_manager import ConfigManager
from frameview.models.enums import DragPhase, LogCategory, SliderAction
from frameview.models.events import (
    KeyboardKeyPressEvent,
    KeyboardSource,
    PointerDragEvent,
    SliderInputEvent,
)
from frameview.services.event_bus import EventBus
from frameview.services.render_surface import build_render_snapshot
from frameview.services.viewer_service import ViewerService, ViewerSession
from frameview.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class ViewerAPIService:
    """API wrapper over domain ViewerService"""

    def __init__(
        self,
        viewer_service: ViewerService,
        config_manager: ConfigManager,
        event_bus: EventBus,
    ):
        self.viewer_service = viewer_service
        self.config_manager = config_manager
        self.event_bus = event_bus

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(self) -> ProductListResponse:
        products = [ProductResponse.from_product(p) for p in self.config_manager.list_products()]
        return ProductListResponse(products=products, count=len(products))

    def get_product(self, product_id: str) -> ProductResponse:
        product = self.config_manager.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductResponse.from_product(product)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def _session(self, viewer_id: str) -> ViewerSession:
        session = self.viewer_service.get(viewer_id)
        if session is None:
            raise ViewerNotFoundError(viewer_id)
        return session

    def _snapshot(self, session: ViewerSession) -> ViewerSnapshotResponse:
        return ViewerSnapshotResponse.from_snapshot(build_render_snapshot(session.viewer))

    async def create_viewer(self, request: CreateViewerRequest) -> ViewerSnapshotResponse:
        product = self.config_manager.get_product(request.product_id)
        if product is None:
            raise ProductNotFoundError(request.product_id)
        if request.color_id is not None and product.get_color(request.color_id) is None:
            raise ColorNotFoundError(product.id, request.color_id, product.color_ids)

        session = await self.viewer_service.create_viewer(product.id, request.color_id)
        return self._snapshot(session)

    def get_viewer(self, viewer_id: str) -> ViewerSnapshotResponse:
        return self._snapshot(self._session(viewer_id))

    def list_viewers(self) -> ViewerListResponse:
        viewers = [self._snapshot(s) for s in self.viewer_service.list_sessions()]
        return ViewerListResponse(viewers=viewers, count=len(viewers))

    async def close_viewer(self, viewer_id: str) -> None:
        if not await self.viewer_service.close_viewer(viewer_id):
            raise ViewerNotFoundError(viewer_id)

    async def select_color(self, viewer_id: str, color_id: str) -> ViewerSnapshotResponse:
        session = self._session(viewer_id)
        if session.product.get_color(color_id) is None:
            raise ColorNotFoundError(session.product.id, color_id, session.product.color_ids)

        await session.viewer.select_color(color_id)
        return self._snapshot(session)

    # ------------------------------------------------------------------
    # Navigation (routed through the event bus like any other input)
    # ------------------------------------------------------------------

    async def press_key(self, viewer_id: str, request: KeyPressRequest) -> ViewerSnapshotResponse:
        session = self._session(viewer_id)
        await self.event_bus.publish(
            KeyboardKeyPressEvent(request.key, viewer_id=viewer_id, keyboard=KeyboardSource.API)
        )
        return self._snapshot(session)

    async def drag(self, viewer_id: str, request: DragRequest) -> ViewerSnapshotResponse:
        session = self._session(viewer_id)
        phase = DragPhase[request.phase.upper()]
        await self.event_bus.publish(PointerDragEvent(phase, request.x, viewer_id=viewer_id))
        return self._snapshot(session)

    async def slider(self, viewer_id: str, request: SliderRequest) -> ViewerSnapshotResponse:
        session = self._session(viewer_id)
        action = SliderAction[request.action.upper()]

        if request.ratio is not None:
            ratio = request.ratio
        elif request.x is not None and request.track_width:
            ratio = ratio_from_track(request.x, request.track_left, request.track_width)
        else:
            ratio = 0.0

        await self.event_bus.publish(SliderInputEvent(action, ratio, viewer_id=viewer_id))
        return self._snapshot(session)
