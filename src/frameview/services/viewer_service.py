"""
Viewer Service - registry of live viewer sessions.

A session is one FrameViewer plus its NavigationController. Sessions are
created from the product catalog, looked up by viewer id and closed
explicitly (the equivalent of a component unmount).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from frameview.controllers.navigation_controller import NavigationController
from frameview.managers.config_manager import ConfigManager
from frameview.models.product import ProductConfig
from frameview.services.event_bus import EventBus
from frameview.services.frame_loader import IFrameLoader
from frameview.services.frame_viewer import FrameViewer
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.VIEWER)


@dataclass
class ViewerSession:
    product: ProductConfig
    viewer: FrameViewer
    controller: NavigationController

    @property
    def id(self) -> str:
        return self.viewer.id


class ViewerService:
    """
    Creates, tracks and closes viewer sessions.

    Example:
        service = ViewerService(config_manager, loader, event_bus)
        session = await service.create_viewer("tank-300", color_id="black")
        await service.close_viewer(session.id)
    """

    def __init__(self, config_manager: ConfigManager, loader: IFrameLoader, event_bus: EventBus):
        self.config_manager = config_manager
        self.loader = loader
        self.event_bus = event_bus
        self._sessions: Dict[str, ViewerSession] = {}

    async def create_viewer(
        self,
        product_id: str,
        color_id: Optional[str] = None,
        viewer_id: Optional[str] = None,
    ) -> ViewerSession:
        """
        Create a viewer for a catalog product and start probing.

        Raises:
            ValueError: unknown product or color
        """
        product = self.config_manager.get_product(product_id)
        if product is None:
            raise ValueError(f"Unknown product '{product_id}'")
        if color_id is not None and product.get_color(color_id) is None:
            raise ValueError(f"Unknown color '{color_id}' for product '{product_id}'")

        settings = self.config_manager.viewer_settings
        viewer = FrameViewer(
            product.id,
            product.colors,
            loader=self.loader,
            event_bus=self.event_bus,
            viewer_id=viewer_id,
            total_frames=product.total_frames or settings.total_frames,
            base_url=settings.base_url,
            max_concurrent_loads=settings.max_concurrent_loads,
        )
        controller = NavigationController(viewer, self.event_bus, sensitivity=settings.drag_sensitivity)

        session = ViewerSession(product=product, viewer=viewer, controller=controller)
        self._sessions[viewer.id] = session

        log.info("Viewer session created", viewer=viewer.id, product=product.id)

        await viewer.select_color(color_id or viewer.selected_color_id)
        return session

    def get(self, viewer_id: str) -> Optional[ViewerSession]:
        return self._sessions.get(viewer_id)

    def get_viewer(self, viewer_id: str) -> Optional[FrameViewer]:
        session = self._sessions.get(viewer_id)
        return session.viewer if session else None

    def list_sessions(self) -> List[ViewerSession]:
        return list(self._sessions.values())

    async def close_viewer(self, viewer_id: str) -> bool:
        session = self._sessions.pop(viewer_id, None)
        if session is None:
            return False
        session.controller.detach()
        await session.viewer.close()
        return True

    async def close_all(self) -> None:
        for viewer_id in list(self._sessions.keys()):
            await self.close_viewer(viewer_id)
