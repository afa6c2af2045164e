"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass

from frameview.managers.config_manager import ConfigManager
from frameview.services.event_bus import EventBus
from frameview.services.frame_loader import IFrameLoader
from frameview.services.snapshot_publisher import SnapshotPublisher
from frameview.services.viewer_service import ViewerService


@dataclass
class ServiceContainer:
    """
    Centralized dependency injection container.

    Services included:
    - config_manager: settings and product catalog
    - event_bus: pub-sub routing between input, viewers and the websocket layer
    - frame_loader: shared asset loader used by every viewer
    - viewer_service: live viewer sessions
    - snapshot_publisher: turns viewer events into render snapshots

    Usage:
        services = ServiceContainer.build(config_manager, HttpFrameLoader())

        @app.get("/api/v1/viewers/{viewer_id}")
        async def get_viewer(services: ServiceContainer = Depends(get_service_container)):
            ...
    """

    config_manager: ConfigManager
    event_bus: EventBus
    frame_loader: IFrameLoader
    viewer_service: ViewerService
    snapshot_publisher: SnapshotPublisher

    @classmethod
    def build(cls, config_manager: ConfigManager, frame_loader: IFrameLoader) -> "ServiceContainer":
        event_bus = EventBus()
        viewer_service = ViewerService(config_manager, frame_loader, event_bus)
        snapshot_publisher = SnapshotPublisher(viewer_service=viewer_service, event_bus=event_bus)
        return cls(
            config_manager=config_manager,
            event_bus=event_bus,
            frame_loader=frame_loader,
            viewer_service=viewer_service,
            snapshot_publisher=snapshot_publisher,
        )
