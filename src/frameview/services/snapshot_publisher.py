from __future__ import annotations

from frameview.models.events import EventType, ViewerSnapshotUpdatedEvent
from frameview.services.event_bus import EventBus
from frameview.services.render_surface import build_render_snapshot
from frameview.services.viewer_service import ViewerService
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER)


class SnapshotPublisher:
    """
    Publishes UI-facing ViewerSnapshotUpdatedEvent
    in response to viewer state events.

    Responsibilities:
    - listen to viewer events (color, frames, current frame, completion)
    - build RenderSnapshot from current viewer state
    - publish snapshot event for the websocket layer
    """

    def __init__(
        self,
        *,
        viewer_service: ViewerService,
        event_bus: EventBus,
    ):
        self.viewer_service = viewer_service
        self.event_bus = event_bus

        self._subscribe()

        log.info("SnapshotPublisher initialized")

    def _subscribe(self) -> None:
        for event_type in (
            EventType.VIEWER_COLOR_SELECTED,
            EventType.VIEWER_FRAMES_UPDATED,
            EventType.VIEWER_FRAME_CHANGED,
            EventType.VIEWER_PROBE_COMPLETED,
        ):
            self.event_bus.subscribe(event_type, self._on_viewer_changed)

    async def _on_viewer_changed(self, event) -> None:
        viewer_id = getattr(event, "viewer_id", None)
        if not viewer_id:
            return

        viewer = self.viewer_service.get_viewer(viewer_id)
        if viewer is None:
            return

        await self.event_bus.publish(
            ViewerSnapshotUpdatedEvent(
                viewer_id=viewer_id,
                snapshot=build_render_snapshot(viewer),
            )
        )
