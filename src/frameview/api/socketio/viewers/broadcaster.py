from frameview.api.schemas.viewer import ViewerSnapshotResponse
from frameview.models.events import EventType, ViewerClosedEvent, ViewerSnapshotUpdatedEvent
from frameview.services.service_container import ServiceContainer


def register_viewer_broadcaster(sio, services: ServiceContainer):
    """Push viewer snapshots to the room of each viewer (room name = viewer id)."""
    bus = services.event_bus

    async def on_snapshot(event: ViewerSnapshotUpdatedEvent):
        payload = ViewerSnapshotResponse.from_snapshot(event.snapshot)
        await sio.emit("viewer.snapshot", payload.model_dump(mode="json"), room=event.viewer_id)

    async def on_closed(event: ViewerClosedEvent):
        await sio.emit("viewer.closed", {"viewer_id": event.viewer_id}, room=event.viewer_id)

    bus.subscribe(EventType.VIEWER_SNAPSHOT_UPDATED, on_snapshot)  # type: ignore
    bus.subscribe(EventType.VIEWER_CLOSED, on_closed)  # type: ignore
