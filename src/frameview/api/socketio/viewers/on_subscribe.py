from frameview.api.schemas.viewer import ViewerSnapshotResponse
from frameview.services.render_surface import build_render_snapshot
from frameview.services.service_container import ServiceContainer
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)


def register_viewer_subscriptions(sio, services: ServiceContainer):
    """
    Clients join a viewer's room with "viewer.subscribe" {"viewer_id": ...}
    and receive its current snapshot right away.
    """

    @sio.on("viewer.subscribe")
    async def subscribe(sid, data):
        viewer_id = (data or {}).get("viewer_id")
        viewer = services.viewer_service.get_viewer(viewer_id) if viewer_id else None
        if viewer is None:
            await sio.emit("viewer.error", {"code": "VIEWER_NOT_FOUND", "viewer_id": viewer_id}, room=sid)
            return

        await sio.enter_room(sid, viewer_id)
        log.debug(f"Client {sid} subscribed to viewer {viewer_id}")

        payload = ViewerSnapshotResponse.from_snapshot(build_render_snapshot(viewer))
        await sio.emit("viewer.snapshot", payload.model_dump(mode="json"), room=sid)

    @sio.on("viewer.unsubscribe")
    async def unsubscribe(sid, data):
        viewer_id = (data or {}).get("viewer_id")
        if viewer_id:
            await sio.leave_room(sid, viewer_id)
