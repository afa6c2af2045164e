from frameview.lifecycle.task_registry import TaskRegistry
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)


def register_on_connect(sio):
    """
    Registers connection lifecycle handlers for Socket.IO.
    Sends task statistics on connect; viewer state is sent on subscribe.
    """

    @sio.event
    async def connect(sid, environ, auth=None):
        client_ip = environ.get('REMOTE_ADDR', 'unknown')
        log.info(f"Client connected: {sid} from {client_ip}")

        await sio.emit("tasks:stats", {"summary": TaskRegistry.instance().summary()}, room=sid)

    @sio.event
    async def disconnect(sid):
        log.info(f"Client disconnected: {sid}")
