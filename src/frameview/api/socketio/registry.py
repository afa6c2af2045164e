from frameview.api.socketio.on_connect import register_on_connect
from frameview.api.socketio.viewers.broadcaster import register_viewer_broadcaster
from frameview.api.socketio.viewers.on_subscribe import register_viewer_subscriptions


def register_socketio(sio, services):
    register_on_connect(sio)
    register_viewer_broadcaster(sio, services)
    register_viewer_subscriptions(sio, services)
