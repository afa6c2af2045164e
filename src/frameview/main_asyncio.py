"""
main_asyncio.py - Application entry point for the 360° frame viewer service
--------------------------------------------------------------------------

Responsible for:
- loading configuration and wiring services (dependency injection)
- starting the API / Socket.IO server
- optionally opening a local terminal viewer driven by the keyboard
- graceful shutdown on Ctrl+C, SIGTERM or a critical task failure
"""

import sys

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import Optional

from frameview.api.dependencies import set_service_container
from frameview.api.main import create_app
from frameview.api.socketio.registry import register_socketio
from frameview.api.socketio.server import create_socketio_server, wrap_app_with_socketio
from frameview.input.keyboard import create_keyboard_adapter
from frameview.lifecycle.api_server_wrapper import APIServerWrapper
from frameview.lifecycle.handlers import (
    AllTasksCancellationHandler,
    APIServerShutdownHandler,
    FrameLoaderShutdownHandler,
    ViewerShutdownHandler,
)
from frameview.lifecycle.shutdown_coordinator import ShutdownCoordinator
from frameview.lifecycle.task_registry import create_tracked_task, TaskCategory
from frameview.managers import ConfigManager
from frameview.models.events import EventType, ViewerFrameChangedEvent
from frameview.services import HttpFrameLoader, ServiceContainer
from frameview.services.middleware import log_middleware
from frameview.utils.logger import configure_logger, get_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


async def open_terminal_viewer(services: ServiceContainer) -> Optional[str]:
    """
    Open the viewer configured under `terminal:` and route stdin keys to it.

    Returns:
        The viewer id, or None when the configured product/color is unknown
    """
    settings = services.config_manager.terminal_settings
    try:
        session = await services.viewer_service.create_viewer(
            settings.product_id,
            settings.color_id or None,
        )
    except ValueError as e:
        log.error("Terminal viewer not started", reason=str(e))
        return None

    viewer = session.viewer

    async def on_frame_changed(event: ViewerFrameChangedEvent) -> None:
        log.info(f"Frame {event.frame}", url=viewer.frame_url(event.frame))

    services.event_bus.subscribe(
        EventType.VIEWER_FRAME_CHANGED,
        on_frame_changed,
        filter_fn=lambda e: e.viewer_id == viewer.id,
    )

    create_tracked_task(
        create_keyboard_adapter(services.event_bus, viewer_id=viewer.id).run(),
        category=TaskCategory.INPUT,
        description="Terminal keyboard adapter",
    )

    log.info("Terminal viewer ready (LEFT / RIGHT to rotate)", viewer=viewer.id, product=settings.product_id)
    return viewer.id


async def main() -> None:
    """Main async entry point."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager()
    config_manager.load()
    configure_logger(config_manager.log_level, config_manager.log_colors)

    log.info("Starting frame viewer service...")

    # ========================================================================
    # 2. SERVICES
    # ========================================================================

    loader = HttpFrameLoader(timeout=config_manager.viewer_settings.request_timeout)
    services = ServiceContainer.build(config_manager, loader)
    services.event_bus.add_middleware(log_middleware)

    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 3. API + SOCKET.IO
    # ========================================================================

    api_settings = config_manager.api_settings
    app = create_app(cors_origins=api_settings.cors_origins)
    sio = create_socketio_server(api_settings.cors_origins)
    register_socketio(sio, services)

    api_wrapper = APIServerWrapper(
        wrap_app_with_socketio(app, sio),
        host=api_settings.host,
        port=api_settings.port,
    )
    api_task = create_tracked_task(
        api_wrapper.start(),
        category=TaskCategory.API,
        description="FastAPI/Uvicorn Server",
    )

    # ========================================================================
    # 4. TERMINAL VIEWER (optional)
    # ========================================================================

    if config_manager.terminal_settings.enabled:
        await open_terminal_viewer(services)

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(ViewerShutdownHandler(services.viewer_service))
    coordinator.register(FrameLoaderShutdownHandler(loader))
    coordinator.register(AllTasksCancellationHandler(exclude_tasks=[api_task]))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("Frame viewer service shut down cleanly.")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
