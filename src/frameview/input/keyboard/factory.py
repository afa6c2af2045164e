import importlib.util
import sys
from typing import Optional

from frameview.services.event_bus import EventBus
from frameview.utils.logger import get_logger, LogCategory
from .base import IKeyboardAdapter

log = get_logger().for_category(LogCategory.INPUT)


def create_keyboard_adapter(event_bus: EventBus, viewer_id: Optional[str] = None) -> IKeyboardAdapter:
    """
    Keyboard adapter factory.

    Priority:
    1. Stdin (Unix terminal with a TTY on stdin)
    2. Dummy (Windows, piped stdin)
    """
    if importlib.util.find_spec("termios") is not None and sys.stdin.isatty():
        from .stdin import StdinKeyboardAdapter
        log.info("Using stdin keyboard adapter", viewer=viewer_id)
        return StdinKeyboardAdapter(event_bus, viewer_id=viewer_id)

    log.info("Using dummy keyboard adapter (no keyboard input)")
    from .dummy import DummyKeyboardAdapter
    return DummyKeyboardAdapter(event_bus, viewer_id=viewer_id)
