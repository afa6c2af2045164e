import asyncio
import select
import sys
import termios
import tty
from typing import List, Optional

from frameview.models.events import KeyboardKeyPressEvent, KeyboardSource
from frameview.services.event_bus import EventBus
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INPUT)

ARROW_KEYS = {
    '\x1b[A': 'UP',
    '\x1b[B': 'DOWN',
    '\x1b[C': 'RIGHT',
    '\x1b[D': 'LEFT',
}


class StdinKeyboardAdapter:
    """
    Terminal keyboard adapter

    Intended for SSH sessions and local Unix terminals. Reads stdin in cbreak
    mode, decodes arrow-key escape sequences and publishes
    KeyboardKeyPressEvent to the EventBus, addressed to one viewer
    (or every viewer when viewer_id is None).

    Terminal settings are restored on exit.
    """

    def __init__(self, event_bus: EventBus, viewer_id: Optional[str] = None):
        self.event_bus = event_bus
        self.viewer_id = viewer_id
        self._old_settings = None
        self._buffer = ""

    async def run(self) -> None:
        """
        Read stdin until cancelled.

        Raises:
            RuntimeError: stdin is not a TTY or can no longer be read
        """
        log.info("Starting STDIN keyboard adapter")

        if not sys.stdin.isatty():
            raise RuntimeError("STDIN is not a TTY")

        self._old_settings = termios.tcgetattr(sys.stdin)
        tty.setcbreak(sys.stdin.fileno())

        log.info("STDIN keyboard adapter active (cbreak mode enabled)")

        try:
            while True:
                ready, _, _ = select.select([sys.stdin], [], [], 0)

                if not ready:
                    await asyncio.sleep(0.01)
                    continue

                try:
                    char = sys.stdin.read(1)
                except OSError as e:
                    raise RuntimeError("STDIN read failed") from e

                if not char:
                    continue

                self._buffer += char
                await self._process_buffer()

        except asyncio.CancelledError:
            log.info("STDIN keyboard adapter cancelled")
            raise

        finally:
            if self._old_settings:
                termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self._old_settings)
                log.debug("Terminal settings restored")

    async def _process_buffer(self) -> None:
        """Consume buffered input, publishing one event per complete key."""
        while self._buffer:
            # Arrow keys: ESC [ A/B/C/D
            if self._buffer.startswith('\x1b['):
                if len(self._buffer) < 3:
                    return

                seq = self._buffer[:3]
                self._buffer = self._buffer[3:]

                key = ARROW_KEYS.get(seq)
                if key:
                    await self._publish_key(key)
                else:
                    log.debug("Unknown escape sequence", sequence=repr(seq))
                continue

            # Lone ESC: wait for a possible continuation
            if self._buffer == '\x1b':
                return

            if self._buffer.startswith('\x1b'):
                self._buffer = self._buffer[1:]
                await self._publish_key("ESCAPE")
                continue

            char = self._buffer[0]
            self._buffer = self._buffer[1:]

            if char in ('\r', '\n'):
                await self._publish_key("ENTER")
            elif char == ' ':
                await self._publish_key("SPACE")
            elif '\x01' <= char <= '\x1a':
                await self._publish_key(chr(ord(char) + 96).upper(), modifiers=["CTRL"])
            elif char.isprintable():
                if char.isupper():
                    await self._publish_key(char, modifiers=["SHIFT"])
                else:
                    await self._publish_key(char.upper())

    async def _publish_key(self, key: str, modifiers: Optional[List[str]] = None) -> None:
        log.debug(f"Keyboard key pressed (stdin): {key}", modifiers=modifiers)

        await self.event_bus.publish(
            KeyboardKeyPressEvent(
                key,
                modifiers,
                viewer_id=self.viewer_id,
                keyboard=KeyboardSource.STDIN,
            )
        )
