"""
Structured console logger.

Every record is one headline plus an optional detail tree:

    [14:23:45] PROBE      ✓ Probe pass complete
               ├─ color: orange
               └─ available: 22

Modules grab a category-bound logger once at import time:

    log = get_logger().for_category(LogCategory.PROBE)
    log.info("Probe pass started", color="orange", to_load=24)

configure_logger() mutates the shared instance, so those bound loggers pick
up the configured level and colour mode.
"""

import sys
from datetime import datetime
from typing import Any, Dict, List, Optional, TextIO, Tuple

from frameview.models.enums import LogLevel, LogCategory

RESET = '\033[0m'
DIM = '\033[2m'

# (symbol, ANSI colour) per level, in ascending severity
LEVEL_STYLES: Dict[LogLevel, Tuple[str, str]] = {
    LogLevel.DEBUG: ('·', DIM),
    LogLevel.INFO: ('✓', '\033[32m'),
    LogLevel.WARN: ('⚠', '\033[33m'),
    LogLevel.ERROR: ('✗', '\033[31m'),
}
LEVEL_ORDER: List[LogLevel] = list(LEVEL_STYLES)

CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: '\033[36m',
    LogCategory.PROBE: '\033[94m',
    LogCategory.CACHE: '\033[34m',
    LogCategory.VIEWER: '\033[96m',
    LogCategory.NAVIGATION: '\033[92m',
    LogCategory.RENDER: '\033[35m',
    LogCategory.EVENT: '\033[95m',
    LogCategory.SYSTEM: '\033[97m',
    LogCategory.API: '\033[93m',
    LogCategory.SOCKETIO: '\033[33m',
    LogCategory.INPUT: '\033[32m',
}
DEFAULT_COLOR = '\033[37m'

CATEGORY_WIDTH = 10
DETAIL_INDENT = " " * 11


def format_detail_value(value: Any) -> str:
    """Exceptions render as 'TypeName: message', everything else via str()."""
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    return str(value)


class Logger:
    """
    Shared structured logger.

    Args:
        min_level: records below this level are dropped
        use_colors: emit ANSI colour codes
        stream: output stream; None writes to the current sys.stdout
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream

    def is_enabled_for(self, level: LogLevel) -> bool:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(self.min_level)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def format_record(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel,
        details: Optional[list] = None,
        **fields,
    ) -> List[str]:
        """Render a record to output lines (headline first, then the detail tree)."""
        symbol, level_color = LEVEL_STYLES[level]
        headline = " ".join((
            datetime.now().strftime('[%H:%M:%S]'),
            self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, DEFAULT_COLOR)),
            self._paint(symbol, level_color),
            self._paint(message, level_color),
        ))

        entries = [str(d) for d in details or []]
        entries.extend(f"{key}: {format_detail_value(value)}" for key, value in fields.items())

        lines = [headline]
        for i, entry in enumerate(entries):
            branch = "└─" if i == len(entries) - 1 else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, DIM)} {entry}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **fields
    ) -> None:
        if not self.is_enabled_for(level):
            return
        stream = self.stream or sys.stdout
        for line in self.format_record(category, message, level, details, **fields):
            print(line, file=stream)

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Category-bound view of a Logger; a call may still override the category."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        self._base.log(category or self._category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self._base, category)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True) -> Logger:
    """Reconfigure the shared logger in place and return it."""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    return _logger
