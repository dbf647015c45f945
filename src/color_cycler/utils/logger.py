from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, TextIO
import sys

from color_cycler.models.enums import LogLevel, LogCategory


# === ANSI COLORS ===
class Colors:
    """ANSI escape codes for colored terminal output"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_BLUE = '\033[94m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.STATE: Colors.BRIGHT_CYAN,
    LogCategory.COLOR: Colors.BRIGHT_MAGENTA,
    LogCategory.BEHAVIOR: Colors.BRIGHT_YELLOW,
    LogCategory.TIMER: Colors.BRIGHT_BLUE,
    LogCategory.CONTEXT: Colors.BRIGHT_GREEN,
    LogCategory.MIGRATION: Colors.YELLOW,
    LogCategory.EVENT: Colors.MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.TASK: Colors.BLUE,
}

# symbol, color
LEVEL_STYLES = {
    LogLevel.DEBUG: ('·', Colors.DIM),
    LogLevel.INFO: ('✓', Colors.GREEN),
    LogLevel.WARN: ('⚠', Colors.YELLOW),
    LogLevel.ERROR: ('✗', Colors.RED),
}

LEVEL_ORDER = [LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARN, LogLevel.ERROR]

DETAIL_INDENT = " " * 11


@dataclass
class LogRecord:
    """One emitted message, as handed to the listener"""
    level: LogLevel
    category: LogCategory
    message: str
    details: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)


LogListener = Callable[[LogRecord], None]


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY · Message
               ├─ Detail 1
               └─ Detail 2

    Example:
    [14:23:45] COLOR     ✓ Cycled
               ├─ context: base
               └─ hsl: HSL 150 100 50

    An optional listener receives every record that passes the level
    filter (the host can mirror messages into its own UI).
    """

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        use_colors: bool = True,
        stream: Optional[TextIO] = None
    ):
        """
        Initialize logger

        Args:
            min_level: Minimum log level to display
            use_colors: Enable ANSI color codes (disable for file output)
            stream: Output stream (default: stdout at write time)
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream
        self._listener: Optional[LogListener] = None

    def set_listener(self, listener: Optional[LogListener]) -> None:
        """Receive every emitted LogRecord (None detaches)"""
        self._listener = listener

    def is_enabled(self, level: LogLevel) -> bool:
        return LEVEL_ORDER.index(level) >= LEVEL_ORDER.index(self.min_level)

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def render(self, record: LogRecord) -> List[str]:
        """Format a record into output lines (main line + detail tree)"""
        symbol, level_color = LEVEL_STYLES[record.level]
        category = self._paint(
            record.category.name.ljust(9),
            CATEGORY_COLORS.get(record.category, Colors.WHITE)
        )
        lines = [
            f"{record.timestamp.strftime('[%H:%M:%S]')} {category} "
            f"{self._paint(symbol, level_color)} {self._paint(record.message, level_color)}"
        ]

        last = len(record.details) - 1
        for i, detail in enumerate(record.details):
            branch = "└─" if i == last else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (STATE, TIMER, etc.)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: List of detail strings to show below message
            **kwargs: Additional key-value pairs to show as details

        Example:
            logger.log(LogCategory.TIMER, "Timer armed", context="base", seconds=30)
        """
        if not self.is_enabled(level):
            return

        record = LogRecord(
            level=level,
            category=category,
            message=message,
            details=list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()],
        )

        out = self.stream or sys.stdout
        for line in self.render(record):
            print(line, file=out)

        if self._listener is not None:
            self._listener(record)

    # === Level helpers ===
    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Return a logger bound to one category"""
        return BoundLogger(self, category)


class BoundLogger:
    """Category-bound view of the shared Logger (what modules keep as `log`)"""

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


# === Global instance helpers ===
_logger = Logger()


def get_logger() -> Logger:
    return _logger


def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Configure the shared logger in place

    Bound loggers created at import time keep pointing at the same
    instance, so reconfiguring after startup affects every module.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
