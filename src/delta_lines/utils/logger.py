from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from enum import IntEnum
from functools import partialmethod
from pathlib import Path
from typing import Any, TextIO

# Leveled logger shared by the whole package
# Use: from delta_lines.utils.logger import log, LogLevel
# log.debug("[LINES] built index", extra={"lines": 12})
# log.warning("[CONFIG] bad value")

DEBUG_LOG_PATH = Path("/tmp/delta_lines_debug.log")
RECORD_FORMAT = "{timestamp} [{level:8}] {message}"


class LogLevel(IntEnum):
    """Log severity levels."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    WARNING = 30  # Alias for WARN
    ERROR = 40
    CRITICAL = 50


def _timestamp() -> str:
    # Millisecond precision
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def _textual_app_running() -> bool:
    """True while a Textual app owns the terminal.

    Textual keeps the running app in a private context variable; if a
    release moves or renames it, console output simply stays on.
    """
    try:
        import textual._context as textual_context  # lazy import
        return textual_context.active_app.get(None) is not None
    except (ImportError, AttributeError):
        return False


class Logger:
    """Leveled logger writing timestamped records to stderr and an optional file.

    Console output is skipped while a Textual app is running so log lines
    never land on top of a rendered screen.

    Environment:
        DELTA_LINES_DEBUG=1: debug level, records also appended to DEBUG_LOG_PATH
        DELTA_LINES_LOG_LEVEL: minimum level name, overrides the above
    """

    def __init__(self):
        self._level = LogLevel.INFO
        self._sink: TextIO | None = None
        self._sink_path: Path | None = None

        if os.environ.get("DELTA_LINES_DEBUG") == "1":
            self._level = LogLevel.DEBUG
            self.set_file_output(DEBUG_LOG_PATH)

        requested = os.environ.get("DELTA_LINES_LOG_LEVEL", "").upper()
        if requested in LogLevel.__members__:
            self._level = LogLevel[requested]

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def file_path(self) -> Path | None:
        return self._sink_path

    def set_level(self, level: LogLevel) -> None:
        self._level = level

    def set_file_output(self, path: Path, append: bool = True) -> None:
        """Also write records to ``path``; on failure file output is just disabled."""
        self.close()
        try:
            self._sink = open(path, "a" if append else "w", encoding="utf-8")
        except OSError:
            return
        self._sink_path = path

    def close(self) -> None:
        """Stop file output and release the file."""
        sink, self._sink, self._sink_path = self._sink, None, None
        if sink is not None:
            sink.close()

    def render(self, level: LogLevel, message: str, extra: dict | None = None, exc_info: tuple | None = None) -> str:
        """Build the text of one record."""
        parts = [RECORD_FORMAT.format(timestamp=_timestamp(), level=level.name, message=message)]
        if extra:
            parts.append(f" | {extra}")
        if exc_info and exc_info[0] is not None:
            parts.append("\n" + "".join(traceback.format_exception(*exc_info)))
        return "".join(parts)

    def emit(
        self,
        level: LogLevel,
        *args: Any,
        sep: str = " ",
        extra: dict | None = None,
        exc_info: tuple | None = None,
    ) -> None:
        """Write one record if ``level`` passes the threshold. Never raises."""
        if level < self._level:
            return

        record = self.render(level, sep.join(map(str, args)), extra, exc_info) + "\n"
        streams = [self._sink] if self._sink is not None else []
        if not _textual_app_running():
            streams.append(sys.stderr)

        for stream in streams:
            try:
                stream.write(record)
                stream.flush()
            except (OSError, ValueError):
                # Nowhere left to report a logging failure
                continue

    debug = partialmethod(emit, LogLevel.DEBUG)
    info = partialmethod(emit, LogLevel.INFO)
    warn = partialmethod(emit, LogLevel.WARN)
    warning = partialmethod(emit, LogLevel.WARNING)
    error = partialmethod(emit, LogLevel.ERROR)
    critical = partialmethod(emit, LogLevel.CRITICAL)

    def __call__(self, *args: Any, sep: str = " ") -> None:
        """Shorthand for info()."""
        self.info(*args, sep=sep)


# Singleton logger instance
log = Logger()
