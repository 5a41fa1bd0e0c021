"""
docsite Site Log

A compact event log for the build and serve pipeline, kept apart from the
regular module loggers so a build reads like a checklist.

Events:
- 📄 PAGE: A page was rendered or written
- 🗂️ META: A metadata file was generated
- 📊 DIAGRAM: Diagram blocks were rendered
- 🌐 ROUTE: A request was served
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path


class Event(Enum):
    """Event types for the site log."""
    PAGE_RENDER = "📄 PAGE"
    PAGE_WRITE = "📄 WRITE"
    PAGE_MISSING = "📄 404"

    METADATA = "🗂️ META"

    DIAGRAM_PENDING = "📊 DIAGRAM"
    DIAGRAM_DONE = "📊 RENDERED"
    DIAGRAM_ERROR = "📊 DGM.ERR"

    ROUTE = "🌐 ROUTE"

    SYSTEM_START = "⚡ START"
    SYSTEM_STOP = "⚡ STOP"
    SYSTEM_ERROR = "❌ ERROR"


class SiteLogFormatter(logging.Formatter):
    """Short single-line formatter: time, event tag, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        event = getattr(record, 'event', None)
        if event:
            prefix = event.value
        else:
            prefix = f"[{record.levelname}]"

        return f"{timestamp} {prefix} │ {record.getMessage()}"


class SiteLog:
    """
    Central event logger for docsite.

    Usage:
        from docsite.sitelog import sitelog

        sitelog.page_render("/articles/hello")
        sitelog.metadata("recent-plugins.json", 16)
    """

    def __init__(self, name: str = "docsite.sitelog"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)
        self._configured = False

    def configure(self, log_file: Path | None = None, console: bool = True) -> None:
        """Configure site log outputs."""
        if self._configured:
            return

        formatter = SiteLogFormatter()

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        # Don't propagate to root logger (avoid duplicate output)
        self.logger.propagate = False
        self._configured = True

    def _log(self, event: Event, message: str) -> None:
        if not self._configured:
            self.configure()
        self.logger.info(message, extra={'event': event})

    # === Page events ===

    def page_render(self, route: str) -> None:
        """Log a page rendered for a route."""
        self._log(Event.PAGE_RENDER, route)

    def page_write(self, path: Path) -> None:
        """Log a page written to disk."""
        self._log(Event.PAGE_WRITE, str(path))

    def page_missing(self, route: str) -> None:
        """Log a route with no markdown source."""
        self._log(Event.PAGE_MISSING, route)

    # === Metadata events ===

    def metadata(self, filename: str, count: int) -> None:
        """Log a metadata file generated."""
        self._log(Event.METADATA, f"{filename} ({count} entries)")

    # === Diagram events ===

    def diagram_pending(self, route: str, count: int) -> None:
        self._log(Event.DIAGRAM_PENDING, f"{route}: {count} block(s) waiting")

    def diagram_done(self, route: str, count: int) -> None:
        self._log(Event.DIAGRAM_DONE, f"{route}: {count} block(s)")

    def diagram_error(self, error: str) -> None:
        self._log(Event.DIAGRAM_ERROR, error)

    # === Request events ===

    def route(self, method: str, path: str, status: int) -> None:
        """Log a served request."""
        self._log(Event.ROUTE, f"{method} {path} → {status}")

    # === System events ===

    def start(self, component: str) -> None:
        """Log component started."""
        self._log(Event.SYSTEM_START, component)

    def stop(self, component: str) -> None:
        """Log component stopped."""
        self._log(Event.SYSTEM_STOP, component)

    def error(self, message: str) -> None:
        """Log system error."""
        self._log(Event.SYSTEM_ERROR, message)


# Global site log instance
sitelog = SiteLog()
