"""Python logging handler adapter for humanelog.

This adapter bridges Python's standard library logging module to a
HumaneHandler, so records from any stdlib logger are rendered as humane
logfmt lines.
"""

import logging
import traceback
from datetime import datetime

from humanelog.core.handler import HumaneHandler
from humanelog.core.models import Attr, LogEvent, any_attr, string

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class HumaneLoggingHandler(logging.Handler):
    """Logging handler that renders log records through a HumaneHandler.

    Example:
        ```python
        import logging, sys
        from humanelog import HumaneHandler, HumaneLoggingHandler

        handler = HumaneLoggingHandler(HumaneHandler(sys.stderr))
        logging.getLogger().addHandler(handler)
        logging.getLogger("app").warning("disk low", extra={"free_mb": 120})
        #  WARN | disk low | free_mb=120 time="..."
        ```
    """

    def __init__(self, handler: HumaneHandler, level: int = logging.NOTSET) -> None:
        """Initialize the adapter.

        Args:
            handler: Handler that formats and writes the records. It may be a
                derived handler carrying groups and attributes.
            level: stdlib logging level threshold, applied before the
                handler's own minimum level.
        """
        super().__init__(level)
        self._handler = handler

    @property
    def handler(self) -> HumaneHandler:
        return self._handler

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        """Convert a LogRecord into a LogEvent."""
        attrs: list[Attr] = []

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key in _STANDARD_LOGRECORD_ATTRS or key.startswith("_"):
                continue
            attrs.append(any_attr(key, value))

        # Extract exception info if present
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attrs.append(string("exc_type", exc_type.__name__))
            if exc_value is not None:
                attrs.append(string("exc_message", str(exc_value)))
            if exc_tb is not None:
                attrs.append(
                    string(
                        "exc_traceback",
                        "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
                    )
                )

        return LogEvent(
            level=record.levelno,
            message=record.getMessage(),
            time=datetime.fromtimestamp(record.created).astimezone(),
            attrs=tuple(attrs),
            source=f"{record.pathname}:{record.lineno}",
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through the humane handler.

        Args:
            record: The log record to emit.
        """
        if not self._handler.enabled(record.levelno):
            return
        try:
            self._handler.handle(self.to_event(record))
        except Exception:
            self.handleError(record)
