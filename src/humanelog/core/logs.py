"""Logger front end that builds LogEvent objects for a HumaneHandler."""

import sys
from datetime import datetime
from typing import Any

from humanelog.core.handler import HumaneHandler
from humanelog.core.levels import Level
from humanelog.core.models import Attr, LogEvent, attrs_from


class Logger:
    """Builds events with the current time and hands them to a handler.

    Attributes can be given as Attr objects, as keyword arguments, or both:

    Example:
        ```python
        logger = Logger(HumaneHandler(sys.stderr))
        db = logger.with_group("db").with_attrs(host="localhost")
        db.info("connected", group("pool", size=4), elapsed=0.25)
        ```
    """

    def __init__(self, handler: HumaneHandler) -> None:
        self._handler = handler

    @property
    def handler(self) -> HumaneHandler:
        return self._handler

    def enabled(self, level: int) -> bool:
        return self._handler.enabled(level)

    def with_attrs(self, *attrs: Attr, **attributes: Any) -> "Logger":
        """Return a logger whose events always carry the given attributes."""
        handler = self._handler.with_attrs(attrs_from(*attrs, **attributes))
        if handler is self._handler:
            return self
        return Logger(handler)

    def with_group(self, name: str) -> "Logger":
        """Return a logger that nests later attributes under name."""
        handler = self._handler.with_group(name)
        if handler is self._handler:
            return self
        return Logger(handler)

    def log(self, level: int, message: str, *attrs: Attr, **attributes: Any) -> None:
        """Log a message at an arbitrary level.

        Args:
            level: Numeric level; custom levels are allowed.
            message: The log message.
            *attrs: Attributes, including groups.
            **attributes: Additional attributes, kind inferred from the value.
        """
        self._log(level, message, attrs, attributes)

    def debug(self, message: str, *attrs: Attr, **attributes: Any) -> None:
        self._log(Level.DEBUG, message, attrs, attributes)

    def info(self, message: str, *attrs: Attr, **attributes: Any) -> None:
        self._log(Level.INFO, message, attrs, attributes)

    def warn(self, message: str, *attrs: Attr, **attributes: Any) -> None:
        self._log(Level.WARN, message, attrs, attributes)

    def error(self, message: str, *attrs: Attr, **attributes: Any) -> None:
        self._log(Level.ERROR, message, attrs, attributes)

    def _log(
        self,
        level: int,
        message: str,
        attrs: tuple[Attr, ...],
        attributes: dict[str, Any],
    ) -> None:
        if not self._handler.enabled(level):
            return
        source = None
        if self._handler.options.add_source:
            # Skip _log and the public method that called it.
            source = sys._getframe(2)
        event = LogEvent(
            level=level,
            message=message,
            time=datetime.now().astimezone(),
            attrs=attrs_from(*attrs, **attributes),
            source=source,
        )
        self._handler.handle(event)
