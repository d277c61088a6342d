"""Handler that renders log events as humane logfmt lines.

A line looks like:

     INFO | request finished | http.method=GET http.status=200 time="..."

The level label and message come first, separated by pipes, followed by
key=value pairs for the attributes recorded with with_attrs, the event's own
attributes, the optional source attribute and the time attribute.
"""

import copy
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import FrameType

from humanelog.core import chain as _chain
from humanelog.core.encoding.logfmt import quote_if_needed
from humanelog.core.flatten import flatten
from humanelog.core.levels import level_label
from humanelog.core.models import (
    SOURCE_KEY,
    TIME_KEY,
    Attr,
    LogEvent,
    string,
    time,
)
from humanelog.core.options import HandlerOptions
from humanelog.core.ports import TextSink

UNKNOWN_SOURCE = "???:0"


@dataclass
class _Output:
    """Destination and lock shared by a root handler and its derivatives."""

    sink: TextSink
    lock: threading.Lock = field(default_factory=threading.Lock)


def source_location(source: str | FrameType | None) -> str:
    """Resolve a caller location token to "file:line"."""
    if source is None:
        return UNKNOWN_SOURCE
    if isinstance(source, str):
        return source
    return f"{source.f_code.co_filename}:{source.f_lineno}"


class HumaneHandler:
    """Formats log events and writes one line per event to a text sink.

    Handlers are cheap to derive: with_attrs() and with_group() return a new
    handler sharing the options, sink and lock of the receiver, with one more
    entry in its derivation chain.

    Example:
        ```python
        handler = HumaneHandler(sys.stderr)
        request = handler.with_group("http").with_attrs([string("method", "GET")])
        request.handle(LogEvent(Level.INFO, "done", attrs=(int64("status", 200),)))
        #  INFO | done | http.method=GET http.status=200
        ```
    """

    def __init__(self, sink: TextSink, options: HandlerOptions | None = None) -> None:
        """Initialize a root handler.

        Args:
            sink: Destination for rendered lines.
            options: Handler options. Defaults to HandlerOptions().
        """
        self._options = options or HandlerOptions()
        self._output = _Output(sink)
        self._chain: _chain.Chain | None = None

    @property
    def options(self) -> HandlerOptions:
        return self._options

    def enabled(self, level: int) -> bool:
        """Report whether events at level should be handled."""
        return level >= self._options.minimum_level()

    def with_attrs(self, attrs: Iterable[Attr]) -> "HumaneHandler":
        """Return a handler that adds attrs to every event.

        An empty batch returns this handler itself.
        """
        derived = _chain.with_attrs(self._chain, attrs)
        if derived is self._chain:
            return self
        return self._derive(derived)

    def with_group(self, name: str) -> "HumaneHandler":
        """Return a handler that nests subsequent attributes under name.

        An empty name returns this handler itself.
        """
        derived = _chain.with_group(self._chain, name)
        if derived is self._chain:
            return self
        return self._derive(derived)

    def _derive(self, chain: _chain.Chain) -> "HumaneHandler":
        clone = copy.copy(self)
        clone._chain = chain
        return clone

    def format(self, event: LogEvent) -> str:
        """Render an event as one newline-terminated line."""
        options = self._options
        time_format = options.effective_time_format()
        buf = [level_label(event.level), " | ", event.message, " |"]

        def emit(key: str, value: str) -> None:
            buf.append(f" {quote_if_needed(key)}={value}")

        def render(groups: tuple[str, ...], attrs: Iterable[Attr]) -> None:
            flatten(
                groups,
                attrs,
                emit,
                replace_attr=options.replace_attr,
                time_format=time_format,
            )

        groups = _chain.replay(self._chain, lambda path, attr: render(path, (attr,)))
        render(groups, event.attrs)
        if options.add_source:
            render((), (string(SOURCE_KEY, source_location(event.source)),))
        if event.time is not None:
            render((), (time(TIME_KEY, event.time),))
        buf.append("\n")
        return "".join(buf)

    def handle(self, event: LogEvent) -> None:
        """Write an event to the sink.

        The level is not checked here; callers are expected to consult
        enabled() first. Errors raised by the sink's write propagate
        unchanged.
        """
        line = self.format(event)
        output = self._output
        with output.lock:
            output.sink.write(line)
            flush = getattr(output.sink, "flush", None)
            if flush is not None:
                flush()
