"""Port interfaces for the collaborators of the handler.

These protocols describe what the handler needs from output destinations,
from attribute values that render themselves, and from rewrite hooks.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from humanelog.core.models import Attr


@runtime_checkable
class TextSink(Protocol):
    """Port for output destinations.

    Any text stream (sys.stderr, an open file, io.StringIO) satisfies it.
    Examples: InMemorySink.
    """

    def write(self, text: str, /) -> object:
        """Write one complete, newline-terminated line."""
        ...


@runtime_checkable
class TextMarshaler(Protocol):
    """Port for values that know how to render themselves as text.

    If marshal_text() raises, the attribute carrying the value is dropped
    from the line.
    """

    def marshal_text(self) -> str:
        """Return the text form of the value."""
        ...


class ReplaceAttr(Protocol):
    """Rewrite hook applied to every leaf attribute except level and message.

    Args:
        groups: Group names enclosing the attribute, outermost first. Empty
            for top-level attributes, including time and source.
        attr: The attribute as it would be rendered.

    Returns:
        The attribute to render instead. An attribute with an empty key, or
        None, removes it from the line.
    """

    def __call__(self, groups: Sequence[str], attr: Attr, /) -> Attr | None: ...
