"""Core domain models for log events and their attributes."""

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from types import FrameType
from typing import Any

_INT64_MAX = 2**63 - 1

# Reserved keys for the pseudo-attributes added by the handler.
TIME_KEY = "time"
SOURCE_KEY = "source"


class Kind(enum.Enum):
    """The kind of data carried by a Value."""

    STRING = "string"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT64 = "float64"
    BOOL = "bool"
    DURATION = "duration"
    TIME = "time"
    GROUP = "group"
    DEFERRED = "deferred"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Value:
    """A tagged attribute value.

    Attributes:
        kind: The kind of the payload.
        payload: The raw Python object. For GROUP this is a tuple of Attr,
            for DEFERRED a zero-argument producer.
    """

    kind: Kind = Kind.OPAQUE
    payload: Any = None

    @classmethod
    def of(cls, obj: Any) -> "Value":
        """Infer a Value from a plain Python object."""
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, str):
            return cls(Kind.STRING, obj)
        # bool is a subclass of int, so it has to be checked first
        if isinstance(obj, bool):
            return cls(Kind.BOOL, obj)
        if isinstance(obj, int):
            if obj > _INT64_MAX:
                return cls(Kind.UINT64, obj)
            return cls(Kind.INT64, obj)
        if isinstance(obj, float):
            return cls(Kind.FLOAT64, obj)
        if isinstance(obj, timedelta):
            return cls(Kind.DURATION, obj)
        if isinstance(obj, datetime):
            return cls(Kind.TIME, obj)
        return cls(Kind.OPAQUE, obj)

    def resolve(self) -> "Value":
        """Return the underlying value of a DEFERRED, or self.

        The producer is called exactly once per call to resolve(); its result
        is not resolved again.
        """
        if self.kind is not Kind.DEFERRED:
            return self
        return Value.of(self.payload())

    def group(self) -> tuple["Attr", ...]:
        """Return the child attributes of a GROUP value."""
        if self.kind is not Kind.GROUP:
            raise TypeError(f"value is {self.kind.value}, not group")
        return self.payload

    def is_zero(self) -> bool:
        """True for the zero Value (no kind set, no payload)."""
        return self.kind is Kind.OPAQUE and self.payload is None


@dataclass(frozen=True)
class Attr:
    """A key/value pair attached to a log event.

    An attribute with an empty key is discarded when rendered.
    """

    key: str
    value: Value = field(default_factory=Value)

    def is_empty(self) -> bool:
        """True for the deletion sentinel: empty key and zero value."""
        return self.key == "" and self.value.is_zero()


EMPTY_ATTR = Attr("")


@dataclass(frozen=True)
class LogEvent:
    """A structured log event, consumed within one handle() call.

    Attributes:
        level: Numeric severity (see humanelog.core.levels).
        message: The log message.
        time: Event timestamp. None means unset and suppresses the time
            attribute.
        attrs: Event-local attributes, in call order.
        source: Caller location, either an already resolved "file:line"
            string or a raw frame object.
    """

    level: int
    message: str
    time: datetime | None = None
    attrs: tuple[Attr, ...] = ()
    source: str | FrameType | None = None


def string(key: str, value: str) -> Attr:
    return Attr(key, Value(Kind.STRING, value))


def int64(key: str, value: int) -> Attr:
    return Attr(key, Value(Kind.INT64, value))


def uint64(key: str, value: int) -> Attr:
    return Attr(key, Value(Kind.UINT64, value))


def float64(key: str, value: float) -> Attr:
    return Attr(key, Value(Kind.FLOAT64, float(value)))


def boolean(key: str, value: bool) -> Attr:
    return Attr(key, Value(Kind.BOOL, value))


def duration(key: str, value: timedelta) -> Attr:
    return Attr(key, Value(Kind.DURATION, value))


def time(key: str, value: datetime) -> Attr:
    return Attr(key, Value(Kind.TIME, value))


def group(key: str, *attrs: Attr) -> Attr:
    """Create a group attribute whose children are flattened into dotted keys.

    Args:
        key: Group name. An empty name inlines the children.
        *attrs: Child attributes, in order.

    Returns:
        Attr with a GROUP value.
    """
    return Attr(key, Value(Kind.GROUP, tuple(attrs)))


def deferred(key: str, producer: Callable[[], Any]) -> Attr:
    """Create an attribute whose value is computed only when rendered."""
    return Attr(key, Value(Kind.DEFERRED, producer))


def any_attr(key: str, value: Any) -> Attr:
    """Create an attribute, inferring the value kind from the object."""
    return Attr(key, Value.of(value))


def attrs_from(*attrs: Attr, **kwargs: Any) -> tuple[Attr, ...]:
    """Collect positional Attr objects followed by keyword attributes.

    Example:
        attrs_from(group("req", string("id", "a1")), status=200)
    """
    collected: list[Attr] = list(attrs)
    collected.extend(any_attr(key, value) for key, value in kwargs.items())
    return tuple(collected)


def as_attrs(attrs: Iterable[Attr]) -> tuple[Attr, ...]:
    if isinstance(attrs, tuple):
        return attrs
    return tuple(attrs)
