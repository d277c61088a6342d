"""humanelog: a handler for a human-friendly flavour of logfmt.

Each event becomes one line: a fixed-width level label, the message, then
key=value attributes with nested groups flattened into dotted keys.

     INFO | user signed in | user.id=42 user.name="Ada L" time="..."
"""

from humanelog.adapters.logging import HumaneLoggingHandler
from humanelog.adapters.sinks import InMemorySink
from humanelog.core.encoding.logfmt import (
    DEFAULT_TIME_FORMAT,
    encode_value,
    needs_quoting,
    quote,
)
from humanelog.core.handler import HumaneHandler
from humanelog.core.levels import Level, LevelVar, level_label, level_name
from humanelog.core.logs import Logger
from humanelog.core.models import (
    EMPTY_ATTR,
    SOURCE_KEY,
    TIME_KEY,
    Attr,
    Kind,
    LogEvent,
    Value,
    any_attr,
    boolean,
    deferred,
    duration,
    float64,
    group,
    int64,
    string,
    time,
    uint64,
)
from humanelog.core.options import HandlerOptions, options_from_env

__all__ = [
    "DEFAULT_TIME_FORMAT",
    "EMPTY_ATTR",
    "SOURCE_KEY",
    "TIME_KEY",
    "Attr",
    "HandlerOptions",
    "HumaneHandler",
    "HumaneLoggingHandler",
    "InMemorySink",
    "Kind",
    "Level",
    "LevelVar",
    "LogEvent",
    "Logger",
    "Value",
    "any_attr",
    "boolean",
    "deferred",
    "duration",
    "encode_value",
    "float64",
    "group",
    "int64",
    "level_label",
    "level_name",
    "needs_quoting",
    "options_from_env",
    "quote",
    "string",
    "time",
    "uint64",
]
