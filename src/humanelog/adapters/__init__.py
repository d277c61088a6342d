"""Adapters connecting the handler to sinks and to stdlib logging."""

from humanelog.adapters.logging import HumaneLoggingHandler
from humanelog.adapters.sinks import InMemorySink

__all__ = [
    "HumaneLoggingHandler",
    "InMemorySink",
]
