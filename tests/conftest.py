"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest
from tests.helpers import remove_time

from humanelog.adapters.sinks import InMemorySink
from humanelog.core.handler import HumaneHandler
from humanelog.core.options import HandlerOptions


@pytest.fixture
def sink() -> InMemorySink:
    """Provide an empty in-memory sink."""
    return InMemorySink()


@pytest.fixture
def make_handler(sink: InMemorySink) -> Callable[..., HumaneHandler]:
    """Factory fixture for handlers writing to the shared sink.

    Keyword arguments are passed to HandlerOptions. The time attribute is
    stripped unless a replace_attr hook is given explicitly.

    Usage:
        def test_something(make_handler, sink):
            handler = make_handler(level=Level.DEBUG)
    """

    def _make(**options: object) -> HumaneHandler:
        options.setdefault("replace_attr", remove_time)
        return HumaneHandler(sink, HandlerOptions(**options))  # type: ignore[arg-type]

    return _make


@pytest.fixture
def handler(make_handler: Callable[..., HumaneHandler]) -> HumaneHandler:
    """Root handler with default options and time stripped."""
    return make_handler()
