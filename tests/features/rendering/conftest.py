"""BDD step definitions for line rendering features."""

from dataclasses import dataclass, field
from datetime import datetime

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import FIXED_TIME, remove_time

from humanelog.adapters.sinks import InMemorySink
from humanelog.core.handler import HumaneHandler
from humanelog.core.levels import Level
from humanelog.core.models import Attr, LogEvent, any_attr, group, int64, string
from humanelog.core.options import HandlerOptions


@dataclass
class RenderingContext:
    """State shared between the steps of one scenario."""

    sink: InMemorySink = field(default_factory=InMemorySink)
    handler: HumaneHandler | None = None
    time: datetime | None = None

    def log(self, message: str, *attrs: Attr) -> None:
        assert self.handler is not None
        self.handler.handle(LogEvent(Level.INFO, message, time=self.time, attrs=attrs))


@pytest.fixture
def ctx() -> RenderingContext:
    """Fresh scenario context for each test."""
    return RenderingContext()


# === Given ===
@given("a handler that drops the time attribute")
def given_handler_without_time(ctx: RenderingContext) -> None:
    ctx.handler = HumaneHandler(ctx.sink, HandlerOptions(replace_attr=remove_time))


@given(parsers.parse('a handler with time format "{layout}"'))
def given_handler_with_layout(ctx: RenderingContext, layout: str) -> None:
    ctx.handler = HumaneHandler(ctx.sink, HandlerOptions(time_format=layout))


@given(parsers.parse('a handler with minimum level "{name}"'))
def given_handler_with_level(ctx: RenderingContext, name: str) -> None:
    ctx.handler = HumaneHandler(ctx.sink, HandlerOptions(level=Level[name]))


@given("the event time is 2009-11-10 23:00 UTC")
def given_fixed_time(ctx: RenderingContext) -> None:
    ctx.time = FIXED_TIME


@given(parsers.parse('the handler is derived with group "{name}"'))
def given_derived_group(ctx: RenderingContext, name: str) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_group(name)


@given(parsers.parse('the handler is derived with attribute "{key}" = {value:d}'))
def given_derived_attr(ctx: RenderingContext, key: str, value: int) -> None:
    assert ctx.handler is not None
    ctx.handler = ctx.handler.with_attrs([any_attr(key, value)])


# === When ===
@when(parsers.parse('"{message}" is logged'))
def when_logged(ctx: RenderingContext, message: str) -> None:
    ctx.log(message)


@when(parsers.parse('"{message}" is logged with the foo and bar groups'))
def when_logged_with_groups(ctx: RenderingContext, message: str) -> None:
    ctx.log(
        message,
        group("foo", int64("c", 3), group("bar", int64("d", 4))),
        int64("c", 3),
    )


@when(parsers.parse('"{message}" is logged with "{key}" set to "{value}"'))
def when_logged_with_string(ctx: RenderingContext, message: str, key: str, value: str) -> None:
    ctx.log(message, string(key, value))


@when(parsers.parse('"{message}" is logged with an empty group "{name}"'))
def when_logged_with_empty_group(ctx: RenderingContext, message: str, name: str) -> None:
    ctx.log(message, group(name))


# === Then ===
@then(parsers.parse('the output is "{line}"'))
def then_output_is(ctx: RenderingContext, line: str) -> None:
    assert ctx.sink.lines == [line + "\n"]


@then(parsers.parse('level "{name}" is not enabled'))
def then_level_disabled(ctx: RenderingContext, name: str) -> None:
    assert ctx.handler is not None
    assert not ctx.handler.enabled(Level[name])


@then(parsers.parse('level "{name}" is enabled'))
def then_level_enabled(ctx: RenderingContext, name: str) -> None:
    assert ctx.handler is not None
    assert ctx.handler.enabled(Level[name])
