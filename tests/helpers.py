"""Helpers shared by unit, integration and feature tests."""

from collections.abc import Sequence
from datetime import datetime, timezone

from humanelog.core.models import EMPTY_ATTR, TIME_KEY, Attr

# 2009-11-10 23:00:00 UTC, used wherever a fixed event time is needed.
FIXED_TIME = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)


def remove_time(groups: Sequence[str], attr: Attr) -> Attr:
    """Rewrite hook that drops the top-level time attribute only."""
    if attr.key == TIME_KEY and not groups:
        return EMPTY_ATTR
    return attr
