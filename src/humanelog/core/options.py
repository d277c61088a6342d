"""Handler configuration."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from humanelog.core.encoding.logfmt import DEFAULT_TIME_FORMAT
from humanelog.core.levels import Level, LevelVar, parse_level
from humanelog.core.ports import ReplaceAttr

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class HandlerOptions:
    """Options for a HumaneHandler, shared by every handler derived from it.

    Attributes:
        level: Minimum level to log, or a LevelVar to change it at runtime.
            None means INFO.
        time_format: strftime layout for the time attribute and TIME values.
            If the layout itself needs quoting, rendered times are quoted.
        replace_attr: Rewrite hook for every attribute except level and
            message, including time and source.
        add_source: Add a "source" attribute with the caller's file:line.
    """

    level: int | LevelVar | None = Level.INFO
    time_format: str = DEFAULT_TIME_FORMAT
    replace_attr: ReplaceAttr | None = None
    add_source: bool = False

    def minimum_level(self) -> int:
        if self.level is None:
            return Level.INFO
        if isinstance(self.level, LevelVar):
            return self.level.level()
        return int(self.level)

    def effective_time_format(self) -> str:
        # An empty layout falls back to the default rather than rendering
        # nothing.
        return self.time_format or DEFAULT_TIME_FORMAT


def options_from_env(
    environ: Mapping[str, str] | None = None,
    replace_attr: ReplaceAttr | None = None,
) -> HandlerOptions:
    """Build options from HUMANE_LEVEL, HUMANE_TIME_FORMAT and HUMANE_ADD_SOURCE.

    Missing or unparseable variables fall back to the defaults; nothing is
    rejected.

    Args:
        environ: Mapping to read from (default: os.environ).
        replace_attr: Rewrite hook; hooks cannot come from the environment.

    Returns:
        HandlerOptions populated from the environment.
    """
    env = os.environ if environ is None else environ
    level = parse_level(env.get("HUMANE_LEVEL", ""), default=Level.INFO)
    time_format = env.get("HUMANE_TIME_FORMAT") or DEFAULT_TIME_FORMAT
    add_source = env.get("HUMANE_ADD_SOURCE", "").strip().lower() in _TRUTHY
    return HandlerOptions(
        level=level,
        time_format=time_format,
        replace_attr=replace_attr,
        add_source=add_source,
    )
