"""Severity levels, level naming and fixed-width level labels."""

import enum
import threading

LABEL_WIDTH = 5


class Level(enum.IntEnum):
    """Standard severities, numbered like the stdlib logging module."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40


_LABELS = {
    Level.DEBUG: "DEBUG",
    Level.INFO: " INFO",
    Level.WARN: " WARN",
    Level.ERROR: "ERROR",
}

# Aliases accepted by parse_level, in addition to the standard names.
_ALIASES = {
    "WARNING": Level.WARN,
    "CRITICAL": Level.ERROR,
    "FATAL": Level.ERROR,
}


def level_name(level: int) -> str:
    """Return the name of a level.

    Standard levels return their own name. Any other level is named after
    the closest standard level below it plus the offset, e.g. "INFO+2" or
    "ERROR+5". Levels below DEBUG are expressed relative to DEBUG
    ("DEBUG-3").
    """
    base = Level.DEBUG
    for candidate in Level:
        if candidate <= level:
            base = candidate
    offset = level - base
    if offset == 0:
        return base.name
    return f"{base.name}{offset:+d}"


def level_label(level: int) -> str:
    """Return the fixed-width column label for a level."""
    label = _LABELS.get(level)
    if label is not None:
        return label
    return level_name(level).ljust(LABEL_WIDTH)


def parse_level(text: str, default: int = Level.INFO) -> int:
    """Parse a level name ("info", "WARN+2") or an integer.

    Unknown input falls back to default instead of raising.
    """
    cleaned = text.strip().upper()
    if not cleaned:
        return default
    try:
        return int(cleaned)
    except ValueError:
        pass
    name, sign, rest = cleaned, "", ""
    for separator in ("+", "-"):
        if separator in cleaned:
            name, _, rest = cleaned.partition(separator)
            sign = separator
            break
    if name in Level.__members__:
        base = int(Level[name])
    elif name in _ALIASES:
        base = int(_ALIASES[name])
    else:
        return default
    if not sign:
        return base
    try:
        offset = int(rest)
    except ValueError:
        return default
    return base + offset if sign == "+" else base - offset


class LevelVar:
    """A minimum level that can be changed while handlers are in use.

    Example:
        ```python
        threshold = LevelVar(Level.INFO)
        handler = HumaneHandler(sys.stderr, HandlerOptions(level=threshold))
        threshold.set(Level.DEBUG)  # takes effect for all derived handlers
        ```
    """

    def __init__(self, level: int = Level.INFO) -> None:
        self._lock = threading.Lock()
        self._level = int(level)

    def level(self) -> int:
        with self._lock:
            return self._level

    def set(self, level: int) -> None:
        with self._lock:
            self._level = int(level)

    def __repr__(self) -> str:
        return f"LevelVar({level_name(self.level())})"
