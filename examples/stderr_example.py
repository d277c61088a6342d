"""Example script writing humane logfmt lines to stderr.

Run with:
    python examples/stderr_example.py

Environment:
    HUMANE_LEVEL          - minimum level (debug, info, warn, error, info+2, ...)
    HUMANE_TIME_FORMAT    - strftime layout for the time attribute
    HUMANE_ADD_SOURCE     - set to 1 to add source=file:line

Both the Logger front end and the stdlib logging bridge write through the
same handler, so their lines never interleave.
"""

import logging
import os
import sys
from collections.abc import Sequence
from datetime import timedelta

from humanelog import (
    SOURCE_KEY,
    Attr,
    HumaneHandler,
    HumaneLoggingHandler,
    Logger,
    deferred,
    duration,
    group,
    int64,
    options_from_env,
    string,
)


def trim_source(groups: Sequence[str], attr: Attr) -> Attr:
    """Show only the file name in source attributes."""
    if attr.key == SOURCE_KEY and not groups:
        return string(SOURCE_KEY, os.path.basename(str(attr.value.payload)))
    return attr


handler = HumaneHandler(sys.stderr, options_from_env(replace_attr=trim_source))
logger = Logger(handler)

# Route stdlib logging through the same handler
logging.basicConfig(level=logging.DEBUG, handlers=[HumaneLoggingHandler(handler)])

if __name__ == "__main__":
    logger.info("service starting", version="1.4.2", workers=4)

    http = logger.with_group("http").with_attrs(method="GET", path="/users")
    http.info(
        "request finished",
        int64("status", 200),
        duration("took", timedelta(milliseconds=12, microseconds=500)),
        group("client", string("addr", "10.0.0.7"), string("agent", "curl/8.5")),
    )
    http.debug("cache details", deferred("entries", lambda: 1024))

    logging.getLogger("db").warning("slow query", extra={"table": "users", "ms": 812})
    logger.error("shutdown", reason="signal received")
