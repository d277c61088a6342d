"""Encoder for humane logfmt keys and values.

A key or value is written verbatim unless it contains a character that would
make the line ambiguous (space, double quote, equals sign, control
characters, non-printable or whitespace code points, lone surrogates), in
which case it is wrapped in double quotes and escaped.
"""

import logging
import math
from datetime import timedelta
from decimal import Decimal

from humanelog.core.models import Kind, Value

_logger = logging.getLogger(__name__)

DEFAULT_TIME_FORMAT = "%Y-%m-%dT%I:%M.%S %Z"

# Printable ASCII is safe except space, '"' and '='. DEL is safe as well.
_SAFE_ASCII = frozenset(chr(c) for c in range(0x21, 0x80)) - {'"', "="}

_NAMED_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_US_PER_MS = 1_000
_US_PER_S = 1_000_000
_US_PER_MIN = 60 * _US_PER_S
_US_PER_H = 60 * _US_PER_MIN


def needs_quoting(text: str) -> bool:
    """Report whether a key or value must be quoted.

    Args:
        text: The raw key or value.

    Returns:
        True if any character is outside the safe set.
    """
    for ch in text:
        if ch < "\x80":
            if ch not in _SAFE_ASCII:
                return True
            continue
        if "\ud800" <= ch <= "\udfff":
            # lone surrogate: not a valid code point on its own
            return True
        if ch.isspace() or not ch.isprintable():
            return True
    return False


def quote(text: str) -> str:
    """Wrap text in double quotes, escaping quotes, backslashes and
    non-printable characters.
    """
    parts = ['"']
    for ch in text:
        escaped = _NAMED_ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
            continue
        code = ord(ch)
        if code < 0x20 or code == 0x7F:
            parts.append(f"\\x{code:02x}")
        elif code < 0x80 or (ch.isprintable() and not ch.isspace()):
            parts.append(ch)
        elif code <= 0xFFFF:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def quote_if_needed(text: str) -> str:
    if needs_quoting(text):
        return quote(text)
    return text


def _trim_fraction(whole: int, fraction: int, digits: int) -> str:
    if fraction == 0:
        return str(whole)
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Render a duration in short-unit form.

    Examples: "0s", "750µs", "1.5ms", "5s", "2m5s", "1h0m5.25s".
    """
    micros = (value.days * 86_400 + value.seconds) * _US_PER_S + value.microseconds
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < _US_PER_MS:
        return f"{sign}{micros}µs"
    if micros < _US_PER_S:
        ms, rest = divmod(micros, _US_PER_MS)
        return f"{sign}{_trim_fraction(ms, rest, 3)}ms"
    hours, micros = divmod(micros, _US_PER_H)
    minutes, micros = divmod(micros, _US_PER_MIN)
    seconds, micros = divmod(micros, _US_PER_S)
    text = f"{_trim_fraction(seconds, micros, 6)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return f"{sign}{text}"


def format_float(number: float) -> str:
    """Format a float with the fewest digits that read back as the same value.

    Integral values carry no fraction ("5", "100"). Exponent notation is used
    when the decimal exponent is below -4, or when it reaches the number of
    significant digits and is at least 6 ("1e+06", "1.234567e+06", "1e-05").
    Non-finite values render as "NaN", "+Inf" and "-Inf".

    Args:
        number: The value to format.

    Returns:
        The formatted number.
    """
    number = float(number)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, number) < 0 else ""
    if number == 0:
        return sign + "0"

    # repr() yields the shortest round-trip digits.
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    count = len(digits)
    point = count + exponent

    limit = 6
    if limit > count and count >= point:
        limit = count
    decimal_exponent = point - 1
    if decimal_exponent < -4 or decimal_exponent >= limit:
        mantissa = digits[0] + ("." + digits[1:] if count > 1 else "")
        exp_sign = "-" if decimal_exponent < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(decimal_exponent):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= count:
        return f"{sign}{digits}{'0' * (point - count)}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _object_text(obj: object) -> str | None:
    try:
        marshal = getattr(obj, "marshal_text", None)
        if marshal is not None and callable(marshal):
            return str(marshal())
        return str(obj)
    except Exception:
        _logger.debug("cannot render %s as text", type(obj).__name__, exc_info=True)
        return None


def _group_text(value: Value, time_format: str) -> str | None:
    items = []
    for attr in value.group():
        encoded = encode_value(attr.value.resolve(), time_format)
        if encoded is None:
            continue
        items.append(f"{attr.key}={encoded}")
    return "[" + " ".join(items) + "]"


def encode_value(value: Value, time_format: str = DEFAULT_TIME_FORMAT) -> str | None:
    """Encode a value as a logfmt value token.

    Args:
        value: A resolved Value. An unresolved DEFERRED is rendered like an
            opaque object.
        time_format: strftime layout used for TIME values.

    Returns:
        The encoded token, or None if the value could not be rendered and
        the attribute should be dropped.
    """
    kind = value.kind
    payload = value.payload
    if kind is Kind.TIME:
        text = payload.strftime(time_format)
        # Decided on the layout, not on the rendered timestamp.
        if needs_quoting(time_format):
            return quote(text)
        return text
    if kind is Kind.STRING:
        text = payload
    elif kind is Kind.BOOL:
        text = "true" if payload else "false"
    elif kind in (Kind.INT64, Kind.UINT64):
        text = str(int(payload))
    elif kind is Kind.FLOAT64:
        text = format_float(payload)
    elif kind is Kind.DURATION:
        text = format_duration(payload)
    elif kind is Kind.GROUP:
        text = _group_text(value, time_format)
    else:
        text = _object_text(payload)
    if text is None:
        return None
    return quote_if_needed(text)
