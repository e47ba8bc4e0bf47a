"""Tolerant value coercion into Arrow column widths.

Every helper returns ``None`` when the value cannot be represented, which the
column accumulators record as a null cell.
"""

from __future__ import annotations

import datetime as dt
import math
import re
import struct

from utils.value_kinds import NUMERIC_KINDS, classify_value

INT32_BITS = 32
INT64_BITS = 64
INT64_MIN = -(1 << (INT64_BITS - 1))
INT64_MAX = (1 << (INT64_BITS - 1)) - 1
FLOAT32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MICRO = 1_000
_FRACTION_DIGITS = 9
_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)

_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def wrap_int(value: int, bits: int) -> int:
    """Wrap an integer to a signed two's-complement width.

    Returns
    -------
    int
        Value reduced modulo ``2**bits`` into the signed range.
    """
    span = 1 << bits
    half = span >> 1
    return ((value + half) % span) - half


def _coerce_int_width(value: object, bits: int) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return wrap_int(value, bits)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return wrap_int(int(value), bits)
    return None


def coerce_int32(value: object) -> int | None:
    """Narrow an int or float into the int32 range.

    Returns
    -------
    int | None
        Wrapped int32 value, or None for non-numeric input.
    """
    return _coerce_int_width(value, INT32_BITS)


def coerce_int64(value: object) -> int | None:
    """Narrow an int or float into the int64 range.

    Returns
    -------
    int | None
        Wrapped int64 value, or None for non-numeric input.
    """
    return _coerce_int_width(value, INT64_BITS)


def coerce_float64(value: object) -> float | None:
    """Coerce an int or float to a double.

    Returns
    -------
    float | None
        Float value, or None for non-numeric input.
    """
    if classify_value(value) not in NUMERIC_KINDS:
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except OverflowError:
        return None


def coerce_float32(value: object) -> float | None:
    """Round an int or float to the nearest float32.

    Magnitudes beyond the float32 range become signed infinity.

    Returns
    -------
    float | None
        Float32-representable value, or None for non-numeric input.
    """
    result = coerce_float64(value)
    if result is None or not math.isfinite(result):
        return result
    if abs(result) > FLOAT32_MAX:
        return math.copysign(math.inf, result)
    try:
        return struct.unpack("<f", struct.pack("<f", result))[0]
    except OverflowError:
        # Values that round up past FLOAT32_MAX.
        return math.copysign(math.inf, result)


def coerce_str(value: object) -> str | None:
    """Accept only string values.

    Returns
    -------
    str | None
        The string, or None for anything else.
    """
    return value if isinstance(value, str) else None


def coerce_bool(value: object) -> bool | None:
    """Accept only boolean values.

    Returns
    -------
    bool | None
        The boolean, or None for anything else.
    """
    return value if isinstance(value, bool) else None


def datetime_to_ns(value: dt.datetime) -> int:
    """Return nanoseconds since the Unix epoch; naive datetimes are taken as UTC.

    Returns
    -------
    int
        Epoch nanoseconds.
    """
    aware = value if value.tzinfo is not None else value.replace(tzinfo=dt.UTC)
    delta = aware - _EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return seconds * _NANOS_PER_SECOND + delta.microseconds * _NANOS_PER_MICRO


def parse_rfc3339_ns(text: str) -> int | None:
    """Parse an RFC 3339 timestamp with up to nanosecond precision.

    Returns
    -------
    int | None
        Epoch nanoseconds, or None when the text is not RFC 3339.
    """
    match = _RFC3339_RE.match(text)
    if match is None:
        return None
    offset = match.group("offset")
    if offset in {"Z", "z"}:
        offset = "+00:00"
    try:
        parsed = dt.datetime.fromisoformat(f"{match.group('date')}T{match.group('time')}{offset}")
    except ValueError:
        return None
    fraction = match.group("fraction") or ""
    nanos = int(fraction.ljust(_FRACTION_DIGITS, "0")) if fraction else 0
    return datetime_to_ns(parsed) + nanos


def coerce_timestamp_ns(value: object) -> int | None:
    """Coerce a datetime or RFC 3339 string to epoch nanoseconds.

    Instants outside the int64 nanosecond range (roughly 1677-09-21 to
    2262-04-11) are rejected.

    Returns
    -------
    int | None
        Epoch nanoseconds, or None when the value is not a representable
        timestamp.
    """
    if isinstance(value, dt.datetime):
        nanos: int | None = datetime_to_ns(value)
    elif isinstance(value, str):
        nanos = parse_rfc3339_ns(value)
    else:
        return None
    if nanos is None or not INT64_MIN <= nanos <= INT64_MAX:
        return None
    return nanos


__all__ = [
    "FLOAT32_MAX",
    "INT32_BITS",
    "INT64_BITS",
    "INT64_MAX",
    "INT64_MIN",
    "coerce_bool",
    "coerce_float32",
    "coerce_float64",
    "coerce_int32",
    "coerce_int64",
    "coerce_str",
    "coerce_timestamp_ns",
    "datetime_to_ns",
    "parse_rfc3339_ns",
    "wrap_int",
]
