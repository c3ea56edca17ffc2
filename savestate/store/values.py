"""Value kinds accepted by the store and their JSON representation.

The variant is closed: strings, integers, floats, booleans and timezone-aware
timestamps. Strings and numbers map onto the matching JSON kinds; timestamps
are written as a tagged object so they never collide with plain strings.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone

Value = str | int | float | bool | datetime

TIMESTAMP_TAG = "$timestamp"
TIMESTAMP_FORMAT = "YYYY-MM-DDTHH:MM:SS.ffffffZ"
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{6}Z")


def format_timestamp(value: datetime) -> str:
    # strftime("%Y") does not zero-pad years below 1000 everywhere.
    u = value.astimezone(timezone.utc)
    return (
        f"{u.year:04d}-{u.month:02d}-{u.day:02d}"
        f"T{u.hour:02d}:{u.minute:02d}:{u.second:02d}.{u.microsecond:06d}Z"
    )


def parse_timestamp(text: str) -> datetime:
    if not _TIMESTAMP_RE.fullmatch(text):
        raise ValueError(f"timestamp {text!r} is not in {TIMESTAMP_FORMAT} form")
    return datetime.fromisoformat(text[:-1]).replace(tzinfo=timezone.utc)


def check_value(value: object) -> Value:
    """Return ``value`` if it is one of the supported kinds, else raise.

    Timestamps come back converted to UTC, the form they are stored in.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("timestamp values must be timezone-aware")
        try:
            return value.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ValueError(f"timestamp is out of range in UTC: {value!r}") from exc
    if isinstance(value, (str, bool, int, float)):
        return value
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def to_json(value: Value) -> object:
    if isinstance(value, datetime):
        return {TIMESTAMP_TAG: format_timestamp(value)}
    return value


def from_json(raw: object) -> Value:
    """Inverse of :func:`to_json`. Raises ``ValueError`` for anything else."""
    if isinstance(raw, (str, bool, int, float)):
        return raw
    if isinstance(raw, dict) and set(raw) == {TIMESTAMP_TAG}:
        text = raw[TIMESTAMP_TAG]
        if isinstance(text, str):
            return parse_timestamp(text)
    raise ValueError(f"not a stored value: {raw!r}")


def render(value: Value) -> str:
    """String view of a value, used by the string-facing controller API."""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return format_timestamp(value)
    return json.dumps(value)
