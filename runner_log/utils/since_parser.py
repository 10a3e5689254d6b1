"""
Since Parser
============
Turns the --since value into a UTC cutoff datetime.

Accepted forms:
    ""                      → 24 hours before now
    "90s", "15m", "1h30m"   → Go-style durations (ns/us/ms/s/m/h)
    "2d", "1w"              → days / weeks
    "2025-11-18T00:00:00Z"  → RFC3339 / ISO-8601 instant
    "2025-11-18"            → midnight UTC of that date
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from runner_log.core.errors import InvalidInputError

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")
_DURATION_RE = re.compile(r"^(?:\d+(?:\.\d+)?(?:ns|us|µs|ms|s|m|h))+$")
_DAYS_WEEKS_RE = re.compile(r"^(\d+)([dw])$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string, extending Go-style units with d and w.

    Raises
    ------
    InvalidInputError
        If the value is not a recognised duration.
    """
    text = value.strip()
    if text == "0":
        return timedelta(0)
    if _DURATION_RE.match(text):
        seconds = sum(
            float(amount) * _UNIT_SECONDS[unit]
            for amount, unit in _DURATION_PART_RE.findall(text)
        )
        return timedelta(seconds=seconds)

    match = _DAYS_WEEKS_RE.match(text)
    if match:
        amount = int(match.group(1))
        if match.group(2) == "d":
            return timedelta(days=amount)
        return timedelta(weeks=amount)

    raise InvalidInputError(f"invalid duration format: {value}")


def parse_since(value: str, now: Optional[datetime] = None) -> datetime:
    """
    Resolve a --since value to a timezone-aware UTC datetime.

    Parameters
    ----------
    value : str
        Duration, timestamp, or date. Empty means the last 24 hours.
    now : datetime, optional
        Reference instant for relative values (defaults to the current
        UTC time).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    text = (value or "").strip()
    if not text:
        return now - timedelta(hours=24)

    try:
        return now - parse_duration(text)
    except InvalidInputError:
        pass

    if _DATE_RE.match(text):
        try:
            return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            pass
    else:
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        # RFC3339 requires an offset
        if parsed is not None and parsed.tzinfo is not None:
            return parsed.astimezone(timezone.utc)

    raise InvalidInputError(
        f"unable to parse time: {value} (expected format: duration like "
        f"'24h', '2d', '1w' or date like '2024-01-01')"
    )
