"""Leading bracketed timestamp parser for Sunshine log lines.

Sunshine prefixes every entry with ``[YYYY-MM-DD HH:MM:SS.mmm]`` in local
wall-clock time.
"""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

from .errors import InvalidTimestampError, MissingCloseBracketError, MissingOpenBracketError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# strptime alone accepts single-digit fields and 1-6 fractional digits.
_TS_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}$", re.ASCII)


def parse_bracket_timestamp(line: str, *, tz: tzinfo | None = None) -> datetime:
    """Return the timestamp at the start of ``line`` as an aware datetime.

    The wall-clock value is interpreted in ``tz``, or in the process's local
    time zone when ``tz`` is None.

    Raises a subclass of TimestampParseError when the line has no usable
    prefix.
    """
    if not line.startswith("["):
        raise MissingOpenBracketError("line does not start with '['")

    end = line.find("]")
    if end == -1:
        raise MissingCloseBracketError("line has no closing ']'")

    ts_str = line[1:end]
    if not _TS_RE.match(ts_str):
        raise InvalidTimestampError(f"{ts_str!r} does not match YYYY-MM-DD HH:MM:SS.mmm")

    try:
        naive = datetime.strptime(ts_str, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidTimestampError(f"{ts_str!r} is not a valid date/time: {e}") from e

    # Near year 1 or 9999 the local offset can push the value out of range.
    try:
        if tz is None:
            return naive.astimezone()
        return naive.replace(tzinfo=tz)
    except (ValueError, OverflowError) as e:
        raise InvalidTimestampError(f"{ts_str!r} cannot be placed in the local time zone: {e}") from e
