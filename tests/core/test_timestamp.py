from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from sunrise.core.errors import (
    InvalidTimestampError,
    MissingCloseBracketError,
    MissingOpenBracketError,
    TimestampParseError,
)
from sunrise.core.timestamp import parse_bracket_timestamp


def test_parses_millisecond_timestamp() -> None:
    ts = parse_bracket_timestamp("[2024-01-01 10:00:00.123]: Error: display not found", tz=UTC)
    assert ts == datetime(2024, 1, 1, 10, 0, 0, 123000, tzinfo=UTC)


def test_wall_clock_is_interpreted_in_given_zone() -> None:
    tz = timezone(timedelta(hours=2))
    ts = parse_bracket_timestamp("[2024-06-01 12:30:00.000] x", tz=tz)
    assert ts.astimezone(UTC) == datetime(2024, 6, 1, 10, 30, tzinfo=UTC)


def test_defaults_to_local_zone() -> None:
    ts = parse_bracket_timestamp("[2024-06-01 12:30:00.000] x")
    assert ts.tzinfo is not None
    assert ts.replace(tzinfo=None) == datetime(2024, 6, 1, 12, 30)


def test_missing_open_bracket() -> None:
    with pytest.raises(MissingOpenBracketError):
        parse_bracket_timestamp("2024-01-01 10:00:00.000] display not found")


def test_missing_close_bracket() -> None:
    with pytest.raises(MissingCloseBracketError):
        parse_bracket_timestamp("[2024-01-01 10:00:00.000 display not found")


@pytest.mark.parametrize(
    "line",
    [
        "[2024-1-01 10:00:00.000] x",
        "[2024-01-01 10:00:00] x",
        "[2024-01-01 10:00:00.12] x",
        "[2024-01-01 10:00:00.1234] x",
        "[2024-13-01 10:00:00.000] x",
        "[2024-02-30 10:00:00.000] x",
        "[2024-01-01T10:00:00.000] x",
        "[] x",
        "[info] 2024-01-01 10:00:00.000 x",
    ],
)
def test_invalid_timestamp(line: str) -> None:
    with pytest.raises(InvalidTimestampError):
        parse_bracket_timestamp(line, tz=UTC)


@pytest.mark.parametrize("line", ["", "plain text", "]", "[", "   [2024-01-01 10:00:00.000] x"])
def test_failures_are_timestamp_parse_errors(line: str) -> None:
    with pytest.raises(TimestampParseError):
        parse_bracket_timestamp(line, tz=UTC)


@pytest.mark.parametrize(
    "line",
    [
        "[٢٠٢٤-٠١-٠١ ١٠:٠٠:٠٠.٠٠٠] x",
        "[2024-01-01 10:00:00.００٠] x",
    ],
)
def test_non_ascii_digits_are_rejected(line: str) -> None:
    with pytest.raises(InvalidTimestampError):
        parse_bracket_timestamp(line, tz=UTC)


@pytest.mark.parametrize("zone", ["America/New_York", "Asia/Tokyo", "UTC"])
@pytest.mark.parametrize(
    "line",
    ["[0001-01-01 00:00:00.000] x", "[9999-12-31 23:59:59.999] x"],
)
def test_extreme_years_never_escape_as_other_errors(local_tz, zone: str, line: str) -> None:
    local_tz(zone)
    try:
        ts = parse_bracket_timestamp(line)
    except TimestampParseError:
        return
    assert ts.tzinfo is not None
    assert ts.year in (1, 9999)
