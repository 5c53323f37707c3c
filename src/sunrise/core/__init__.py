"""Log scanning, trigger tracking and recovery orchestration."""

from __future__ import annotations

from .errors import (
    CommandLaunchError,
    ConfigError,
    InvalidTimestampError,
    LogReadError,
    MissingCloseBracketError,
    MissingOpenBracketError,
    SunriseError,
    TimestampParseError,
)
from .models import Detection, LogObservation, ScanResult, TrackingState, TriggerEvent
from .timestamp import parse_bracket_timestamp
from .tracker import OccurrenceTracker, check_for_trigger

__all__ = [
    "CommandLaunchError",
    "ConfigError",
    "Detection",
    "InvalidTimestampError",
    "LogObservation",
    "LogReadError",
    "MissingCloseBracketError",
    "MissingOpenBracketError",
    "OccurrenceTracker",
    "ScanResult",
    "SunriseError",
    "TimestampParseError",
    "TrackingState",
    "TriggerEvent",
    "check_for_trigger",
    "parse_bracket_timestamp",
]
