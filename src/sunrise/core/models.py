"""Core data models for log monitoring."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Detection(str, Enum):
    """Outcome of scanning the log once."""

    NEW_TRIGGER = "new_trigger"
    ALREADY_HANDLED = "already_handled"
    NO_TRIGGER = "no_trigger"


@dataclass(frozen=True, slots=True)
class LogObservation:
    """Snapshot of the log taken at the start of a tick."""

    size: int
    lines: Sequence[str]


@dataclass(frozen=True, slots=True)
class TriggerEvent:
    """A matching log line together with its parsed timestamp."""

    line: str
    timestamp: datetime


@dataclass(slots=True)
class TrackingState:
    """State carried between ticks.

    ``last_handled_timestamp`` is None until a trigger has been handled, and
    again after the log rotates or stops containing any trigger.
    """

    last_file_size: int = 0
    last_handled_timestamp: datetime | None = None

    def reset(self) -> None:
        self.last_handled_timestamp = None


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Tracker verdict plus the newest trigger seen in the scan (if any)."""

    detection: Detection
    latest: TriggerEvent | None = None
    rotated: bool = False
