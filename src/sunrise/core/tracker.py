"""Occurrence tracking across poll cycles.

The whole log is re-scanned every tick. Deduplication relies on the newest
trigger timestamp rather than on file offsets, and a shrinking file is taken
as a rotation that forgets what was already handled.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import tzinfo

from .errors import TimestampParseError
from .models import Detection, LogObservation, ScanResult, TrackingState, TriggerEvent
from .timestamp import parse_bracket_timestamp

logger = logging.getLogger(__name__)


def latest_trigger(
    lines: Iterable[str],
    *,
    trigger: str,
    tz: tzinfo | None = None,
) -> TriggerEvent | None:
    """Return the matching line with the greatest parsable timestamp."""
    latest: TriggerEvent | None = None
    for line in lines:
        if trigger not in line:
            continue
        try:
            ts = parse_bracket_timestamp(line, tz=tz)
        except TimestampParseError as e:
            logger.warning("Unable to parse log timestamp for line %r: %s", line, e)
            continue

        # Strictly later only: the first of several equal timestamps wins.
        if latest is None or ts > latest.timestamp:
            latest = TriggerEvent(line=line, timestamp=ts)
    return latest


def check_for_trigger(
    state: TrackingState,
    observation: LogObservation,
    *,
    trigger: str,
    tz: tzinfo | None = None,
) -> ScanResult:
    """Decide whether ``observation`` holds an unhandled trigger and update ``state``."""
    rotated = observation.size < state.last_file_size
    if rotated:
        logger.info("Log appears to have rotated; resetting trigger tracking state")
        state.reset()

    state.last_file_size = observation.size

    latest = latest_trigger(observation.lines, trigger=trigger, tz=tz)
    if latest is None:
        state.reset()
        return ScanResult(detection=Detection.NO_TRIGGER, rotated=rotated)

    handled = state.last_handled_timestamp
    if handled is None or latest.timestamp > handled:
        state.last_handled_timestamp = latest.timestamp
        return ScanResult(detection=Detection.NEW_TRIGGER, latest=latest, rotated=rotated)

    return ScanResult(detection=Detection.ALREADY_HANDLED, latest=latest, rotated=rotated)


@dataclass(slots=True)
class OccurrenceTracker:
    """Owns the TrackingState for one monitored log and one trigger substring."""

    trigger: str
    tz: tzinfo | None = None
    state: TrackingState = field(default_factory=TrackingState)

    def observe(self, observation: LogObservation) -> ScanResult:
        return check_for_trigger(self.state, observation, trigger=self.trigger, tz=self.tz)
