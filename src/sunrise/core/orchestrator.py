"""Per-tick recovery sequence.

One tick: read the log, ask the tracker for a verdict, and on a new trigger
wake the monitor, wait for it, then optionally restart Sunshine.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import tzinfo
from pathlib import Path

from .commands import Command, ProcessLauncher, SubprocessLauncher
from .config import SunriseConfig
from .errors import CommandLaunchError
from .log_reader import read_log
from .models import Detection, LogObservation, ScanResult
from .ticker import ticks
from .tracker import OccurrenceTracker

logger = logging.getLogger(__name__)

LogReader = Callable[[Path], Awaitable[LogObservation]]


class RecoveryOrchestrator:
    """Drive scan, remediation, wait and restart for one configured log."""

    def __init__(
        self,
        config: SunriseConfig,
        *,
        launcher: ProcessLauncher | None = None,
        reader: LogReader = read_log,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        tz: tzinfo | None = None,
    ) -> None:
        self.config = config
        self.tracker = OccurrenceTracker(trigger=config.trigger, tz=tz)
        self._launcher = launcher or SubprocessLauncher()
        self._reader = reader
        self._sleep = sleep

    async def tick(self) -> ScanResult:
        """Run one scan-decide-act cycle.

        LogReadError propagates to the caller; every other failure is logged
        and the tick completes.
        """
        result = await self.scan()
        if result.detection is not Detection.NEW_TRIGGER:
            return result

        try:
            await self.wake_monitor()
        except CommandLaunchError as e:
            logger.error("Could not wake monitor: %s", e)

        await self.wait_for_monitor()

        if self.config.enable_restart:
            try:
                await self.restart_sunshine()
            except CommandLaunchError as e:
                logger.error("Could not restart sunshine: %s", e)

        return result

    async def scan(self) -> ScanResult:
        logger.info("Checking if monitor is missing according to Sunshine log")
        observation = await self._reader(self.config.log_path)
        result = self.tracker.observe(observation)

        if result.detection is Detection.NEW_TRIGGER:
            logger.info("Monitor is missing; last Sunshine error at %s", result.latest.timestamp.isoformat())
        elif result.detection is Detection.ALREADY_HANDLED:
            logger.info(
                "Monitor missing error already handled at %s",
                self.tracker.state.last_handled_timestamp.isoformat(),
            )
        else:
            logger.info("Monitor is not missing")
        return result

    async def wake_monitor(self) -> bool:
        """Run the wake command. Returns False on a non-zero exit."""
        cmd = self.config.wake_command
        logger.info("Running wakeMonitor command: %s", cmd)
        res = await self._launcher.run_and_wait(cmd)
        if not res.ok:
            logger.error("Could not wake monitor: %s exited with status %d", cmd, res.returncode)
            return False
        logger.info("wakeMonitor command completed without errors")
        return True

    async def wait_for_monitor(self) -> None:
        seconds = self.config.wake_wait_seconds
        logger.info("Waiting %d seconds for monitor to come up", seconds)
        await self._sleep(seconds)

    async def restart_sunshine(self) -> int:
        """Stop then start Sunshine; returns the pid of the new process."""
        await self.stop_sunshine()
        return await self.start_sunshine()

    async def stop_sunshine(self) -> None:
        """Run the stop command, ignoring any failure.

        Sunshine may not be running, in which case e.g. ``killall`` exits 1.
        """
        cmd: Command = self.config.stop_command
        logger.info("Running stopSunshine command: %s", cmd)
        try:
            res = await self._launcher.run_and_wait(cmd)
        except CommandLaunchError as e:
            logger.warning("stopSunshine encountered an error - ignoring: %s", e)
            return
        if not res.ok:
            logger.info("stopSunshine exited with status %d - ignoring", res.returncode)
            return
        logger.info("stopSunshine command completed without errors")

    async def start_sunshine(self) -> int:
        cmd: Command = self.config.start_command
        logger.info("Running startSunshine command: %s", cmd)
        pid = await self._launcher.launch_detached(cmd)
        logger.info("startSunshine command launched (pid %d)", pid)
        return pid

    async def run_forever(self) -> None:
        """Tick at the configured interval until cancelled or a LogReadError."""
        logger.info("Starting sunrise monitoring service")
        async for _ in ticks(self.config.poll_interval_seconds, sleep=self._sleep):
            await self.tick()
