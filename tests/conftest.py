from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from sunrise.core.commands import Command, CommandResult
from sunrise.core.config import SunriseConfig
from sunrise.core.errors import CommandLaunchError

TRIGGER = "Couldn't find any working display"


class FakeLauncher:
    """Records commands instead of running them."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.returncodes: dict[str, int] = {}
        self.unlaunchable: set[str] = set()

    async def run_and_wait(self, command: Command) -> CommandResult:
        self.calls.append(("wait", command.program))
        if command.program in self.unlaunchable:
            raise CommandLaunchError(command, FileNotFoundError(command.program))
        return CommandResult(command=command, returncode=self.returncodes.get(command.program, 0))

    async def launch_detached(self, command: Command) -> int:
        self.calls.append(("detach", command.program))
        if command.program in self.unlaunchable:
            raise CommandLaunchError(command, FileNotFoundError(command.program))
        return 4242


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def write_sunshine_log() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SunriseConfig]:
    def _make(**overrides: Any) -> SunriseConfig:
        values: dict[str, Any] = {
            "SunriseCheckSeconds": 5,
            "SunshineLogPath": str(tmp_path / "sunshine.log"),
            "MonitorIsOffLogLine": TRIGGER,
            "WakeMonitorSleepSeconds": 3,
            "WakeMonitorCommand": "wake-monitor --force",
            "StopSunshineCommand": "killall sunshine",
            "StartSunshineCommand": "sunshine",
            "EnableSunshineRestart": False,
        }
        values.update(overrides)
        return SunriseConfig.model_validate(values)

    return _make


@pytest.fixture
def local_tz(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str], None]]:
    """Switch the process's local time zone for the duration of a test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()
