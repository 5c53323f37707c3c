"""Configuration model and TOML loader.

The file uses the same keys as the original sunrise.cfg
(``SunriseCheckSeconds``, ``SunshineLogPath`` ...). The snake_case field
names are accepted too.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .commands import Command
from .errors import ConfigError

DEFAULT_CONFIG_PATH = "/etc/sunrise/sunrise.cfg"
CONFIG_PATH_ENV = "SUNRISE_CONFIG"


class SunriseConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    poll_interval_seconds: int = Field(alias="SunriseCheckSeconds", gt=0)
    log_path: Path = Field(alias="SunshineLogPath")
    trigger: str = Field(alias="MonitorIsOffLogLine", min_length=1)
    wake_wait_seconds: int = Field(default=0, alias="WakeMonitorSleepSeconds", ge=0)
    wake_command: Command = Field(alias="WakeMonitorCommand")
    stop_command: Command | None = Field(default=None, alias="StopSunshineCommand")
    start_command: Command | None = Field(default=None, alias="StartSunshineCommand")
    enable_restart: bool = Field(default=False, alias="EnableSunshineRestart")

    @field_validator("log_path", mode="before")
    @classmethod
    def _non_empty_path(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            raise ValueError("log path must not be empty")
        return v

    @field_validator("wake_command", "stop_command", "start_command", mode="before")
    @classmethod
    def _parse_command(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str):
            if not v.strip():
                if info.field_name == "wake_command":
                    raise ValueError("wake command must not be empty")
                return None
            return Command.parse(v)
        return v

    @model_validator(mode="after")
    def _restart_needs_commands(self) -> SunriseConfig:
        if self.enable_restart and (self.stop_command is None or self.start_command is None):
            raise ValueError(
                "StopSunshineCommand and StartSunshineCommand are required "
                "when EnableSunshineRestart is true"
            )
        return self


def default_config_path() -> Path:
    """Return $SUNRISE_CONFIG if set, else the system-wide default."""
    return Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)


def load_config(path: str | Path | None = None) -> SunriseConfig:
    """Read and validate a TOML config file."""
    p = Path(path) if path is not None else default_config_path()
    try:
        with p.open("rb") as f:
            raw = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Error reading config file {p}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Error parsing TOML config file {p}: {e}") from e

    try:
        return SunriseConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {p}: {e}") from e
