"""Exception hierarchy."""

from __future__ import annotations


class SunriseError(Exception):
    """Base class for all sunrise errors."""


class ConfigError(SunriseError):
    """Configuration file is missing, malformed or invalid."""


class LogReadError(SunriseError):
    """The monitored log could not be read. Fatal for the daemon."""


class CommandLaunchError(SunriseError):
    """An external command could not be started at all."""

    def __init__(self, command: object, cause: BaseException) -> None:
        super().__init__(f"failed to launch {command}: {cause}")
        self.command = command
        self.cause = cause


class TimestampParseError(SunriseError, ValueError):
    """A log line does not carry a usable leading timestamp."""


class MissingOpenBracketError(TimestampParseError):
    """Line does not start with '['."""


class MissingCloseBracketError(TimestampParseError):
    """No closing ']' after the opening bracket."""


class InvalidTimestampError(TimestampParseError):
    """Bracketed text is not a YYYY-MM-DD HH:MM:SS.mmm timestamp."""
