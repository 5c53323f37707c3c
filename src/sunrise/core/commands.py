"""External command values and the process launcher."""

from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from .errors import CommandLaunchError

logger = logging.getLogger(__name__)


class Command(BaseModel):
    """A program plus its arguments, resolved once from a config string."""

    model_config = ConfigDict(frozen=True)

    program: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @classmethod
    def parse(cls, s: str) -> Command:
        """Split ``s`` the way a POSIX shell would (quotes group words)."""
        tokens = shlex.split(s, posix=True)
        if not tokens:
            raise ValueError("command must not be empty")
        return cls(program=tokens[0], args=tuple(tokens[1:]))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


class CommandResult(BaseModel):
    """Exit status of a command that ran to completion."""

    model_config = ConfigDict(frozen=True)

    command: Command
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessLauncher(Protocol):
    """Launcher interface used by the orchestrator."""

    async def run_and_wait(self, command: Command) -> CommandResult:
        """Run to completion; raise CommandLaunchError if it cannot start."""
        ...

    async def launch_detached(self, command: Command) -> int:
        """Start without waiting and return the pid; raise CommandLaunchError if it cannot start."""
        ...


class SubprocessLauncher:
    """Launch real OS processes."""

    def __init__(self) -> None:
        # Detached children are kept so they can be reaped once they exit.
        self._detached: list[subprocess.Popen] = []

    async def run_and_wait(self, command: Command) -> CommandResult:
        try:
            proc = await asyncio.create_subprocess_exec(
                *command.argv, stdin=asyncio.subprocess.DEVNULL
            )
        except OSError as e:
            raise CommandLaunchError(command, e) from e

        returncode = await proc.wait()
        return CommandResult(command=command, returncode=returncode)

    async def launch_detached(self, command: Command) -> int:
        self._reap()
        # Popen rather than an asyncio transport: closing the loop would kill
        # an asyncio child, and this one must outlive us.
        try:
            proc = subprocess.Popen(
                command.argv,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise CommandLaunchError(command, e) from e

        self._detached.append(proc)
        return proc.pid

    def _reap(self) -> None:
        running = []
        for proc in self._detached:
            if proc.poll() is None:
                running.append(proc)
            else:
                logger.debug("Detached process %s exited with %s", proc.pid, proc.returncode)
        self._detached = running
