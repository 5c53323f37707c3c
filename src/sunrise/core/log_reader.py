"""Async log snapshot reader."""

from __future__ import annotations

from pathlib import Path

import aiofiles
import aiofiles.os

from .errors import LogReadError
from .models import LogObservation


async def read_log(
    log_path: str | Path,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> LogObservation:
    """Return the current size and every line of the log file.

    Any OS-level failure is raised as LogReadError.
    """
    path = Path(log_path)
    try:
        st = await aiofiles.os.stat(path)
        # Lines end at "\n" only; a stray "\r" stays inside the line.
        async with aiofiles.open(
            path, encoding=encoding, errors=decode_errors, newline="\n"
        ) as f:
            lines = [line.rstrip("\r\n") async for line in f]
    except OSError as e:
        raise LogReadError(f"Unable to read log file {path}: {e}") from e

    return LogObservation(size=st.st_size, lines=tuple(lines))
