"""Single-attempt external process execution.

Both external tools (ffmpeg and whisper.cpp) are run through
``run_process``: one awaited ``asyncio`` subprocess with stdout and stderr
captured. There is no timeout; a hung binary blocks its caller.
"""

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external process run."""

    returncode: int | None
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


async def run_process(program: str, *args: str) -> ProcessResult:
    """Run ``program`` with ``args`` and wait for it to exit.

    A program that cannot be launched (missing binary, no execute
    permission) is reported as a failed result with ``returncode=None``
    rather than raised, so callers handle every failure the same way.

    Args:
        program: Executable name or path.
        *args: Arguments passed verbatim (no shell).

    Returns:
        ProcessResult with decoded output streams.
    """
    logger.debug("Running %s %s", program, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        logger.error("Failed to run process %s: %s", program, exc)
        return ProcessResult(returncode=None, stderr=str(exc))

    stdout, stderr = await proc.communicate()
    return ProcessResult(
        returncode=proc.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
