"""Subprocess wrapper for git commands.

Every git invocation goes through ``run_git`` so that failures and timeouts
surface as ``GitCommandError`` with credentials stripped from the message.
"""

import asyncio
import logging
import re
from typing import Dict, Optional, Sequence

from shipyard.common.config.config import GIT_TIMEOUT_SECONDS
from shipyard.common.exception.exceptions import GitCommandError

logger = logging.getLogger(__name__)

_URL_CREDENTIALS = re.compile(r"(https?://)[^/@\s]+@")
_AUTH_HEADER = re.compile(r"(?i)(authorization:\s*\w+\s+)\S+")


def redact(text: str) -> str:
    """Mask credentials embedded in URLs and Authorization headers."""
    text = _URL_CREDENTIALS.sub(r"\1***@", text)
    return _AUTH_HEADER.sub(r"\1***", text)


async def run_git(
    args: Sequence[str],
    cwd: Optional[str] = None,
    timeout: Optional[float] = GIT_TIMEOUT_SECONDS,
    config: Optional[Dict[str, str]] = None,
    quiet: bool = False,
) -> str:
    """Run a git command and return its stdout.

    Args:
        args: Arguments after ``git``.
        cwd: Working directory for the command.
        timeout: Seconds before the process is killed, None to wait forever.
        config: One-off ``-c key=value`` settings.
        quiet: Log a non-zero exit at debug level, for probing commands.

    Returns:
        Decoded standard output.

    Raises:
        GitCommandError: If git exits non-zero or the timeout elapses.
    """
    command = []
    for key, value in (config or {}).items():
        command.extend(["-c", f"{key}={value}"])
    command.extend(args)

    printable = [redact(part) for part in command]
    logger.debug(f"Running git {' '.join(printable)}" + (f" in {cwd}" if cwd else ""))

    process = await asyncio.create_subprocess_exec(
        "git",
        *command,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.error(f"git {' '.join(printable)} timed out after {timeout}s")
        raise GitCommandError(printable, None)

    if process.returncode != 0:
        error = GitCommandError(printable, process.returncode, redact(stderr.decode(errors="replace")))
        if quiet:
            logger.debug(str(error))
        else:
            logger.error(str(error))
        raise error

    return stdout.decode(errors="replace")
