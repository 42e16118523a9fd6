import asyncio
from pathlib import Path
from typing import Optional, Tuple, Union

from openv.errors import ProcessError
from openv.logging import get_logger

logger = get_logger(__name__)


async def async_subprocess_run(
    *args: str, cwd: Optional[Union[str, Path]] = None
) -> Tuple[int, str, str]:
    """
    Run a command asynchronously and return its exit code, stdout, and stderr.

    :param args: Command and arguments to run
    :param cwd: Working directory for the child process
    :return: Tuple of (returncode, stdout, stderr)
    """
    proc = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    return proc.returncode, stdout.decode(errors="replace"), stderr.decode(errors="replace")


async def run_checked(*args: str, cwd: Optional[Union[str, Path]] = None) -> str:
    """Run a helper tool, raising ProcessError on a non-zero exit."""
    command = " ".join(args)
    logger.debug("running_command", command=command, cwd=str(cwd) if cwd else None)

    returncode, stdout, stderr = await async_subprocess_run(*args, cwd=cwd)
    if returncode != 0:
        logger.error(
            "command_failed", command=command, returncode=returncode, stderr=stderr
        )
        raise ProcessError(command, returncode, stderr)

    return stdout
