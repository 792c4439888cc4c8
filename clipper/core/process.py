"""
Asynchronous execution of external command-line tools.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Union

from clipper.utils.logger import logging


class ProcessTimeout(Exception):
    """The process did not finish within its time budget."""


class ProcessOutputLimit(Exception):
    """The process wrote more output than allowed."""


@dataclass
class ProcessResult:
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def stderr_tail(self, limit: int = 500) -> str:
        return self.stderr.decode("utf-8", errors="replace")[-limit:].strip()


async def _read_limited(stream: Optional[asyncio.StreamReader], limit: Optional[int]) -> bytes:
    if stream is None:
        return b""
    chunks = []
    total = 0
    while True:
        chunk = await stream.read(65536)
        if not chunk:
            break
        total += len(chunk)
        if limit is not None and total > limit:
            raise ProcessOutputLimit(f"output exceeded {limit} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def kill_process(process: asyncio.subprocess.Process) -> None:
    """Kill a process if it is still running and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_process(
    cmd: List[str],
    timeout: float,
    stdin: Union[int, None] = None,
    max_output: Optional[int] = None,
) -> ProcessResult:
    """
    Run a command and collect its output.

    Args:
        cmd: Program and arguments (no shell is involved)
        timeout: Seconds before the process is killed
        stdin: Optional file descriptor to use as standard input
        max_output: Optional ceiling for stdout and stderr, each in bytes

    Returns:
        ProcessResult with exit status and captured output

    Raises:
        FileNotFoundError: if the program does not exist
        ProcessTimeout: if the timeout expires
        ProcessOutputLimit: if the output ceiling is exceeded
    """
    logging.debug(f"Running: {' '.join(cmd)}")
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=stdin if stdin is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    async def communicate():
        stdout, stderr = await asyncio.gather(
            _read_limited(process.stdout, max_output),
            _read_limited(process.stderr, max_output),
        )
        await process.wait()
        return stdout, stderr

    try:
        stdout, stderr = await asyncio.wait_for(communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await kill_process(process)
        raise ProcessTimeout(f"{cmd[0]} timed out after {timeout:.0f}s")
    except ProcessOutputLimit:
        await kill_process(process)
        raise

    return ProcessResult(returncode=process.returncode, stdout=stdout, stderr=stderr)
