import asyncio
import os
import signal
from dataclasses import dataclass
from pathlib import Path

from core.errors import ScratchIoError
from core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int | None
    stdout: bytes
    stderr: bytes
    signal: int | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def _kill(process: asyncio.subprocess.Process) -> None:
    # the child leads its own session, so this also reaches programs a
    # toolchain forked (go run, dmd -run, launcher scripts)
    if process.stdin is not None:
        process.stdin.close()
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


async def run_process(
    argv: list[str], stdin: bytes = b"", cwd: Path | None = None
) -> ProcessResult:
    """
    Spawn `argv` with all three streams piped, feed it `stdin` once, close the
    pipe and collect stdout and stderr until the child exits.

    stdin is written while stdout and stderr are drained, so a child that
    fills its output pipe before reading all input does not deadlock.
    If the awaiting task is cancelled the child is killed before the
    cancellation propagates.
    """
    logger.debug("Spawning %s (cwd=%s)", argv, cwd)
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            start_new_session=True,
        )
    except OSError as e:
        raise ScratchIoError(f"failed to spawn {argv[0]}: {e}") from e

    try:
        stdout, stderr = await process.communicate(input=stdin)
    except asyncio.CancelledError:
        logger.debug("Cancelled, killing pid %s", process.pid)
        _kill(process)
        await process.wait()
        raise

    returncode = process.returncode
    logger.debug("Process %s exited with %s", process.pid, returncode)

    if returncode is not None and returncode < 0:
        return ProcessResult(
            exit_code=None, stdout=stdout, stderr=stderr, signal=-returncode
        )
    return ProcessResult(exit_code=returncode, stdout=stdout, stderr=stderr)
