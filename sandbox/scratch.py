import asyncio
import os
import shutil
import tempfile
from contextlib import ExitStack
from pathlib import Path

from core.errors import ScratchIoError
from core.logging import get_logger

logger = get_logger(__name__)

SCRATCH_PREFIX = "comphub_"


def remove_path(path: Path) -> None:
    """Delete a file or directory tree; a path that is already gone is fine."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except FileNotFoundError:
        pass


def _write_and_close(handle, data: bytes) -> None:
    with handle:
        handle.write(data)


class Scratch:
    """
    Cleanup stack for the temporary files and directories of one submission.

    Every allocation pushes its removal; leaving the `async with` block, by
    return, exception or cancellation, removes everything in reverse order.
    """

    def __init__(self, prefix: str = SCRATCH_PREFIX):
        self.prefix = prefix
        self._stack = ExitStack()

    async def __aenter__(self) -> "Scratch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        try:
            self.close()
        except ScratchIoError:
            if exc is None:
                raise
            logger.warning("Scratch cleanup failed while handling %r", exc)
        return False

    def track(self, path: Path) -> Path:
        """Push removal of `path` onto the stack, e.g. a file a toolchain derives."""
        self._stack.callback(remove_path, path)
        return path

    def close(self) -> None:
        try:
            self._stack.close()
        except OSError as e:
            raise ScratchIoError(f"failed to remove scratch path: {e}") from e

    def temp_file(self, suffix: str, dir: Path | None = None) -> Path:
        try:
            fd, name = tempfile.mkstemp(suffix=suffix, prefix=self.prefix, dir=dir)
            os.close(fd)
        except OSError as e:
            raise ScratchIoError(f"failed to create temp file: {e}") from e
        return self.track(Path(name))

    def temp_dir(self) -> Path:
        try:
            name = tempfile.mkdtemp(prefix=self.prefix)
        except OSError as e:
            raise ScratchIoError(f"failed to create temp dir: {e}") from e
        return self.track(Path(name))

    def artifact_path(self, suffix: str = "") -> Path:
        """
        Reserve a unique path and delete the file behind it, so a toolchain can
        create a fresh file there. Removal stays on the stack.
        """
        path = self.temp_file(suffix)
        try:
            path.unlink()
        except OSError as e:
            raise ScratchIoError(f"failed to release artifact path: {e}") from e
        return path

    async def write_file(
        self,
        suffix: str,
        data: bytes,
        dir: Path | None = None,
        name: str | None = None,
    ) -> Path:
        if name is not None:
            # a fixed name is only unique inside a private directory
            if dir is None:
                raise ValueError("a fixed file name needs a scratch directory")
            path = self.track(dir / name)
        else:
            path = self.temp_file(suffix, dir=dir)

        # open before the await: a write still running after cancellation then
        # goes to an unlinked inode instead of recreating the path
        try:
            handle = path.open("wb")
            await asyncio.to_thread(_write_and_close, handle, data)
        except OSError as e:
            raise ScratchIoError(f"failed to write {path}: {e}") from e
        return path
