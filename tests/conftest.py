import asyncio
import os
import shutil
import stat
import tempfile
from pathlib import Path

import pytest

requires_python3 = pytest.mark.skipif(
    shutil.which("python3") is None, reason="python3 is not on PATH"
)


@pytest.fixture
def scratch_root(tmp_path, monkeypatch) -> Path:
    """Point the temp area at an empty directory so leftovers can be counted."""
    root = tmp_path / "scratch"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


class FakeToolchain:
    """Shell scripts standing in for compilers, first on PATH."""

    def __init__(self, bin_dir: Path):
        self.bin_dir = bin_dir

    def add(self, name: str, body: str) -> Path:
        path = self.bin_dir / name
        path.write_text("#!/bin/sh\n" + body)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path


@pytest.fixture
def fake_tools(tmp_path, monkeypatch) -> FakeToolchain:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return FakeToolchain(bin_dir)


# Copies the source to the path after -o/-d, so a shell-script "source" becomes
# the compiled program. A source containing COMPILE_ERROR fails to compile.
FAKE_COMPILER = """\
out=""
src=""
while [ $# -gt 0 ]; do
  case "$1" in
    -o|-d) out="$2"; shift 2 ;;
    --crate-name|--classpath) shift 2 ;;
    -*) shift ;;
    *) src="$1"; shift ;;
  esac
done
if grep -q COMPILE_ERROR "$src"; then
  echo "error: expected ';' in $src" >&2
  exit 1
fi
if [ -d "$out" ]; then
  cp "$src" "$out/Main"
else
  cp "$src" "$out"
  chmod +x "$out"
fi
"""

FAKE_CLASS_RUNNER = """\
# <runner> -cp <dir> <MainClass>
exec sh "$2/Main"
"""

FAKE_SINGLE_COMMAND = """\
# <tool> run <source> ...
if grep -q COMPILE_ERROR "$2"; then
  echo "compile error" >&2
  exit 1
fi
exec sh "$2"
"""

FAKE_BFC = """\
if grep -q COMPILE_ERROR "$1"; then
  echo "unbalanced brackets"
  exit 2
fi
out="./$(basename "$1" .bf)"
cp "$1" "$out"
chmod +x "$out"
"""

FAKE_NIX = """\
# nix eval --file <source> --raw
[ "$4" = "--raw" ] || exit 3
if grep -q COMPILE_ERROR "$3"; then
  echo "error: syntax error, unexpected end of file" >&2
  exit 1
fi
printf '%s' "$(cat "$3")"
"""

# Runs the program as its own child, like `go run` or `dmd -run` do.
FAKE_FORKING_RUNNER = """\
# <tool> run <source> ...
sh "$2"
"""


def process_alive(pid: int) -> bool:
    """True while `pid` runs; a zombie waiting to be reaped counts as dead."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    try:
        with open(f"/proc/{pid}/stat") as stat_file:
            state = stat_file.read().rsplit(")", 1)[1].split()[0]
    except (FileNotFoundError, IndexError):
        return True
    return state != "Z"


async def wait_for_pid(marker: Path, timeout: float = 10.0) -> int:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if marker.exists() and marker.read_text().strip():
            return int(marker.read_text())
        await asyncio.sleep(0.05)
    raise AssertionError(f"{marker} was never written")


async def wait_until_dead(pid: int, timeout: float = 3.0) -> bool:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if not process_alive(pid):
            return True
        await asyncio.sleep(0.05)
    return False
