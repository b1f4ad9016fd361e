import shutil
from pathlib import Path

from core.errors import ToolMissingError


def resolve_tool(name: str) -> Path:
    """
    Locate an executable on the host search path.
    Raises ToolMissingError if nothing named `name` is found.
    """
    found = shutil.which(name)
    if found is None:
        raise ToolMissingError(name)
    return Path(found).absolute()


def resolve_tools(names) -> dict[str, Path]:
    return {name: resolve_tool(name) for name in dict.fromkeys(names)}
