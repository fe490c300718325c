from pathlib import Path
from typing import Optional, Union

from core.errors import RootNotFound

# Lookup order inside one directory; the first existing name wins.
TASKFILE_CANDIDATES = (
    "Taskfile.yml",
    "Taskfile.yaml",
    "Taskfile.dist.yml",
    "Taskfile.dist.yaml",
    "taskfile.yml",
    "taskfile.yaml",
    "taskfile.dist.yml",
    "taskfile.dist.yaml",
)


def find_taskfile(directory: Union[str, Path]) -> Optional[Path]:
    """Return the Taskfile inside `directory`, if any."""
    base = Path(directory)
    for name in TASKFILE_CANDIDATES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def locate_root(start: Union[str, Path]) -> Path:
    """Walk upward from `start` to the nearest directory holding a Taskfile."""
    current = Path(start).expanduser().resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        if find_taskfile(directory) is not None:
            return directory
    raise RootNotFound(current)


__all__ = ["TASKFILE_CANDIDATES", "find_taskfile", "locate_root"]
