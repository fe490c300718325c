from pathlib import Path
from typing import Dict, Optional


class TaskgError(Exception):
    """Base class for discovery and browsing failures."""


class RootNotFound(TaskgError):
    def __init__(self, start: Path):
        self.start = Path(start)
        super().__init__(f"no Taskfile found in {self.start} or its parent directories")


class ToolMissing(TaskgError):
    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(f"{binary!r} binary not found in PATH")


class TaskfileMalformed(TaskgError):
    """A Taskfile exists but cannot be read as a task map."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.name}: {reason}")


class ListingFailed(TaskgError):
    """An external listing invocation failed or printed unusable output."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"`{command}` failed: {reason}")


class DiscoveryFailed(TaskgError):
    def __init__(self, failures: Dict[str, Optional[BaseException]]):
        self.failures = dict(failures)
        self.json_error = self.failures.get("json")
        self.plain_error = self.failures.get("plain")
        self.yaml_error = self.failures.get("yaml")
        super().__init__(
            f"failed to discover tasks (json: {self.json_error}; plain: {self.plain_error}; yaml: {self.yaml_error})"
        )


class RefreshFailed(TaskgError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(str(cause))


__all__ = [
    "TaskgError",
    "RootNotFound",
    "ToolMissing",
    "TaskfileMalformed",
    "ListingFailed",
    "DiscoveryFailed",
    "RefreshFailed",
]
