"""Adapter around the external go-task binary."""

import json
import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from core import DESC_PLACEHOLDER, Task
from core.errors import ListingFailed, ToolMissing

DEFAULT_TASK_BINARY = "task"
LIST_TIMEOUT_SECONDS = 30.0

# "* build:      Build the project" / "* db:migrate:   Migrate      (aliases: m)"
_PLAIN_LINE = re.compile(r"^\*\s*(?P<name>\S+?):(?:\s+(?P<desc>.*))?$")
_ALIASES_SUFFIX = re.compile(r"\s*\(aliases?:[^)]*\)\s*$")

logger = logging.getLogger("taskg.cli")


def _clean_description(value: object) -> str:
    text = value.strip() if isinstance(value, str) else ""
    return "" if text == DESC_PLACEHOLDER else text


def parse_json_listing(output: str) -> List[Task]:
    """Parse `task --list-all --json` output into tasks (no command bodies)."""
    try:
        payload = json.loads(output or "")
    except ValueError as exc:
        raise ListingFailed("task --list-all --json", f"invalid JSON: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("tasks"), list):
        raise ListingFailed("task --list-all --json", "missing tasks array")

    tasks: List[Task] = []
    for entry in payload["tasks"]:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        location = entry.get("location") if isinstance(entry.get("location"), dict) else {}
        try:
            line = int(location.get("line") or 0)
        except (TypeError, ValueError):
            line = 0
        tasks.append(Task(name=name, description=_clean_description(entry.get("desc")), source_line=line))
    return tasks


def parse_plain_listing(output: str) -> List[Task]:
    """Parse the bullet lines of `task --list-all`."""
    tasks: List[Task] = []
    for raw_line in (output or "").splitlines():
        match = _PLAIN_LINE.match(raw_line.strip())
        if not match:
            continue
        name = match.group("name").strip()
        if not name:
            continue
        desc = _ALIASES_SUFFIX.sub("", match.group("desc") or "")
        tasks.append(Task(name=name, description=_clean_description(desc)))
    return tasks


class TaskCli:
    def __init__(self, binary: str = DEFAULT_TASK_BINARY, timeout: float = LIST_TIMEOUT_SECONDS):
        self.binary = binary or DEFAULT_TASK_BINARY
        self.timeout = timeout

    def locate(self) -> str:
        path = shutil.which(self.binary)
        if not path:
            raise ToolMissing(self.binary)
        return path

    def _capture(self, args: Sequence[str], root: Path) -> str:
        command = " ".join([self.binary, *args])
        try:
            result = subprocess.run(
                [self.binary, *args],
                cwd=str(root),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolMissing(self.binary) from exc
        except (OSError, ValueError, subprocess.TimeoutExpired) as exc:
            raise ListingFailed(command, str(exc)) from exc
        if result.returncode != 0:
            stderr = (result.stderr or "").strip().splitlines()
            reason = stderr[-1] if stderr else f"exit status {result.returncode}"
            raise ListingFailed(command, reason)
        logger.debug("%s -> %d bytes", command, len(result.stdout or ""))
        return result.stdout or ""

    def list_json(self, root: Path) -> List[Task]:
        return parse_json_listing(self._capture(["--list-all", "--json"], root))

    def list_plain(self, root: Path) -> List[Task]:
        return parse_plain_listing(self._capture(["--list-all"], root))

    def run(self, name: str, args: Optional[Sequence[str]] = None, root: Optional[Path] = None) -> int:
        """Run `task <name> [args...]` attached to the current terminal."""
        argv = [self.binary, name, *(args or [])]
        logger.info("running %s in %s", " ".join(argv), root or ".")
        completed = subprocess.run(argv, cwd=str(root) if root else None, check=False)
        return completed.returncode


__all__ = ["TaskCli", "DEFAULT_TASK_BINARY", "parse_json_listing", "parse_plain_listing"]
