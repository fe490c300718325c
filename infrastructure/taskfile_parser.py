from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core import Task, command_spec_from_yaml, flatten_commands
from core.errors import TaskfileMalformed
from infrastructure.taskfile_locator import find_taskfile


def _first_line(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    for line in value.splitlines():
        if line.strip():
            return line.strip()
    return ""


class TaskfileParser:
    """Direct reader for the `tasks:` map of a Taskfile.

    Only top-level tasks of the given file are read; includes, variables and
    templating are left to the task binary.
    """

    @classmethod
    def parse_root(cls, root: Path) -> List[Task]:
        path = find_taskfile(root)
        if path is None:
            raise TaskfileMalformed(Path(root) / "Taskfile.yml", "no Taskfile found")
        return cls.parse(path)

    @classmethod
    def parse(cls, filepath: Path) -> List[Task]:
        filepath = Path(filepath)
        try:
            content = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TaskfileMalformed(filepath, f"unreadable: {exc}") from exc
        return cls.parse_text(content, filepath)

    @classmethod
    def parse_text(cls, content: str, filepath: Path = Path("Taskfile.yml")) -> List[Task]:
        try:
            document = yaml.safe_load(content)
            node = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError as exc:
            raise TaskfileMalformed(filepath, f"invalid YAML: {exc}") from exc

        if not isinstance(document, dict):
            raise TaskfileMalformed(filepath, "top level is not a mapping")
        section = document.get("tasks")
        if not isinstance(section, dict):
            raise TaskfileMalformed(filepath, "no tasks map in Taskfile")

        lines = cls._task_lines(node)
        tasks: List[Task] = []
        for name, raw in section.items():
            task = cls._build_task(str(name), raw, lines.get(str(name), 0))
            if task is not None:
                tasks.append(task)
        return tasks

    @staticmethod
    def _task_lines(node: Optional[yaml.Node]) -> Dict[str, int]:
        """Map task names to 1-based declaration lines using composed node marks."""
        if not isinstance(node, yaml.MappingNode):
            return {}
        for key_node, value_node in node.value:
            if getattr(key_node, "value", None) != "tasks":
                continue
            if not isinstance(value_node, yaml.MappingNode):
                return {}
            return {
                str(task_key.value): task_key.start_mark.line + 1
                for task_key, _ in value_node.value
                if isinstance(task_key, yaml.ScalarNode)
            }
        return {}

    @staticmethod
    def _build_task(name: str, raw: Any, line: int) -> Optional[Task]:
        if not name:
            return None
        # Shorthand bodies: `build: go build ./...` or `lint: [cmd, cmd]`.
        if isinstance(raw, (str, list)):
            commands = flatten_commands(command_spec_from_yaml(raw))
            return Task(name=name, commands=tuple(commands), source_line=line)
        if raw is None:
            return Task(name=name, source_line=line)
        if not isinstance(raw, dict):
            return None

        description = _first_line(raw.get("desc")) or _first_line(raw.get("summary"))
        commands = flatten_commands(command_spec_from_yaml(raw.get("cmds")))
        if not commands:
            commands = flatten_commands(command_spec_from_yaml(raw.get("cmd")))
        return Task(name=name, description=description, commands=tuple(commands), source_line=line)


__all__ = ["TaskfileParser"]
