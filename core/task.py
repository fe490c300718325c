from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

DEFAULT_TAB = "main"
TAB_SEPARATOR = "-"
# `task --list` prints "-" for tasks declared without a description.
DESC_PLACEHOLDER = "-"


class SortPolicy(Enum):
    DECLARATION = "file"
    ALPHABETICAL = "alpha"

    def toggled(self) -> "SortPolicy":
        if self is SortPolicy.DECLARATION:
            return SortPolicy.ALPHABETICAL
        return SortPolicy.DECLARATION


@dataclass(frozen=True)
class Task:
    """A task discovered from a Taskfile.

    `source_line` is the declaration line in the originating file (0 when the
    source did not report one) and only drives declaration ordering.
    """

    name: str
    description: str = ""
    commands: Tuple[str, ...] = field(default_factory=tuple)
    source_line: int = 0

    @property
    def has_description(self) -> bool:
        return bool(self.description) and self.description != DESC_PLACEHOLDER

    @property
    def tab_label(self) -> str:
        prefix, sep, _ = self.name.partition(TAB_SEPARATOR)
        if sep and prefix:
            return prefix
        return DEFAULT_TAB

    def haystack(self) -> str:
        return " ".join([self.name, self.description, " ".join(self.commands)])


@dataclass(frozen=True)
class TabGroup:
    label: str
    members: Tuple[Task, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.members)

    def names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.members)


__all__ = ["Task", "TabGroup", "SortPolicy", "DEFAULT_TAB", "TAB_SEPARATOR", "DESC_PLACEHOLDER"]
