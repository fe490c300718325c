from typing import List, Optional, Sequence

from core import SortPolicy, TabGroup, Task
from core.desktop.devtools.application.tab_partition import order_tasks


def filter_tasks(source: Sequence[Task], query: str) -> Sequence[Task]:
    """Case-insensitive substring match over name, description and commands.

    An empty query returns `source` itself.
    """
    if not query:
        return source
    needle = query.lower()
    return [t for t in source if needle in t.haystack().lower()]


def filter_source(
    all_tasks: Sequence[Task],
    active_group: Optional[TabGroup],
    query: str,
    policy: SortPolicy,
) -> List[Task]:
    """A non-empty query searches every task; otherwise only the active tab."""
    if query:
        return order_tasks(all_tasks, policy)
    if active_group is None:
        return []
    return list(active_group.members)


__all__ = ["filter_tasks", "filter_source"]
