"""Group tasks into tabs by name prefix."""

from typing import Dict, List, Sequence

from core import DEFAULT_TAB, SortPolicy, TabGroup, Task


def order_tasks(tasks: Sequence[Task], policy: SortPolicy) -> List[Task]:
    if policy is SortPolicy.ALPHABETICAL:
        return sorted(tasks, key=lambda t: t.name)
    return sorted(tasks, key=lambda t: t.source_line)


def partition(tasks: Sequence[Task], policy: SortPolicy = SortPolicy.DECLARATION) -> List[TabGroup]:
    # Tab order always starts from declaration order, whatever the policy.
    buckets: Dict[str, List[Task]] = {}
    for task in order_tasks(tasks, SortPolicy.DECLARATION):
        buckets.setdefault(task.tab_label, []).append(task)

    labels = list(buckets)
    if policy is SortPolicy.ALPHABETICAL:
        labels.sort()
    if DEFAULT_TAB in buckets:
        labels.remove(DEFAULT_TAB)
        labels.insert(0, DEFAULT_TAB)

    return [TabGroup(label=label, members=tuple(order_tasks(buckets[label], policy))) for label in labels]


def flatten(groups: Sequence[TabGroup]) -> List[Task]:
    return [task for group in groups for task in group.members]


def tab_labels(groups: Sequence[TabGroup]) -> List[str]:
    return [g.label for g in groups]


def tab_title(label: str) -> str:
    if label == DEFAULT_TAB:
        return "Main"
    return label[:1].upper() + label[1:].lower()


__all__ = ["order_tasks", "partition", "flatten", "tab_labels", "tab_title"]
