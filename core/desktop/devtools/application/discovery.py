"""Task discovery: reconcile the structured listing, the plain listing and
a direct Taskfile parse into one ordered task set."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from core import Task
from core.errors import DiscoveryFailed, TaskgError
from infrastructure.task_cli import TaskCli
from infrastructure.taskfile_parser import TaskfileParser

logger = logging.getLogger("taskg.discovery")


class StrategyOutcome(Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class ListingStrategy(Protocol):
    name: str

    def list_tasks(self, root: Path) -> List[Task]:
        ...


@dataclass
class StrategyResult:
    name: str
    outcome: StrategyOutcome
    tasks: List[Task] = field(default_factory=list)
    error: Optional[BaseException] = None


@dataclass
class StrategyChainResult:
    results: List[StrategyResult] = field(default_factory=list)

    @property
    def winner(self) -> Optional[StrategyResult]:
        for result in self.results:
            if result.outcome is StrategyOutcome.OK:
                return result
        return None

    @property
    def all_failed(self) -> bool:
        return bool(self.results) and all(r.outcome is StrategyOutcome.FAILED for r in self.results)

    def failures(self) -> Dict[str, Optional[BaseException]]:
        return {r.name: r.error for r in self.results}


class StructuredListing:
    name = "json"

    def __init__(self, cli: TaskCli):
        self.cli = cli

    def list_tasks(self, root: Path) -> List[Task]:
        return self.cli.list_json(root)


class PlainListing:
    name = "plain"

    def __init__(self, cli: TaskCli):
        self.cli = cli

    def list_tasks(self, root: Path) -> List[Task]:
        return self.cli.list_plain(root)


class TaskfileListing:
    name = "yaml"

    def __init__(self, parse_root: Callable[[Path], List[Task]] = TaskfileParser.parse_root):
        self._parse_root = parse_root

    def list_tasks(self, root: Path) -> List[Task]:
        return self._parse_root(root)


def run_strategy(strategy: ListingStrategy, root: Path) -> StrategyResult:
    try:
        tasks = list(strategy.list_tasks(root))
    except TaskgError as exc:
        logger.info("%s listing failed: %s", strategy.name, exc)
        return StrategyResult(strategy.name, StrategyOutcome.FAILED, error=exc)
    except Exception as exc:
        logger.warning("%s listing crashed: %r", strategy.name, exc, exc_info=True)
        return StrategyResult(strategy.name, StrategyOutcome.FAILED, error=exc)
    if not tasks:
        logger.info("%s listing returned no tasks", strategy.name)
        return StrategyResult(strategy.name, StrategyOutcome.EMPTY)
    logger.debug("%s listing returned %d tasks", strategy.name, len(tasks))
    return StrategyResult(strategy.name, StrategyOutcome.OK, tasks=tasks)


def run_strategies(strategies: Sequence[ListingStrategy], root: Path) -> StrategyChainResult:
    """Try strategies in order; stop at the first one that yields tasks."""
    chain = StrategyChainResult()
    for strategy in strategies:
        result = run_strategy(strategy, root)
        chain.results.append(result)
        if result.outcome is StrategyOutcome.OK:
            break
    return chain


def enrich(tasks: Sequence[Task], parsed: Sequence[Task]) -> List[Task]:
    """Fill missing commands/descriptions from a direct parse, by name only."""
    index = {t.name: t for t in parsed}
    enriched: List[Task] = []
    for task in tasks:
        source = index.get(task.name)
        if source is None:
            enriched.append(task)
            continue
        updates = {}
        if not task.commands and source.commands:
            updates["commands"] = source.commands
        if not task.has_description and source.has_description:
            updates["description"] = source.description
        enriched.append(replace(task, **updates) if updates else task)
    return enriched


class TaskDiscovery:
    """Discover tasks for a Taskfile root.

    The structured listing wins when it yields tasks; the plain listing and the
    direct parse are consulted only when every stronger source came back empty
    or failed. A listing result is always enriched from the direct parse.
    """

    def __init__(self, cli: Optional[TaskCli] = None, parser: Optional[TaskfileListing] = None):
        self.cli = cli or TaskCli()
        self.parser = parser or TaskfileListing()

    def strategies(self) -> List[ListingStrategy]:
        return [StructuredListing(self.cli), PlainListing(self.cli), self.parser]

    def discover(self, root: Path) -> List[Task]:
        root = Path(root)
        self.cli.locate()
        chain = run_strategies(self.strategies(), root)
        winner = chain.winner
        if winner is None:
            if chain.all_failed:
                raise DiscoveryFailed(chain.failures())
            logger.info("no tasks discovered under %s", root)
            return []
        if winner.name == self.parser.name:
            return winner.tasks
        return self._enrich(winner.tasks, root)

    def _enrich(self, tasks: List[Task], root: Path) -> List[Task]:
        try:
            parsed = self.parser.list_tasks(root)
        except Exception as exc:
            logger.debug("enrichment skipped: %s", exc)
            return tasks
        return enrich(tasks, parsed)


def discover_tasks(root: Path, binary: Optional[str] = None) -> List[Task]:
    return TaskDiscovery(TaskCli(binary) if binary else None).discover(root)


__all__ = [
    "StrategyOutcome",
    "StrategyResult",
    "StrategyChainResult",
    "StructuredListing",
    "PlainListing",
    "TaskfileListing",
    "TaskDiscovery",
    "run_strategy",
    "run_strategies",
    "enrich",
    "discover_tasks",
]
