import logging

from .task import Task, TabGroup, SortPolicy, DEFAULT_TAB, TAB_SEPARATOR, DESC_PLACEHOLDER
from .command_spec import Scalar, CommandList, CommandSpec, command_spec_from_yaml, flatten_commands
from .errors import (
    TaskgError,
    RootNotFound,
    ToolMissing,
    TaskfileMalformed,
    ListingFailed,
    DiscoveryFailed,
    RefreshFailed,
)

# The TUI owns the terminal; records only go out through an explicit handler.
logging.getLogger("taskg").addHandler(logging.NullHandler())

__all__ = [
    "Task",
    "TabGroup",
    "SortPolicy",
    "DEFAULT_TAB",
    "TAB_SEPARATOR",
    "DESC_PLACEHOLDER",
    "Scalar",
    "CommandList",
    "CommandSpec",
    "command_spec_from_yaml",
    "flatten_commands",
    "TaskgError",
    "RootNotFound",
    "ToolMissing",
    "TaskfileMalformed",
    "ListingFailed",
    "DiscoveryFailed",
    "RefreshFailed",
]
