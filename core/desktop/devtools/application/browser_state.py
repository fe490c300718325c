"""Interactive browser state machine.

Owns the task set, the tab partition, the filtered view and the viewport.
Every input (key, mouse, resize, refresh completion, tick) goes through one
of the public methods below; after each call the selection is inside the
visible window and the active tab is a label present in `tabs`.
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from core import SortPolicy, TabGroup, Task
from core.errors import RefreshFailed, RootNotFound, ToolMissing
from core.desktop.devtools.application import viewport
from core.desktop.devtools.application.tab_partition import order_tasks, partition, tab_title
from core.desktop.devtools.application.task_filter import filter_source, filter_tasks
from core.desktop.devtools.interface.i18n import translate

logger = logging.getLogger("taskg.tui")

STATUS_TTL = 3.0
DOUBLE_CLICK_SECONDS = 0.4
DEFAULT_TERMINAL_WIDTH = 100

# Single keys that keep their command meaning instead of starting a search.
RESERVED_KEYS = frozenset({"q", "j", "k", "r", "/"})
NAVIGATION_KEYS = frozenset({"up", "down", "pageup", "pagedown", "home", "end"})
BROWSE_ONLY_NAVIGATION = {"k": "up", "j": "down"}
NEXT_TAB_KEYS = frozenset({"tab", "right"})
PREV_TAB_KEYS = frozenset({"s-tab", "left"})


class BrowserMode(Enum):
    BROWSING = "browsing"
    SEARCHING = "searching"


class Effect(Enum):
    NONE = "none"
    QUIT = "quit"
    COMMIT = "commit"
    REFRESH = "refresh"


class EmptyState(Enum):
    NONE = "none"
    NO_TASKFILE = "no_taskfile"
    TOOL_MISSING = "tool_missing"
    DISCOVERY_FAILED = "discovery_failed"
    NO_TASKS = "no_tasks"
    NO_MATCHES = "no_matches"


def _is_text_key(key: str) -> bool:
    return isinstance(key, str) and len(key) == 1 and key.isprintable()


class BrowserState:
    def __init__(
        self,
        tasks: Optional[Sequence[Task]] = None,
        *,
        sort_policy: SortPolicy = SortPolicy.DECLARATION,
        width: int = 0,
        height: int = 0,
        row_height: int = viewport.DEFAULT_ROW_HEIGHT,
        translate_fn: Callable[..., str] = translate,
        clock: Callable[[], float] = time.time,
    ):
        self._t = translate_fn
        self._clock = clock
        self.all_tasks: List[Task] = order_tasks(tasks or [], SortPolicy.DECLARATION)
        self.sort_policy = sort_policy
        self.tabs: List[TabGroup] = []
        self.active_tab: str = ""
        self.mode = BrowserMode.BROWSING
        self.search_query: str = ""
        self.visible_tasks: List[Task] = []
        self.selected_index: int = 0
        self.scroll_offset: int = 0
        self.tab_offset: int = 0
        self.width = width
        self.height = height
        self.row_height = max(1, row_height)
        self.status_message: str = ""
        self.status_is_error: bool = False
        self.status_expires: float = 0.0
        self.error_kind: EmptyState = EmptyState.NONE
        self.error_message: str = ""
        self.refresh_in_flight: bool = False
        self.chosen_task: Optional[str] = None
        self._last_click_index: Optional[int] = None
        self._last_click_time: float = 0.0
        self._rebuild()

    # ------------------------------------------------------------ derived

    @property
    def search_visible(self) -> bool:
        return self.mode is BrowserMode.SEARCHING or bool(self.search_query)

    @property
    def selected_task(self) -> Optional[Task]:
        if not self.visible_tasks:
            return None
        return self.visible_tasks[self.selected_index]

    def tab_labels(self) -> List[str]:
        return [g.label for g in self.tabs]

    def active_tab_index(self) -> int:
        for idx, group in enumerate(self.tabs):
            if group.label == self.active_tab:
                return idx
        return 0

    def active_group(self) -> Optional[TabGroup]:
        if not self.tabs:
            return None
        return self.tabs[self.active_tab_index()]

    def visible_rows(self) -> int:
        return viewport.visible_row_count(self.height, len(self.tabs), self.search_visible, self.row_height)

    def window(self) -> List[Task]:
        end = self.scroll_offset + self.visible_rows()
        return self.visible_tasks[self.scroll_offset:end]

    def tab_widths(self) -> List[int]:
        return viewport.tab_widths([tab_title(label) for label in self.tab_labels()])

    def strip_width(self) -> int:
        return viewport.strip_width(self.width if self.width > 0 else DEFAULT_TERMINAL_WIDTH)

    def empty_state(self) -> EmptyState:
        if self.visible_tasks:
            return EmptyState.NONE
        if self.error_kind is not EmptyState.NONE:
            return self.error_kind
        if not self.all_tasks:
            return EmptyState.NO_TASKS
        return EmptyState.NO_MATCHES

    # ------------------------------------------------------------ rebuilds

    def _rebuild(self, preserve_name: Optional[str] = None) -> None:
        self.tabs = partition(self.all_tasks, self.sort_policy)
        labels = self.tab_labels()
        if self.active_tab not in labels:
            self.active_tab = labels[0] if labels else ""
        self._ensure_active_tab_visible()
        self._apply_filter(preserve_name)

    def _apply_filter(self, preserve_name: Optional[str] = None) -> None:
        source = filter_source(self.all_tasks, self.active_group(), self.search_query, self.sort_policy)
        self.visible_tasks = list(filter_tasks(source, self.search_query))
        if preserve_name:
            for idx, task in enumerate(self.visible_tasks):
                if task.name == preserve_name:
                    self.selected_index = idx
                    break
        self._clamp()

    def _clamp(self) -> None:
        total = len(self.visible_tasks)
        if total == 0:
            self.selected_index = 0
            self.scroll_offset = 0
            return
        self.selected_index = max(0, min(self.selected_index, total - 1))
        self.scroll_offset = viewport.ensure_visible(
            self.selected_index, self.scroll_offset, total, self.visible_rows()
        )

    def _ensure_active_tab_visible(self) -> None:
        if not viewport.tabs_visible(len(self.tabs)):
            self.tab_offset = 0
            return
        self.tab_offset = viewport.ensure_tab_visible(
            self.active_tab_index(), self.tab_offset, self.tab_widths(), self.strip_width()
        )

    # ------------------------------------------------------------ task set

    def set_error(self, kind: EmptyState, message: str) -> None:
        self.error_kind = kind
        self.error_message = message

    def apply_startup_error(self, exc: BaseException) -> None:
        """Record a construction-time failure as a standing empty state."""
        if isinstance(exc, RootNotFound):
            self.set_error(EmptyState.NO_TASKFILE, self._t("ERR_NO_TASKFILE"))
        elif isinstance(exc, ToolMissing):
            self.set_error(EmptyState.TOOL_MISSING, self._t("ERR_TOOL_MISSING", binary=exc.binary))
        else:
            self.set_error(EmptyState.DISCOVERY_FAILED, self._t("ERR_DISCOVERY_FAILED", error=exc))

    def replace_tasks(self, tasks: Sequence[Task]) -> None:
        keep = self.selected_task.name if self.selected_task else None
        self.all_tasks = order_tasks(tasks, SortPolicy.DECLARATION)
        if self.all_tasks:
            self.set_error(EmptyState.NONE, "")
        else:
            self.set_error(EmptyState.NO_TASKS, self._t("ERR_NO_TASKS"))
        self._rebuild(preserve_name=keep)

    def begin_refresh(self) -> bool:
        if self.refresh_in_flight:
            return False
        self.refresh_in_flight = True
        return True

    def finish_refresh(self, tasks: Optional[Sequence[Task]] = None, error: Optional[BaseException] = None) -> None:
        """Apply a refresh completion; failures keep the current task set."""
        self.refresh_in_flight = False
        if error is not None:
            failure = error if isinstance(error, RefreshFailed) else RefreshFailed(error)
            logger.warning("refresh failed: %s", failure.cause)
            self.set_status(self._t("STATUS_REFRESH_FAILED", error=failure), error=True)
            return
        tasks = list(tasks or [])
        self.replace_tasks(tasks)
        self.set_status(self._t("STATUS_REFRESHED", count=len(tasks)))

    def request_refresh(self) -> Effect:
        if not self.begin_refresh():
            self.set_status(self._t("STATUS_REFRESH_BUSY"))
            return Effect.NONE
        self.set_status(self._t("STATUS_REFRESHING"))
        return Effect.REFRESH

    # ------------------------------------------------------------ status

    def set_status(self, message: str, ttl: float = STATUS_TTL, *, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.status_expires = self._clock() + ttl

    def current_status(self, now: Optional[float] = None) -> str:
        ts = self._clock() if now is None else now
        if self.status_message and ts < self.status_expires:
            return self.status_message
        return ""

    def tick(self, now: Optional[float] = None) -> bool:
        """Expire the transient notice; returns True when something changed."""
        ts = self._clock() if now is None else now
        if self.status_message and ts >= self.status_expires:
            self.status_message = ""
            self.status_is_error = False
            return True
        return False

    # ------------------------------------------------------------ movement

    def move_selection(self, delta: int) -> None:
        total = len(self.visible_tasks)
        if total <= 0:
            self.selected_index = 0
            return
        self.selected_index = max(0, min(self.selected_index + delta, total - 1))
        self._clamp()

    def navigate(self, key: str) -> None:
        step = self.visible_rows()
        if key == "up":
            self.move_selection(-1)
        elif key == "down":
            self.move_selection(1)
        elif key == "pageup":
            self.move_selection(-step)
        elif key == "pagedown":
            self.move_selection(step)
        elif key == "home":
            self.move_selection(-len(self.visible_tasks))
        elif key == "end":
            self.move_selection(len(self.visible_tasks))

    def select_tab(self, index: int) -> None:
        if not viewport.tabs_visible(len(self.tabs)):
            return
        index = max(0, min(index, len(self.tabs) - 1))
        self.active_tab = self.tabs[index].label
        self._ensure_active_tab_visible()
        self._apply_filter()

    def next_tab(self) -> None:
        if len(self.tabs) > 1:
            self.select_tab(self.active_tab_index() + 1)

    def prev_tab(self) -> None:
        if len(self.tabs) > 1:
            self.select_tab(self.active_tab_index() - 1)

    def toggle_sort(self) -> None:
        keep = self.selected_task.name if self.selected_task else None
        self.sort_policy = self.sort_policy.toggled()
        self._rebuild(preserve_name=keep)
        label_key = "SORT_ALPHA" if self.sort_policy is SortPolicy.ALPHABETICAL else "SORT_FILE"
        self.set_status(self._t("STATUS_SORTED", mode=self._t(label_key)))

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._ensure_active_tab_visible()
        self._clamp()

    def set_row_height(self, row_height: int) -> None:
        self.row_height = max(1, int(row_height))
        self._clamp()

    # ------------------------------------------------------------ modes

    def _set_query(self, query: str) -> None:
        self.search_query = query
        self._apply_filter()

    def start_search(self, seed: str = "") -> None:
        self.mode = BrowserMode.SEARCHING
        self._set_query(seed)

    def cancel_search(self) -> None:
        self.mode = BrowserMode.BROWSING
        self._set_query("")

    def commit(self) -> Effect:
        task = self.selected_task
        if task is None:
            return Effect.NONE
        self.chosen_task = task.name
        return Effect.COMMIT

    def should_run(self) -> bool:
        return bool(self.chosen_task)

    def task_to_run(self) -> str:
        return self.chosen_task or ""

    # ------------------------------------------------------------ keys

    def handle_key(self, key: str) -> Effect:
        """Dispatch a key: global, navigation and tab keys first, then text."""
        for handler in (self._handle_global_key, self._handle_navigation_key, self._handle_tab_key):
            effect = handler(key)
            if effect is not None:
                return effect
        if self.mode is BrowserMode.SEARCHING:
            return self._handle_search_key(key)
        return self._handle_browse_key(key)

    def _handle_global_key(self, key: str) -> Optional[Effect]:
        if key == "c-c":
            return Effect.QUIT
        if key == "c-s":
            self.toggle_sort()
            return Effect.NONE
        if key == "c-r":
            return self.request_refresh()
        return None

    def _handle_navigation_key(self, key: str) -> Optional[Effect]:
        if self.mode is BrowserMode.BROWSING:
            key = BROWSE_ONLY_NAVIGATION.get(key, key)
        if key not in NAVIGATION_KEYS:
            return None
        self.navigate(key)
        return Effect.NONE

    def _handle_tab_key(self, key: str) -> Optional[Effect]:
        if key in NEXT_TAB_KEYS:
            self.next_tab()
            return Effect.NONE
        if key in PREV_TAB_KEYS:
            self.prev_tab()
            return Effect.NONE
        return None

    def _handle_search_key(self, key: str) -> Effect:
        if key == "escape":
            self.cancel_search()
            return Effect.NONE
        if key in ("enter", "c-m"):
            self.mode = BrowserMode.BROWSING
            if self.visible_tasks:
                return self.commit()
            self._clamp()
            return Effect.NONE
        if key in ("backspace", "c-h"):
            if self.search_query:
                self._set_query(self.search_query[:-1])
            return Effect.NONE
        if key == "c-u":
            self._set_query("")
            return Effect.NONE
        if _is_text_key(key):
            self._set_query(self.search_query + key)
        return Effect.NONE

    def _handle_browse_key(self, key: str) -> Effect:
        if key == "q":
            return Effect.QUIT
        if key == "r":
            return self.request_refresh()
        if key in ("enter", "c-m"):
            return self.commit()
        if key == "/":
            self.start_search()
            return Effect.NONE
        if key == "escape":
            if self.search_query:
                self._set_query("")
                return Effect.NONE
            return Effect.QUIT
        if _is_text_key(key) and not key.isspace() and key not in RESERVED_KEYS:
            # A retained query is resumed, not replaced.
            self.start_search(self.search_query + key)
        return Effect.NONE

    # ------------------------------------------------------------ mouse

    def row_at(self, y: int) -> Optional[int]:
        return viewport.row_at(
            y,
            tab_count=len(self.tabs),
            search_visible=self.search_visible,
            scroll_offset=self.scroll_offset,
            row_count=len(self.visible_tasks),
            visible_rows=self.visible_rows(),
            row_height=self.row_height,
        )

    def tab_at(self, x: int) -> Optional[int]:
        return viewport.tab_at(x, self.tab_offset, self.tab_widths(), self.strip_width())

    def press(self, x: int, y: int, now: Optional[float] = None) -> Effect:
        """Pointer press: select a tab on the strip row or a list row."""
        if viewport.tabs_visible(len(self.tabs)) and y == viewport.tab_strip_row():
            idx = self.tab_at(x)
            if idx is not None:
                self.select_tab(idx)
            return Effect.NONE
        idx = self.row_at(y)
        if idx is None:
            return Effect.NONE
        ts = self._clock() if now is None else now
        double_click = self._last_click_index == idx and (ts - self._last_click_time) < DOUBLE_CLICK_SECONDS
        self.selected_index = idx
        self._clamp()
        if double_click:
            self._last_click_index = None
            self._last_click_time = 0.0
            return self.commit()
        self._last_click_index = idx
        self._last_click_time = ts
        return Effect.NONE

    def drag(self, x: int, y: int) -> Effect:
        """Press-and-drag that lands on the selected row commits it."""
        idx = self.row_at(y)
        if idx is not None and self.visible_tasks and idx == self.selected_index:
            return self.commit()
        return Effect.NONE

    def scroll(self, delta: int) -> None:
        self.move_selection(delta)


__all__ = [
    "BrowserState",
    "BrowserMode",
    "Effect",
    "EmptyState",
    "RESERVED_KEYS",
    "STATUS_TTL",
    "DOUBLE_CLICK_SECONDS",
]
