"""Rendering helpers for TaskBrowserTUI to keep the class slim.

The whole screen is one formatted-text block so mouse rows map straight onto
the offsets in `viewport`.
"""

from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Task
from core.desktop.devtools.application import viewport
from core.desktop.devtools.application.browser_state import BrowserMode, EmptyState
from core.desktop.devtools.application.tab_partition import tab_title
from core.desktop.devtools.interface.constants import EXAMPLE_TASKFILE, LOGO_LINES
from core.desktop.devtools.interface.tui_footer import build_footer_lines
from core.desktop.devtools.interface.tui_status import build_status_line
from util.text_width import display_width, ellipsize, trim_display

Line = List[Tuple[str, str]]

ROW_INDENT = "    "
SEARCH_CURSOR = "▏"


def _line_width(line: Line) -> int:
    return sum(display_width(text) for _, text in line)


def fit_line(line: Line, width: int) -> Line:
    """Cut a fragment line to `width` cells."""
    out: Line = []
    used = 0
    for style, text in line:
        room = width - used
        if room <= 0:
            break
        w = display_width(text)
        if w <= room:
            out.append((style, text))
            used += w
        else:
            out.append((style, trim_display(text, room)))
            break
    return out


def _rule(width: int) -> Line:
    return [("class:border", "─" * max(0, width))]


def render_header(tui, width: int) -> List[Line]:
    title = " " + tui._t("APP_TITLE")
    project = " " + (tui.project_name or tui._t("NO_PROJECT"))
    logo_w = max(display_width(l) for l in LOGO_LINES)
    lines: List[Line] = []
    for text, style, logo in ((title, "class:title", LOGO_LINES[0]), (project, "class:text.dim", LOGO_LINES[1])):
        gap = max(1, width - display_width(text) - logo_w)
        lines.append([(style, text), ("", " " * gap), ("class:logo", logo)])
    return [fit_line(line, width) for line in lines]


def render_tab_strip(tui, width: int) -> List[Line]:
    state = tui.state
    labels = state.tab_labels()
    titles = [tab_title(label) for label in labels]
    widths = viewport.tab_widths(titles)
    start, end, more_left, more_right = viewport.visible_tab_span(
        state.tab_offset, widths, state.strip_width()
    )
    active = state.active_tab_index()
    line: Line = [("", " " * viewport.STRIP_MARGIN)]
    if more_left:
        line.append(("class:tab.arrow", "◀ "))
    for idx in range(start, end):
        if idx > start:
            line.append(("", " " * viewport.TAB_GAP))
        if idx == active:
            line.append(("class:highlight", "▎"))
            line.append(("class:tab.active", f" {titles[idx]} "))
        else:
            line.append(("class:tab.inactive", f"  {titles[idx]} "))
    if more_right:
        line.append(("class:tab.arrow", " ▶"))
    return [fit_line(line, width), _rule(width)]


def render_search_box(tui, width: int) -> List[Line]:
    state = tui.state
    if state.mode is BrowserMode.SEARCHING:
        line: Line = [
            ("class:search", " " + tui._t("SEARCH_PROMPT")),
            ("class:text", state.search_query),
            ("class:highlight", SEARCH_CURSOR),
        ]
    else:
        line = [("class:search", " " + tui._t("SEARCH_RETAINED", query=state.search_query))]
    return [fit_line(line, width), _rule(width)]


def render_task_row(task: Task, selected: bool, width: int) -> List[Line]:
    """Two lines per task: marker, name and description, then its commands."""
    if selected:
        first: Line = [
            ("class:highlight", "▎"),
            ("", " "),
            ("class:highlight", "•"),
            ("", " "),
            ("class:highlight.name", task.name),
        ]
    else:
        first = [("", "  "), ("class:accent", "•"), ("", " "), ("class:task.name", task.name)]
    if task.has_description:
        first.append(("class:text.dim", " - "))
        first.append(("class:task.desc", task.description))
    if _line_width(first) > width:
        head = fit_line(first, max(0, width - 1))
        first = head + [("class:text.dim", "…")]

    if task.commands:
        cmd_text = "[" + " | ".join(task.commands) + "]"
        second: Line = [("", ROW_INDENT), ("class:task.cmds", ellipsize(cmd_text, max(1, width - len(ROW_INDENT))))]
    else:
        second = [("", "")]
    return [first, second]


def measure_row_height(tui=None) -> int:
    """Lines one list entry occupies, measured on a sample row."""
    sample = Task(name="sample-task", description="Sample description", commands=("echo hello", "ls -la"))
    width = tui.get_terminal_width() if tui is not None else 100
    return len(render_task_row(sample, False, max(1, width)))


def _empty_state_lines(tui, width: int) -> List[Line]:
    state = tui.state
    kind = state.empty_state()
    dim = "class:text.dim"
    lines: List[Line] = []

    def add(style: str, text: str) -> None:
        for raw in text.splitlines() or [""]:
            lines.append([(style, " " + ellipsize(raw, max(1, width - 1)))])

    if kind is EmptyState.NO_MATCHES:
        add(dim, tui._t("EMPTY_NO_MATCHES", query=state.search_query))
        add(dim, tui._t("GUIDE_CLEAR_SEARCH"))
        return lines

    add(dim, tui._t("EMPTY_NO_TASKS"))
    if state.error_message:
        add("class:error", state.error_message)
    if kind is EmptyState.TOOL_MISSING:
        add(dim, tui._t("GUIDE_INSTALL_TASK"))
    else:
        add(dim, tui._t("GUIDE_CREATE_TASKFILE"))
        add(dim, EXAMPLE_TASKFILE)
    return lines


def render_list_area(tui, width: int, area_height: int) -> List[Line]:
    state = tui.state
    if not state.visible_tasks:
        lines = _empty_state_lines(tui, width)
    else:
        lines = []
        for offset, task in enumerate(state.window()):
            idx = state.scroll_offset + offset
            row = render_task_row(task, idx == state.selected_index, width)
            row = row[: state.row_height]
            while len(row) < state.row_height:
                row.append([("", "")])
            lines.extend(row)
    lines = lines[:area_height]
    while len(lines) < area_height:
        lines.append([("", "")])
    return lines


def render_screen(tui, width: Optional[int] = None, height: Optional[int] = None) -> FormattedText:
    state = tui.state
    width = max(1, width if width is not None else tui.get_terminal_width())
    height = height if height is not None else tui.get_terminal_height()
    if height <= 0:
        height = viewport.DEFAULT_TERMINAL_HEIGHT

    lines: List[Line] = []
    lines.extend(render_header(tui, width))
    if viewport.tabs_visible(len(state.tabs)):
        lines.extend(render_tab_strip(tui, width))
    if state.search_visible:
        lines.extend(render_search_box(tui, width))
    area = max(0, height - viewport.chrome_height(len(state.tabs), state.search_visible))
    lines.extend(render_list_area(tui, width, area))
    lines.append(build_status_line(tui, width))
    lines.extend(build_footer_lines(tui, width))
    lines = lines[:height]

    fragments: Line = []
    for idx, line in enumerate(lines):
        if idx:
            fragments.append(("", "\n"))
        fragments.extend(line)
    return FormattedText(fragments)


__all__ = [
    "render_screen",
    "render_header",
    "render_tab_strip",
    "render_search_box",
    "render_task_row",
    "render_list_area",
    "measure_row_height",
    "fit_line",
]
