from types import SimpleNamespace

import pytest

from core import Task
from core.errors import RootNotFound, ToolMissing
from core.desktop.devtools.application.browser_state import BrowserState
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_render import (
    fit_line,
    measure_row_height,
    render_screen,
    render_task_row,
)


def _tui(tasks, width=80, height=24, project_name="demo"):
    state = BrowserState(tasks, width=width, height=height, translate_fn=translate)
    return SimpleNamespace(
        state=state,
        project_name=project_name,
        _t=lambda key, **kw: translate(key, **kw),
        get_terminal_width=lambda: width,
        get_terminal_height=lambda: height,
    )


def _lines(formatted):
    return "".join(text for _style, text in formatted).split("\n")


TASKS = [
    Task("build", "Build it", ("go build", "echo ok"), 1),
    Task("docker-up", "", (), 2),
]


def test_screen_fills_terminal_height():
    tui = _tui(TASKS)
    lines = _lines(render_screen(tui, 80, 24))
    assert len(lines) == 24
    assert "Task Runner Gui - taskg" in lines[0]
    assert "demo" in lines[1]


def test_tab_strip_sits_on_third_line():
    tui = _tui(TASKS)
    lines = _lines(render_screen(tui, 80, 24))
    assert "Main" in lines[2]
    assert "Docker" in lines[2]
    assert lines[2].startswith(" ▎ Main ")


def test_selected_row_layout():
    tui = _tui(TASKS)
    lines = _lines(render_screen(tui, 80, 24))
    assert lines[4] == "▎ • build - Build it"
    assert lines[5] == "    [go build | echo ok]"


def test_task_without_description_or_commands():
    row = render_task_row(Task("docker-up"), False, 80)
    assert "".join(t for _, t in row[0]) == "  • docker-up"
    assert "".join(t for _, t in row[1]) == ""


def test_placeholder_description_is_hidden():
    row = render_task_row(Task("x", "-"), False, 80)
    assert " - " not in "".join(t for _, t in row[0])


def test_long_rows_are_cut_to_width():
    row = render_task_row(Task("name", "d" * 200, ("c" * 200,)), True, 40)
    assert all(sum(len(t) for _, t in line) <= 40 for line in row)


def test_search_box_visible_while_searching():
    tui = _tui(TASKS)
    tui.state.handle_key("b")
    lines = _lines(render_screen(tui, 80, 24))
    assert lines[4].startswith(" 🔍 b")


def test_footer_hints_and_status():
    tui = _tui(TASKS)
    tui.state.set_status("Refreshing tasks...")
    lines = _lines(render_screen(tui, 120, 24))
    assert "Refreshing tasks..." in lines[-3]
    assert "Enter run" in lines[-1]
    assert "Sort: Original (^S)" in lines[-1]
    assert "←→/Tab switch" in lines[-1]


@pytest.mark.parametrize(
    "error,expected",
    [
        (RootNotFound("/tmp/x"), "No Taskfile found"),
        (ToolMissing("task"), "'task' executable was not found"),
    ],
)
def test_startup_error_is_rendered(error, expected):
    tui = _tui([])
    tui.state.apply_startup_error(error)
    text = "\n".join(_lines(render_screen(tui, 120, 30)))
    assert expected in text


def test_no_taskfile_shows_example():
    tui = _tui([])
    tui.state.apply_startup_error(RootNotFound("/tmp/x"))
    text = "\n".join(_lines(render_screen(tui, 120, 30)))
    assert "version: '3'" in text


def test_no_matches_message():
    tui = _tui(TASKS)
    for key in "/qqq":
        tui.state.handle_key(key)
    text = "\n".join(_lines(render_screen(tui, 120, 30)))
    assert "No tasks match" in text


def test_measure_row_height_is_two_lines():
    assert measure_row_height() == 2


def test_fit_line_trims_fragments():
    assert fit_line([("a", "abc"), ("b", "def")], 4) == [("a", "abc"), ("b", "d")]
