from types import SimpleNamespace

from prompt_toolkit.mouse_events import MouseEventType, MouseButton

from core import Task
from core.desktop.devtools.application.browser_state import BrowserState, Effect
from core.desktop.devtools.interface import tui_mouse


def _mouse(event_type, button=MouseButton.LEFT, x=0, y=0, modifiers=()):
    return SimpleNamespace(event_type=event_type, button=button, position=SimpleNamespace(x=x, y=y), modifiers=modifiers)


class FakeTUI:
    def __init__(self, mouse_enabled=True):
        tasks = [Task(f"job{i}", source_line=i + 1) for i in range(5)]
        self.state = BrowserState(tasks, width=80, height=24)
        self.mouse_enabled = mouse_enabled
        self.effects = []
        self.renders = 0

    def apply_effect(self, effect):
        self.effects.append(effect)

    def force_render(self):
        self.renders += 1


def test_wheel_moves_selection():
    tui = FakeTUI()
    assert tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.SCROLL_DOWN)) is None
    assert tui.state.selected_index == 1
    tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.SCROLL_UP))
    assert tui.state.selected_index == 0
    assert tui.renders == 2


def test_left_click_selects_row():
    tui = FakeTUI()
    # Single tab: list starts right below the two header lines.
    tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.MOUSE_UP, y=6))
    assert tui.state.selected_index == 2
    assert tui.effects == [Effect.NONE]


def test_drag_over_selected_row_commits():
    tui = FakeTUI()
    tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.MOUSE_MOVE, y=2))
    assert tui.effects == [Effect.COMMIT]
    assert tui.state.task_to_run() == "job0"


def test_plain_motion_is_ignored():
    tui = FakeTUI()
    result = tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.MOUSE_MOVE, button=MouseButton.NONE, y=2))
    assert result is NotImplemented
    assert tui.effects == []


def test_right_click_falls_through():
    tui = FakeTUI()
    assert tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.MOUSE_UP, MouseButton.RIGHT, y=4)) is NotImplemented


def test_disabled_mouse_falls_through():
    tui = FakeTUI(mouse_enabled=False)
    assert tui_mouse.handle_body_mouse(tui, _mouse(MouseEventType.SCROLL_DOWN)) is NotImplemented
    assert tui.state.selected_index == 0
