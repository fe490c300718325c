#!/usr/bin/env python3
"""Unit tests for tui_app module - TaskBrowserTUI wiring."""

import threading
from pathlib import Path

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import DummyInput
from prompt_toolkit.output import DummyOutput

from core import Task
from core.errors import ListingFailed, ToolMissing
from core.desktop.devtools.application.browser_state import EmptyState, Effect
from core.desktop.devtools.interface.tui_app import ROUTED_KEYS, TaskBrowserTUI
from core.desktop.devtools.interface.tui_models import BrowserConfig

TASKS = [
    Task("build", "Build", ("go build",), 1),
    Task("test", "Test", ("go test",), 2),
    Task("docker-up", "Up", ("docker compose up",), 3),
]


class FakeDiscovery:
    def __init__(self, result):
        self.result = result
        self.roots = []

    def discover(self, root):
        self.roots.append(root)
        if isinstance(self.result, BaseException):
            raise self.result
        return list(self.result)


@pytest.fixture(autouse=True)
def _dummy_session():
    with create_app_session(input=DummyInput(), output=DummyOutput()):
        yield


@pytest.fixture
def tui(tmp_path, monkeypatch):
    monkeypatch.setattr(TaskBrowserTUI, "get_terminal_width", staticmethod(lambda: 80))
    monkeypatch.setattr(TaskBrowserTUI, "get_terminal_height", staticmethod(lambda: 24))
    config = BrowserConfig(start_dir=tmp_path)
    return TaskBrowserTUI(config, TASKS, project_root=tmp_path, discovery=FakeDiscovery(TASKS))


class TestTaskBrowserTUIHelpers:
    def test_get_theme_palette_unknown_falls_back(self):
        assert TaskBrowserTUI.get_theme_palette("nope") == TaskBrowserTUI.get_theme_palette("dark")

    def test_build_style(self):
        assert TaskBrowserTUI.build_style("light") is not None

    def test_routed_keys_cover_navigation_and_globals(self):
        for key in ("up", "down", "enter", "escape", "tab", "s-tab", "c-c", "c-r", "c-s", "backspace"):
            assert key in ROUTED_KEYS


class TestTaskBrowserTUI:
    def test_initial_state(self, tui, tmp_path):
        assert tui.project_name == tmp_path.name
        assert tui.state.row_height == 2
        assert [t.name for t in tui.state.visible_tasks] == ["build", "test"]
        assert not tui.should_run()

    def test_startup_error_becomes_empty_state(self, tmp_path):
        tui = TaskBrowserTUI(BrowserConfig(start_dir=tmp_path), startup_error=ToolMissing("task"))
        assert tui.state.empty_state() is EmptyState.TOOL_MISSING

    def test_empty_task_list_reports_no_tasks(self, tmp_path):
        tui = TaskBrowserTUI(BrowserConfig(start_dir=tmp_path), [])
        assert tui.state.empty_state() is EmptyState.NO_TASKS

    def test_dispatch_commit_sets_task_to_run(self, tui):
        tui.dispatch_key("down")
        assert tui.dispatch_key("enter") is Effect.COMMIT
        assert tui.should_run()
        assert tui.task_to_run() == "test"

    def test_quit_clears_choice(self, tui):
        assert tui.dispatch_key("q") is Effect.QUIT
        assert not tui.should_run()

    def test_body_content_renders(self, tui):
        text = "".join(fragment[1] for fragment in tui.get_body_content())
        assert "build" in text
        assert "Main" in text

    def test_refresh_without_loop_applies_result(self, tui, monkeypatch):
        started = []

        class InlineThread:
            def __init__(self, target, daemon=None):
                self.target = target

            def start(self):
                started.append(True)
                self.target()

        monkeypatch.setattr(threading, "Thread", InlineThread)
        tui.discovery = FakeDiscovery([Task("fresh", source_line=1)])
        assert tui.dispatch_key("r") is Effect.REFRESH
        assert started == [True]
        assert not tui.state.refresh_in_flight
        assert [t.name for t in tui.state.visible_tasks] == ["fresh"]

    def test_refresh_failure_keeps_tasks(self, tui, monkeypatch):
        class InlineThread:
            def __init__(self, target, daemon=None):
                self.target = target

            def start(self):
                self.target()

        monkeypatch.setattr(threading, "Thread", InlineThread)
        tui.discovery = FakeDiscovery(ListingFailed("task --list-all", "broken"))
        tui.dispatch_key("c-r")
        assert len(tui.state.all_tasks) == 3
        assert tui.state.status_is_error

    def test_refresh_locates_root_when_unknown(self, tmp_path, monkeypatch):
        (tmp_path / "Taskfile.yml").write_text("tasks:\n  a: echo a\n", encoding="utf-8")
        nested = tmp_path / "sub"
        nested.mkdir()
        discovery = FakeDiscovery([Task("a", source_line=1)])
        tui = TaskBrowserTUI(BrowserConfig(start_dir=nested), [], discovery=discovery)
        root, tasks = tui._discover_now()
        assert [t.name for t in tasks] == ["a"]
        assert root == tmp_path.resolve()
        assert discovery.roots == [tmp_path.resolve()]
        # Only the completion applied on the event loop records the root.
        assert tui.project_root is None
        tui.finish_refresh(tasks, None, root)
        assert tui.project_root == tmp_path.resolve()
        assert tui.project_name == tmp_path.name

    def test_unexpected_refresh_error_still_completes(self, tui, monkeypatch):
        class InlineThread:
            def __init__(self, target, daemon=None):
                self.target = target

            def start(self):
                self.target()

        monkeypatch.setattr(threading, "Thread", InlineThread)
        tui.discovery = FakeDiscovery(UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid start byte"))
        assert tui.dispatch_key("r") is Effect.REFRESH
        assert not tui.state.refresh_in_flight
        assert tui.state.status_is_error
        assert len(tui.state.all_tasks) == 3
        assert tui.dispatch_key("r") is Effect.REFRESH
        assert not tui.state.refresh_in_flight
