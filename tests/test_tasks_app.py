import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from core import Task
from core.errors import DiscoveryFailed, RootNotFound, ToolMissing
from core.desktop.devtools.interface import tasks_app
from core.desktop.devtools.interface.tui_models import BrowserConfig


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch):
    monkeypatch.setattr(tasks_app, "get_user_theme", lambda: "")
    monkeypatch.setattr(tasks_app, "get_user_task_binary", lambda: "")
    monkeypatch.setattr(tasks_app, "get_user_log_file", lambda: "")
    monkeypatch.setattr(tasks_app, "get_user_mouse", lambda default=True: default)


def _args(*argv):
    return tasks_app.build_parser().parse_args(list(argv))


def test_build_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = tasks_app.build_config(_args())
    assert cfg.start_dir == Path.cwd()
    assert cfg.theme == "dark"
    assert cfg.mouse_enabled is True
    assert cfg.task_binary == "task"
    assert cfg.task_args == ()
    assert cfg.log_file is None


def test_build_config_flags_win_over_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(tasks_app, "get_user_theme", lambda: "dark")
    monkeypatch.setattr(tasks_app, "get_user_task_binary", lambda: "go-task")
    cfg = tasks_app.build_config(
        _args("--theme", "light", "--no-mouse", "--project", str(tmp_path), "--task-bin", "mytask", "--", "-v")
    )
    assert cfg.theme == "light"
    assert cfg.mouse_enabled is False
    assert cfg.start_dir == tmp_path
    assert cfg.task_binary == "mytask"
    assert cfg.task_args == ("-v",)


def test_user_config_fills_gaps(tmp_path):
    cfg = tasks_app.build_config(_args("--project", str(tmp_path)))
    assert cfg.task_binary == "task"


class FakeDiscovery:
    def __init__(self, result):
        self.result = result

    def discover(self, root):
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def test_load_tasks_without_taskfile(tmp_path, monkeypatch):
    def missing(start):
        raise RootNotFound(start)

    monkeypatch.setattr(tasks_app, "locate_root", missing)
    root, tasks, error = tasks_app.load_tasks(BrowserConfig(start_dir=tmp_path), FakeDiscovery([]))
    assert root is None
    assert tasks == []
    assert isinstance(error, RootNotFound)


def test_load_tasks_success(tmp_path):
    (tmp_path / "Taskfile.yml").write_text("tasks:\n  a: echo a\n", encoding="utf-8")
    root, tasks, error = tasks_app.load_tasks(BrowserConfig(start_dir=tmp_path), FakeDiscovery([Task("a")]))
    assert root == tmp_path.resolve()
    assert [t.name for t in tasks] == ["a"]
    assert error is None


@pytest.mark.parametrize("exc", [ToolMissing("task"), DiscoveryFailed({"json": None})])
def test_load_tasks_discovery_errors(tmp_path, exc):
    (tmp_path / "Taskfile.yml").write_text("tasks: {}\n", encoding="utf-8")
    root, tasks, error = tasks_app.load_tasks(BrowserConfig(start_dir=tmp_path), FakeDiscovery(exc))
    assert root == tmp_path.resolve()
    assert tasks == []
    assert error is exc


class FakeCli:
    def __init__(self, code=0, exc=None):
        self.code = code
        self.exc = exc
        self.calls = []

    def run(self, name, args, root):
        self.calls.append((name, tuple(args), root))
        if self.exc:
            raise self.exc
        return self.code


def test_run_chosen_task_success(tmp_path, capsys):
    cli = FakeCli(code=0)
    cfg = BrowserConfig(start_dir=tmp_path, task_args=("--dry",))
    assert tasks_app.run_chosen_task("build", cfg, tmp_path, cli) == 0
    assert cli.calls == [("build", ("--dry",), tmp_path)]
    assert capsys.readouterr().out == ""


def test_run_chosen_task_nonzero_exit_is_reported(tmp_path, capsys):
    assert tasks_app.run_chosen_task("build", BrowserConfig(start_dir=tmp_path), tmp_path, FakeCli(code=2)) == 0
    assert "Task exited with status 2" in capsys.readouterr().out


def test_run_chosen_task_launch_failure(tmp_path, capsys):
    cli = FakeCli(exc=FileNotFoundError("task"))
    assert tasks_app.run_chosen_task("build", BrowserConfig(start_dir=tmp_path), tmp_path, cli) == 1
    assert "Could not launch task" in capsys.readouterr().err


def test_configure_logging_attaches_file_handler(tmp_path):
    log_path = tmp_path / "taskg.log"
    handler = tasks_app.configure_logging(log_path)
    try:
        logging.getLogger("taskg.discovery").info("hello from test")
        handler.flush()
        assert "hello from test" in log_path.read_text(encoding="utf-8")
    finally:
        logging.getLogger("taskg").removeHandler(handler)
        handler.close()


def test_configure_logging_without_file():
    assert tasks_app.configure_logging(None) is None


def test_version_flag(capsys):
    assert tasks_app.main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_main_hands_off_chosen_task(tmp_path, monkeypatch):
    launched = {}

    class FakeTUI:
        def __init__(self, config, tasks, project_root=None, startup_error=None, discovery=None):
            self.project_root = project_root
            self.tasks = tasks

        def run(self):
            pass

        def should_run(self):
            return True

        def task_to_run(self):
            return "build"

    monkeypatch.setattr(tasks_app, "TaskBrowserTUI", FakeTUI)
    monkeypatch.setattr(tasks_app, "load_tasks", lambda config, discovery=None: (tmp_path, [Task("build")], None))

    def fake_run(name, config, root, cli=None):
        launched.update(name=name, root=root)
        return 0

    monkeypatch.setattr(tasks_app, "run_chosen_task", fake_run)
    assert tasks_app.main(["--project", str(tmp_path)]) == 0
    assert launched == {"name": "build", "root": tmp_path}


def test_main_quit_runs_nothing(tmp_path, monkeypatch):
    monkeypatch.setattr(
        tasks_app,
        "TaskBrowserTUI",
        lambda *a, **kw: SimpleNamespace(run=lambda: None, should_run=lambda: False, project_root=None),
    )
    monkeypatch.setattr(tasks_app, "load_tasks", lambda config, discovery=None: (None, [], RootNotFound(tmp_path)))
    monkeypatch.setattr(tasks_app, "run_chosen_task", lambda *a, **kw: pytest.fail("should not run"))
    assert tasks_app.main(["--project", str(tmp_path)]) == 0
