#!/usr/bin/env python3
"""
taskg: interactive browser for Taskfile tasks.

Locates the nearest Taskfile, discovers its tasks, lets the user pick one in
the TUI and then hands the terminal over to `task <name>`.
"""

import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from config import get_user_log_file, get_user_mouse, get_user_task_binary, get_user_theme
from core import Task
from core.errors import RootNotFound, TaskgError, ToolMissing
from core.desktop.devtools.application.discovery import TaskDiscovery
from core.desktop.devtools.interface.cli_parser import build_parser as build_cli_parser
from core.desktop.devtools.interface.constants import APP_VERSION
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_app import TaskBrowserTUI
from core.desktop.devtools.interface.tui_models import BrowserConfig
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.task_cli import DEFAULT_TASK_BINARY, TaskCli
from infrastructure.taskfile_locator import locate_root

logger = logging.getLogger("taskg")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser():
    """Build CLI argument parser."""
    return build_cli_parser(themes=THEMES, default_theme=DEFAULT_THEME)


def configure_logging(log_file: Optional[Path]) -> Optional[logging.Handler]:
    """Attach a debug file handler; without one the package logger stays silent."""
    if not log_file:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def build_config(args) -> BrowserConfig:
    """Merge CLI flags over user config over defaults."""
    theme = args.theme or get_user_theme() or DEFAULT_THEME
    if theme not in THEMES:
        theme = DEFAULT_THEME
    start_dir = Path(args.project).expanduser() if args.project else Path.cwd()
    task_args = list(args.task_args or [])
    if task_args and task_args[0] == "--":
        task_args = task_args[1:]
    log_file = args.log_file or get_user_log_file()
    return BrowserConfig(
        start_dir=start_dir,
        theme=theme,
        mouse_enabled=False if args.no_mouse else get_user_mouse(True),
        task_binary=args.task_bin or get_user_task_binary() or DEFAULT_TASK_BINARY,
        task_args=tuple(task_args),
        log_file=Path(log_file).expanduser() if log_file else None,
    )


def load_tasks(
    config: BrowserConfig, discovery: Optional[TaskDiscovery] = None
) -> Tuple[Optional[Path], List[Task], Optional[TaskgError]]:
    """Locate the Taskfile and discover tasks; failures become a startup error."""
    try:
        root = locate_root(config.start_dir)
    except RootNotFound as exc:
        logger.info("no Taskfile above %s", config.start_dir)
        return None, [], exc
    discovery = discovery or TaskDiscovery(cli=TaskCli(config.task_binary))
    try:
        return root, discovery.discover(root), None
    except TaskgError as exc:
        logger.warning("discovery failed in %s: %s", root, exc)
        return root, [], exc


def run_chosen_task(name: str, config: BrowserConfig, root: Path, cli: Optional[TaskCli] = None) -> int:
    """Hand the terminal to `task <name>`; a failing task does not fail taskg."""
    cli = cli or TaskCli(config.task_binary)
    try:
        code = cli.run(name, config.task_args, root)
    except (ToolMissing, OSError) as exc:
        print(translate("TASK_LAUNCH_FAILED", error=exc), file=sys.stderr)
        return 1
    if code != 0:
        print(translate("TASK_EXITED", code=code))
    return 0


def _version() -> str:
    try:
        return pkg_version("taskg")
    except PackageNotFoundError:
        return APP_VERSION


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        print(_version())
        return 0
    config = build_config(args)
    configure_logging(config.log_file)

    discovery = TaskDiscovery(cli=TaskCli(config.task_binary))
    root, tasks, error = load_tasks(config, discovery)
    tui = TaskBrowserTUI(config, tasks, project_root=root, startup_error=error, discovery=discovery)
    tui.run()
    if not tui.should_run():
        return 0
    return run_chosen_task(tui.task_to_run(), config, tui.project_root or config.start_dir)


if __name__ == "__main__":
    sys.exit(main())
