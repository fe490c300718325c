#!/usr/bin/env python3
"""TUI application - TaskBrowserTUI class and the run handoff."""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.styles import Style

from core import Task
from core.errors import TaskgError
from core.desktop.devtools.application.browser_state import BrowserState, Effect
from core.desktop.devtools.application.discovery import TaskDiscovery
from core.desktop.devtools.interface.i18n import translate
from core.desktop.devtools.interface.tui_models import BrowserConfig, InteractiveFormattedTextControl
from core.desktop.devtools.interface.tui_mouse import handle_body_mouse
from core.desktop.devtools.interface.tui_render import measure_row_height, render_screen
from core.desktop.devtools.interface.tui_themes import build_style, get_theme_palette, resolve_theme_name
from infrastructure.task_cli import TaskCli
from infrastructure.taskfile_locator import locate_root

logger = logging.getLogger("taskg.tui")

# Named keys forwarded to the state machine. Printable characters arrive
# through the Keys.Any binding.
ROUTED_KEYS: Sequence[str] = (
    "up",
    "down",
    "pageup",
    "pagedown",
    "home",
    "end",
    "enter",
    "escape",
    "tab",
    "s-tab",
    "left",
    "right",
    "backspace",
    "c-c",
    "c-r",
    "c-s",
    "c-u",
)


class TaskBrowserTUI:
    @staticmethod
    def get_theme_palette(theme: str) -> Dict[str, str]:
        return get_theme_palette(theme)

    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(
        self,
        config: BrowserConfig,
        tasks: Optional[Sequence[Task]] = None,
        *,
        project_root: Optional[Path] = None,
        startup_error: Optional[BaseException] = None,
        discovery: Optional[TaskDiscovery] = None,
    ):
        self.config = config
        self.theme = resolve_theme_name(config.theme)
        self.mouse_enabled = bool(config.mouse_enabled)
        self.project_root: Optional[Path] = project_root
        self.project_name: str = project_root.name if project_root else ""
        self.discovery = discovery or TaskDiscovery(cli=TaskCli(config.task_binary))

        self.state = BrowserState(
            width=self.get_terminal_width(),
            height=self.get_terminal_height(),
            translate_fn=self._t,
        )
        if startup_error is not None:
            self.state.apply_startup_error(startup_error)
        else:
            self.state.replace_tasks(list(tasks or []))
        self.state.set_row_height(measure_row_height(self))

        self.style = self.build_style(self.theme)
        kb = self._build_key_bindings()

        self.body_control = InteractiveFormattedTextControl(
            self.get_body_content,
            show_cursor=False,
            focusable=True,
            mouse_handler=self._handle_body_mouse,
        )
        self.main_window = Window(content=self.body_control, always_hide_cursor=True, wrap_lines=False)

        self.app = Application(
            layout=Layout(HSplit([self.main_window])),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            mouse_support=self.mouse_enabled,
            refresh_interval=1.0,
        )
        # prompt_toolkit waits 0.5s by default to tell a lone Escape from an
        # ANSI sequence; allow override for slow terminals/SSH sessions.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TASKG_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @staticmethod
    def _t(key: str, **kwargs) -> str:
        return translate(key, **kwargs)

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 24

    # ------------------------------------------------------------ keys

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        def route(name: str) -> Callable:
            def _(event):
                self.dispatch_key(name)
            return _

        for name in ROUTED_KEYS:
            kb.add(name, eager=(name == "escape"))(route(name))

        @kb.add(Keys.Any)
        def _(event):
            """Single printable characters: commands while browsing, text while searching."""
            key = event.key_sequence[0].key if event.key_sequence else None
            if not isinstance(key, str) or len(key) != 1 or not key.isprintable():
                return
            self.dispatch_key(key)

        @kb.add(Keys.ScrollUp)
        def _(event):
            self.state.scroll(-1)
            self.force_render()

        @kb.add(Keys.ScrollDown)
        def _(event):
            self.state.scroll(1)
            self.force_render()

        return kb

    def dispatch_key(self, key: str) -> Effect:
        self._sync_size()
        effect = self.state.handle_key(key)
        self.apply_effect(effect)
        self.force_render()
        return effect

    def apply_effect(self, effect: Effect) -> None:
        if effect is Effect.QUIT:
            self.state.chosen_task = None
            self._exit()
        elif effect is Effect.COMMIT:
            logger.debug("task selected: %s", self.state.task_to_run())
            self._exit()
        elif effect is Effect.REFRESH:
            self.start_refresh()

    def _exit(self) -> None:
        app = getattr(self, "app", None)
        if app is not None and app.is_running:
            app.exit()

    # ------------------------------------------------------------ mouse

    def _handle_body_mouse(self, mouse_event):
        return handle_body_mouse(self, mouse_event)

    # ------------------------------------------------------------ refresh

    def _discover_now(self) -> Tuple[Path, List[Task]]:
        """Runs on the worker thread; touches no TUI state."""
        root = self.project_root or locate_root(self.config.start_dir)
        return root, self.discovery.discover(root)

    def start_refresh(self) -> None:
        """Re-run discovery off the event loop; the result is applied on it."""
        loop = getattr(getattr(self, "app", None), "loop", None)

        def deliver(tasks: Optional[List[Task]], error: Optional[BaseException], root: Optional[Path]) -> None:
            if loop is not None and loop.is_running():
                loop.call_soon_threadsafe(self.finish_refresh, tasks, error, root)
            else:
                self.finish_refresh(tasks, error, root)

        def worker():
            try:
                root, tasks = self._discover_now()
            except Exception as exc:
                logger.warning("refresh failed: %s", exc, exc_info=not isinstance(exc, TaskgError))
                deliver(None, exc, None)
            else:
                deliver(tasks, None, root)

        threading.Thread(target=worker, daemon=True).start()

    def finish_refresh(
        self, tasks: Optional[List[Task]], error: Optional[BaseException], root: Optional[Path] = None
    ) -> None:
        if root is not None:
            self.project_root = root
            self.project_name = root.name
        self.state.finish_refresh(tasks, error)
        self.force_render()

    # ------------------------------------------------------------ render

    def _sync_size(self) -> None:
        width = self.get_terminal_width()
        height = self.get_terminal_height()
        if (width, height) != (self.state.width, self.state.height):
            self.state.resize(width, height)

    def get_body_content(self) -> FormattedText:
        self._sync_size()
        self.state.tick()
        return render_screen(self, self.state.width, self.state.height)

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def should_run(self) -> bool:
        return self.state.should_run()

    def task_to_run(self) -> str:
        return self.state.task_to_run()

    def run(self):
        self.app.run()


__all__ = ["TaskBrowserTUI", "ROUTED_KEYS"]
