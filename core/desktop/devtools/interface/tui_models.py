#!/usr/bin/env python3
"""TUI data models and constants."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.mouse_events import MouseEvent

from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME
from infrastructure.task_cli import DEFAULT_TASK_BINARY


@dataclass(frozen=True)
class BrowserConfig:
    """Startup options, built once by the CLI from flags and user config."""
    start_dir: Path
    theme: str = DEFAULT_THEME
    mouse_enabled: bool = True
    task_binary: str = DEFAULT_TASK_BINARY
    task_args: Tuple[str, ...] = field(default_factory=tuple)
    log_file: Optional[Path] = None


class InteractiveFormattedTextControl(FormattedTextControl):
    """FormattedTextControl with external mouse handler support."""

    def __init__(self, *args, mouse_handler=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._external_mouse_handler = mouse_handler

    def mouse_handler(self, mouse_event: MouseEvent):
        if self._external_mouse_handler:
            result = self._external_mouse_handler(mouse_event)
            if result is not NotImplemented:
                return result
        return super().mouse_handler(mouse_event)


__all__ = ["BrowserConfig", "InteractiveFormattedTextControl"]
