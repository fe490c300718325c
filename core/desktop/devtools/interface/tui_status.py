"""Status line builder for TaskBrowserTUI."""

from typing import List, Tuple

from util.text_width import ellipsize


def build_status_line(tui, width: int) -> List[Tuple[str, str]]:
    """One line; blank when no notice is live so the layout never jumps."""
    state = tui.state
    message = state.current_status()
    if not message:
        return [("class:status", "")]
    style = "class:status.error" if state.status_is_error else "class:status"
    return [(style, " " + ellipsize(message, max(1, width - 1)))]


__all__ = ["build_status_line"]
