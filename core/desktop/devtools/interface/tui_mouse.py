"""Mouse event handling helpers for TaskBrowserTUI."""

from prompt_toolkit.mouse_events import MouseEventType, MouseButton

SCROLL_STEP = 1


def _handle_scroll(tui, mouse_event):
    if mouse_event.event_type == MouseEventType.SCROLL_DOWN:
        tui.state.scroll(SCROLL_STEP)
        return True
    if mouse_event.event_type == MouseEventType.SCROLL_UP:
        tui.state.scroll(-SCROLL_STEP)
        return True
    return False


def _handle_drag(tui, mouse_event):
    if mouse_event.event_type != MouseEventType.MOUSE_MOVE or mouse_event.button != MouseButton.LEFT:
        return False
    pos = mouse_event.position
    tui.apply_effect(tui.state.drag(pos.x, pos.y))
    return True


def _handle_click(tui, mouse_event):
    if mouse_event.event_type != MouseEventType.MOUSE_UP or mouse_event.button != MouseButton.LEFT:
        return False
    pos = mouse_event.position
    tui.apply_effect(tui.state.press(pos.x, pos.y))
    return True


def handle_body_mouse(tui, mouse_event):
    """Route mouse events for TaskBrowserTUI body."""
    if not getattr(tui, "mouse_enabled", True):
        return NotImplemented
    if _handle_scroll(tui, mouse_event) or _handle_drag(tui, mouse_event) or _handle_click(tui, mouse_event):
        tui.force_render()
        return None
    return NotImplemented


__all__ = ["handle_body_mouse"]
