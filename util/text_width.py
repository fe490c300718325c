"""Terminal display-width helpers (wide and zero-width characters aware)."""

from wcwidth import wcwidth


def _char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


def display_width(text: str) -> int:
    """Printable width of text in terminal cells."""
    text = (text or "").expandtabs(4)
    return sum(_char_width(ch) for ch in text)


def trim_display(text: str, width: int) -> str:
    """Cut text so its visible width does not exceed width."""
    text = (text or "").expandtabs(4)
    acc = []
    used = 0
    for ch in text:
        w = _char_width(ch)
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def pad_display(text: str, width: int) -> str:
    """Trim and right-pad with spaces to exactly width cells."""
    trimmed = trim_display(text, width)
    missing = width - display_width(trimmed)
    if missing > 0:
        trimmed += " " * missing
    return trimmed


def ellipsize(text: str, width: int) -> str:
    """Trim to width, marking the cut with a trailing ellipsis."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    return trim_display(text, width - 1) + "…"


__all__ = ["display_width", "trim_display", "pad_display", "ellipsize"]
