"""Footer renderer for TaskBrowserTUI."""

from typing import List, Tuple

from core import SortPolicy
from core.desktop.devtools.application.viewport import tabs_visible
from util.text_width import display_width, ellipsize

WIDE_SEPARATOR = "  │  "
NARROW_SEPARATOR = " │ "


def footer_hints(tui) -> List[Tuple[str, str]]:
    """Hint parts in display order as (style, text) pairs."""
    state = tui.state
    parts: List[Tuple[str, str]] = []
    total = len(state.visible_tasks)
    if total:
        counter = f"{state.selected_index + 1}/{total}"
        parts.append(("class:footer.key", counter.rjust(len(f"{total}/{total}"))))
    parts.append(("class:footer", tui._t("FOOTER_MOVE")))
    if tabs_visible(len(state.tabs)):
        parts.append(("class:footer", tui._t("FOOTER_TABS")))
    parts.append(("class:footer.key", tui._t("FOOTER_RUN")))
    parts.append(("class:footer", tui._t("FOOTER_SEARCH")))
    parts.append(("class:footer", tui._t("FOOTER_REFRESH")))
    sort_key = "FOOTER_SORT_ALPHA" if state.sort_policy is SortPolicy.ALPHABETICAL else "FOOTER_SORT_FILE"
    parts.append(("class:footer", tui._t(sort_key)))
    parts.append(("class:footer", tui._t("FOOTER_QUIT")))
    return parts


def _joined_width(parts: List[Tuple[str, str]], separator: str) -> int:
    if not parts:
        return 0
    return sum(display_width(text) for _, text in parts) + display_width(separator) * (len(parts) - 1)


def build_footer_lines(tui, width: int) -> List[List[Tuple[str, str]]]:
    """Rule line plus one hint line, shrunk to fit `width`."""
    parts = footer_hints(tui)
    inner = max(1, width - 2)
    separator = WIDE_SEPARATOR
    if _joined_width(parts, separator) > inner:
        separator = NARROW_SEPARATOR
    if _joined_width(parts, separator) > inner:
        search = ("class:footer", tui._t("FOOTER_SEARCH"))
        parts = [p for p in parts if p != search]

    hint_line: List[Tuple[str, str]] = [("class:footer", " ")]
    used = 1
    for idx, (style, text) in enumerate(parts):
        chunk = text if idx == 0 else separator + text
        room = width - used
        if room <= 0:
            break
        if display_width(chunk) > room:
            hint_line.append((style, ellipsize(chunk, room)))
            break
        if idx:
            hint_line.append(("class:border", separator))
            hint_line.append((style, text))
        else:
            hint_line.append((style, text))
        used += display_width(chunk)
    rule = [("class:border", "─" * max(0, width))]
    return [rule, hint_line]


__all__ = ["build_footer_lines", "footer_hints"]
