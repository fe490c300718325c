"""Viewport arithmetic for the task list and the tab strip.

Screen layout, top to bottom: header, tab strip (only with more than one
tab), search box (only while the search UI is visible), list rows, status
line, footer.
"""

from typing import List, Optional, Sequence, Tuple

from util.text_width import display_width

HEADER_HEIGHT = 2
TABS_HEIGHT = 2
SEARCH_HEIGHT = 2
STATUS_HEIGHT = 1
FOOTER_HEIGHT = 2

DEFAULT_TERMINAL_HEIGHT = 24
DEFAULT_ROW_HEIGHT = 2

# Tab strip geometry.
STRIP_MARGIN = 1
TAB_PADDING = 3  # marker + leading space + trailing space
TAB_GAP = 1
INDICATOR_WIDTH = 2  # "◀ " / " ▶"


def tabs_visible(tab_count: int) -> bool:
    return tab_count > 1


def chrome_height(tab_count: int, search_visible: bool) -> int:
    height = HEADER_HEIGHT + STATUS_HEIGHT + FOOTER_HEIGHT
    if tabs_visible(tab_count):
        height += TABS_HEIGHT
    if search_visible:
        height += SEARCH_HEIGHT
    return height


def visible_row_count(height: int, tab_count: int, search_visible: bool, row_height: int = DEFAULT_ROW_HEIGHT) -> int:
    """How many list entries fit below the chrome; never less than one."""
    total = height if height > 0 else DEFAULT_TERMINAL_HEIGHT
    remaining = total - chrome_height(tab_count, search_visible)
    step = max(1, row_height)
    return max(1, remaining // step)


def clamp_offset(offset: int, row_count: int, visible_rows: int) -> int:
    max_offset = max(0, row_count - visible_rows)
    return max(0, min(offset, max_offset))


def ensure_visible(selected: int, offset: int, row_count: int, visible_rows: int) -> int:
    """Return a scroll offset that keeps `selected` inside the window."""
    visible_rows = max(1, visible_rows)
    if selected < offset:
        offset = selected
    elif selected >= offset + visible_rows:
        offset = selected - visible_rows + 1
    return clamp_offset(offset, row_count, visible_rows)


def list_top(tab_count: int, search_visible: bool) -> int:
    top = HEADER_HEIGHT
    if tabs_visible(tab_count):
        top += TABS_HEIGHT
    if search_visible:
        top += SEARCH_HEIGHT
    return top


def tab_strip_row() -> int:
    return HEADER_HEIGHT


def row_at(
    y: int,
    *,
    tab_count: int,
    search_visible: bool,
    scroll_offset: int,
    row_count: int,
    visible_rows: int,
    row_height: int = DEFAULT_ROW_HEIGHT,
) -> Optional[int]:
    """Map a screen row to a list index, or None outside the list area."""
    top = list_top(tab_count, search_visible)
    if y < top:
        return None
    slot = (y - top) // max(1, row_height)
    if slot >= visible_rows:
        return None
    index = scroll_offset + slot
    if index >= row_count:
        return None
    return index


# ---------------------------------------------------------------- tab strip


def tab_cell_width(title: str) -> int:
    return display_width(title) + TAB_PADDING


def strip_width(terminal_width: int) -> int:
    return max(1, terminal_width - 2 * STRIP_MARGIN)


def _span_end(offset: int, widths: Sequence[int], budget: int) -> int:
    """Exclusive end index of the tabs that fully fit from `offset`."""
    used = 0
    end = offset
    for idx in range(offset, len(widths)):
        extra = widths[idx] + (TAB_GAP if idx > offset else 0)
        if used + extra > budget:
            break
        used += extra
        end = idx + 1
    return end


def visible_tab_span(offset: int, widths: Sequence[int], available: int) -> Tuple[int, int, bool, bool]:
    """Return (start, end, more_left, more_right) for the strip window."""
    if not widths:
        return 0, 0, False, False
    offset = max(0, min(offset, len(widths) - 1))
    more_left = offset > 0
    budget = available - (INDICATOR_WIDTH if more_left else 0)
    end = _span_end(offset, widths, budget)
    if end < len(widths):
        end = _span_end(offset, widths, budget - INDICATOR_WIDTH)
    # Always show at least the first tab of the window, even if truncated.
    end = max(end, offset + 1)
    return offset, end, more_left, end < len(widths)


def ensure_tab_visible(target: int, offset: int, widths: Sequence[int], available: int) -> int:
    """Adjust the strip offset so tab `target` is shown in full."""
    if not widths:
        return 0
    target = max(0, min(target, len(widths) - 1))
    offset = max(0, min(offset, len(widths) - 1))
    if target < offset:
        offset = target
    while offset < target:
        start, end, _, _ = visible_tab_span(offset, widths, available)
        if target < end:
            break
        offset += 1
    # Pull the window back while the tail still fits, so no space is wasted.
    while offset > 0:
        _, end, _, more_right = visible_tab_span(offset - 1, widths, available)
        if more_right or target >= end:
            break
        offset -= 1
    return offset


def tab_at(x: int, offset: int, widths: Sequence[int], available: int) -> Optional[int]:
    """Map a column on the tab strip row to a tab index."""
    start, end, more_left, _ = visible_tab_span(offset, widths, available)
    pos = STRIP_MARGIN + (INDICATOR_WIDTH if more_left else 0)
    for idx in range(start, end):
        if idx > start:
            pos += TAB_GAP
        if pos <= x < pos + widths[idx]:
            return idx
        pos += widths[idx]
    return None


def tab_widths(titles: Sequence[str]) -> List[int]:
    return [tab_cell_width(t) for t in titles]


__all__ = [
    "HEADER_HEIGHT",
    "TABS_HEIGHT",
    "SEARCH_HEIGHT",
    "STATUS_HEIGHT",
    "FOOTER_HEIGHT",
    "DEFAULT_ROW_HEIGHT",
    "INDICATOR_WIDTH",
    "TAB_GAP",
    "STRIP_MARGIN",
    "chrome_height",
    "visible_row_count",
    "clamp_offset",
    "ensure_visible",
    "list_top",
    "tab_strip_row",
    "row_at",
    "tab_cell_width",
    "strip_width",
    "visible_tab_span",
    "ensure_tab_visible",
    "tab_at",
    "tab_widths",
    "tabs_visible",
]
