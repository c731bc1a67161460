# SPDX-License-Identifier: MIT

from typing import Optional

from lineup.model.item import ItemStatus, ScheduledItem

# Bar colors per item status
STATUS_COLORS: dict[ItemStatus, str] = {
    "draft": "#64748b",
    "request": "#2563eb",
    "in_work": "#d97706",
    "completed": "#059669",
    "canceled": "#dc2626",
}

DEFAULT_ITEM_COLOR = STATUS_COLORS["draft"]
NOW_MARKER_COLOR = "bright_red"
SELECTED_ITEM_COLOR = "bold bright_white"


def item_color(item: ScheduledItem) -> str:
    """An explicit item color wins over its status color."""
    color: Optional[str] = item.get("color")
    if color:
        return color
    status = item.get("status")
    if status is None:
        return DEFAULT_ITEM_COLOR
    return STATUS_COLORS.get(status, DEFAULT_ITEM_COLOR)
