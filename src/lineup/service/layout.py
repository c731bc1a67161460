# SPDX-License-Identifier: MIT

from typing import Iterable, Mapping, Optional

import pendulum

from lineup.model.drag import DragSession
from lineup.model.item import ScheduledItem
from lineup.model.layout import ItemBox, Layout
from lineup.model.window import Resolution, TimeWindow
from lineup.service.lane import group_items
from lineup.service.time_axis import TimeAxis
from lineup.time import now_utc


def compute_layout(
    items: Iterable[ScheduledItem],
    window: TimeWindow,
    now: Optional[pendulum.DateTime] = None,
    unit_widths: Optional[Mapping[Resolution, float]] = None,
    min_widths: Optional[Mapping[Resolution, float]] = None,
    overlays: Optional[Mapping[str, DragSession]] = None,
) -> Layout:
    """
    Pack items into lanes per group and place them on the time axis.

    Pure and synchronous: safe to call on every item list change, window or
    zoom change and on every drag tick. Items that do not intersect the window
    are left out before packing.

    Args:
        items: Items to lay out, typically the rendered items of a timeline
        window: Visible window, resolution and zoom
        now: Instant for the "now" marker (defaults to the current time)
        unit_widths: Per-resolution pixel width overrides at zoom 1.0
        min_widths: Per-resolution visual floor overrides
        overlays: Live drag sessions by item id, rendered in place of the
            authoritative bounds of those items

    Returns:
        Lanes of item boxes keyed by group, tick marks, the now marker offset
        (None outside the window) and the total axis width
    """
    axis = TimeAxis(window, unit_widths=unit_widths, min_widths=min_widths)
    if overlays:
        items = merge_overlay(items, overlays)
    visible = [item for item in items if axis.contains(item["start"], item["end"])]

    lanes_by_group: dict[str, list[list[ItemBox]]] = {}
    for group in group_items(visible):
        boxed_lanes: list[list[ItemBox]] = []
        for lane_index, lane in enumerate(group["lanes"]):
            boxes: list[ItemBox] = []
            for item in lane:
                left, width = axis.box(item["start"], item["end"])
                boxes.append(
                    {
                        "item": item,
                        "group_key": group["key"],
                        "lane": lane_index,
                        "left": left,
                        "width": width,
                    }
                )
            boxed_lanes.append(boxes)
        lanes_by_group[group["key"]] = boxed_lanes

    return {
        "lanes_by_group": lanes_by_group,
        "tick_marks": axis.ticks(),
        "now_offset": axis.now_offset(now if now is not None else now_utc()),
        "total_width": axis.total_width,
    }


def merge_overlay(
    items: Iterable[ScheduledItem], overlays: Mapping[str, DragSession]
) -> list[ScheduledItem]:
    """Authoritative items with each dragged or committing item shown at its live bounds."""
    if not overlays:
        return list(items)
    merged: list[ScheduledItem] = []
    for item in items:
        session = overlays.get(item["id"])
        if session is not None:
            live = item.copy()
            live["start"] = session.live_start
            live["end"] = session.live_end
            merged.append(live)
        else:
            merged.append(item)
    return merged


def find_box(layout: Layout, item_id: str) -> Optional[ItemBox]:
    for lanes in layout["lanes_by_group"].values():
        for lane in lanes:
            for box in lane:
                if box["item"]["id"] == item_id:
                    return box
    return None


def hit_test(
    layout: Layout, group_key: str, lane: int, x: float
) -> Optional[ItemBox]:
    """The box under a pointer at offset x in one lane row, if any."""
    lanes = layout["lanes_by_group"].get(group_key)
    if lanes is None or lane < 0 or lane >= len(lanes):
        return None
    for box in lanes[lane]:
        if box["left"] <= x <= box["left"] + box["width"]:
            return box
    return None
