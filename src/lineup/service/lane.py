# SPDX-License-Identifier: MIT

"""Greedy interval partitioning of scheduled items into non-overlapping lanes."""

from typing import Iterable

import pendulum

from lineup.model.item import ScheduledItem
from lineup.model.layout import Group, Lane


def sort_key(item: ScheduledItem) -> tuple[pendulum.DateTime, str]:
    return (item["start"], item["id"])


def assign_lanes(items: Iterable[ScheduledItem]) -> list[Lane]:
    """
    Pack items sharing one group into the fewest lanes with no overlap.

    Items are placed in (start, id) order into the first lane, in creation
    order, whose latest end is at or before the item's start. Intervals are
    half-open, so an item starting exactly when another ends shares its lane,
    and a zero-duration item occupies no time: it joins the first lane. The
    lane count equals the peak number of simultaneously active items.

    Args:
        items: Items belonging to a single group

    Returns:
        Lanes in creation order, each sorted by start
    """
    lanes: list[Lane] = []
    lane_ends: list[pendulum.DateTime] = []
    for item in sorted(items, key=sort_key):
        is_instant = item["end"] <= item["start"]
        for index, lane_end in enumerate(lane_ends):
            if is_instant or lane_end <= item["start"]:
                lanes[index].append(item)
                lane_ends[index] = max(lane_end, item["end"])
                break
        else:
            lanes.append([item])
            lane_ends.append(item["end"])
    return lanes


def group_items(items: Iterable[ScheduledItem]) -> list[Group]:
    """Partition items by group key and pack each group independently."""
    by_key: dict[str, list[ScheduledItem]] = {}
    for item in items:
        by_key.setdefault(item["group_key"], []).append(item)
    return [
        {"key": key, "lanes": assign_lanes(by_key[key])} for key in sorted(by_key)
    ]


def peak_concurrency(items: Iterable[ScheduledItem]) -> int:
    """
    Maximum number of items active at one instant under half-open intervals.

    Zero-duration items occupy no time and are not counted.
    """
    boundaries: list[tuple[pendulum.DateTime, int]] = []
    for item in items:
        if item["end"] <= item["start"]:
            continue
        boundaries.append((item["start"], 1))
        boundaries.append((item["end"], -1))
    # Ends sort before starts at the same instant: touching items do not overlap.
    boundaries.sort(key=lambda boundary: (boundary[0], boundary[1]))
    active = 0
    peak = 0
    for _, change in boundaries:
        active += change
        peak = max(peak, active)
    return peak
