# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias, TypedDict

import pendulum

from lineup.model.item import ScheduledItem

Lane: TypeAlias = list[ScheduledItem]


class Group(TypedDict):
    key: str
    lanes: list[Lane]


class ItemBox(TypedDict):
    item: ScheduledItem
    group_key: str
    lane: int
    left: float
    width: float


class TickMark(TypedDict):
    instant: pendulum.DateTime
    offset: float
    label: str


class Layout(TypedDict):
    lanes_by_group: dict[str, list[list[ItemBox]]]
    tick_marks: list[TickMark]
    now_offset: Optional[float]
    total_width: float
