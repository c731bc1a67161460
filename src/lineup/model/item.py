# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypeAlias, TypedDict

import pendulum

from lineup.model.entity_id import EntityId

ItemStatus: TypeAlias = Literal["draft", "request", "in_work", "completed", "canceled"]

ITEM_STATUSES: tuple[ItemStatus, ...] = (
    "draft",
    "request",
    "in_work",
    "completed",
    "canceled",
)


class ScheduledItem(TypedDict):
    id: EntityId
    group_key: str
    start: pendulum.DateTime
    end: pendulum.DateTime
    title: Optional[str]
    status: NotRequired[ItemStatus]
    color: NotRequired[Optional[str]]


class ItemChanges(TypedDict, total=False):
    """Partial edit proposed to the item store. Only moved bounds are present."""

    start: pendulum.DateTime
    end: pendulum.DateTime
