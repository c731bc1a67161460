# SPDX-License-Identifier: MIT

from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeAlias

import pendulum

from lineup.model.entity_id import EntityId


class DragMode(Enum):
    MOVE_START = "move_start"
    MOVE_END = "move_end"
    MOVE_WHOLE = "move_whole"


class DragOutcome(Enum):
    CLICK = "click"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    CANCELLED = "cancelled"
    IGNORED = "ignored"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DragSession:
    item_id: EntityId
    mode: DragMode
    anchor_x: float
    original_start: pendulum.DateTime
    original_end: pendulum.DateTime
    live_start: pendulum.DateTime
    live_end: pendulum.DateTime

    def with_live(
        self, live_start: pendulum.DateTime, live_end: pendulum.DateTime
    ) -> "DragSession":
        return replace(self, live_start=live_start, live_end=live_end)

    @property
    def has_moved(self) -> bool:
        return (
            self.live_start != self.original_start
            or self.live_end != self.original_end
        )


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    session: DragSession


@dataclass(frozen=True)
class Committing:
    session: DragSession


@dataclass(frozen=True)
class RollingBack:
    session: DragSession
    reason: str


DragState: TypeAlias = Idle | Dragging | Committing | RollingBack

IDLE = Idle()
