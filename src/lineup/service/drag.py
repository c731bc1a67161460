# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional, TypeAlias

from lineup.errors import CommitError
from lineup.model.drag import (
    IDLE,
    Committing,
    DragMode,
    DragOutcome,
    DragSession,
    DragState,
    Dragging,
    RollingBack,
)
from lineup.model.entity_id import EntityId
from lineup.model.item import ItemChanges
from lineup.model.layout import ItemBox
from lineup.service.timeline import Timeline
from lineup.time import microseconds_between

logger = logging.getLogger(__name__)

# Distance from a box edge, in pixels, inside which a press grabs that edge.
# Constant at every zoom level.
EDGE_THRESHOLD_PX = 10

# Net horizontal movement below which a press/release pair is a click.
CLICK_TOLERANCE_PX = 3

ReleaseCapture: TypeAlias = Callable[[], None]


def select_mode(box: ItemBox, x: float) -> DragMode:
    offset = x - box["left"]
    if offset < EDGE_THRESHOLD_PX:
        return DragMode.MOVE_START
    if offset > box["width"] - EDGE_THRESHOLD_PX:
        return DragMode.MOVE_END
    return DragMode.MOVE_WHOLE


def session_changes(session: DragSession) -> ItemChanges:
    """Only the bounds a gesture of this mode can alter."""
    if session.mode == DragMode.MOVE_START:
        return {"start": session.live_start}
    if session.mode == DragMode.MOVE_END:
        return {"end": session.live_end}
    return {"start": session.live_start, "end": session.live_end}


class DragController:
    """
    Pointer driven editing of item intervals against a timeline.

    The foreground gesture moves through Idle, Dragging, Committing and
    RollingBack. While a commit is awaited the gesture state already allows a
    new drag on any other item; the committing item keeps rendering at its live
    bounds until the store answers.

    Args:
        timeline: Session holding the authoritative items and drag overlays
        capture_pointer: Called on entering Dragging; returns the function
            that releases the capture
        on_select: Called with the item id when a press/release is a click
        on_commit_failure: Called with the item id and a reason after a
            rejected commit has been rolled back
        on_change: Called whenever the rendered items change
    """

    def __init__(
        self,
        timeline: Timeline,
        capture_pointer: Optional[Callable[[], ReleaseCapture]] = None,
        on_select: Optional[Callable[[EntityId], None]] = None,
        on_commit_failure: Optional[Callable[[EntityId, str], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.timeline = timeline
        self._capture_pointer = capture_pointer
        self._on_select = on_select
        self._on_commit_failure = on_commit_failure
        self._on_change = on_change
        self._state: DragState = IDLE
        self._release: Optional[ReleaseCapture] = None
        self._in_flight: dict[EntityId, DragSession] = {}

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def committing(self) -> tuple[EntityId, ...]:
        """Ids of items whose commit is still awaited."""
        return tuple(self._in_flight)

    def pointer_down(self, box: ItemBox, x: float) -> bool:
        """Start a drag on a rendered box; False when a drag cannot start now."""
        if isinstance(self._state, (Dragging, RollingBack)):
            return False
        item = box["item"]
        if item["id"] in self._in_flight:
            logger.debug("Item %s is still committing, drag refused", item["id"])
            return False

        mode = select_mode(box, x)
        session = DragSession(
            item_id=item["id"],
            mode=mode,
            anchor_x=x,
            original_start=item["start"],
            original_end=item["end"],
            live_start=item["start"],
            live_end=item["end"],
        )
        if self._capture_pointer is not None:
            self._release = self._capture_pointer()
        self._state = Dragging(session)
        self.timeline.set_overlay(session)
        logger.debug("Drag %s started on item %s", mode.value, item["id"])
        return True

    def pointer_move(self, x: float) -> Optional[DragSession]:
        if not isinstance(self._state, Dragging):
            return None
        session = self._state.session
        axis = self.timeline.axis()
        dx = x - session.anchor_x

        live_start = session.live_start
        live_end = session.live_end
        if session.mode == DragMode.MOVE_START:
            candidate = axis.shift(session.original_start, dx)
            # Reaching or crossing the end is rejected and the last value held
            if candidate < session.live_end:
                live_start = candidate
        elif session.mode == DragMode.MOVE_END:
            candidate = axis.shift(session.original_end, dx)
            if candidate > session.live_start:
                live_end = candidate
        else:
            duration = microseconds_between(
                session.original_start, session.original_end
            )
            live_start = axis.shift(session.original_start, dx)
            live_end = live_start.add(microseconds=duration)

        if live_start != session.live_start or live_end != session.live_end:
            session = session.with_live(live_start, live_end)
            self._state = Dragging(session)
            self.timeline.set_overlay(session)
            self._notify_change()
        return session

    async def pointer_up(self, x: float) -> DragOutcome:
        if not isinstance(self._state, Dragging):
            return DragOutcome.IGNORED
        session = self._state.session

        if abs(x - session.anchor_x) < CLICK_TOLERANCE_PX:
            self._end_gesture(session)
            logger.debug("Press on item %s treated as a click", session.item_id)
            if self._on_select is not None:
                self._on_select(session.item_id)
            return DragOutcome.CLICK

        moved = self.pointer_move(x)
        if moved is not None:
            session = moved
        if not session.has_moved:
            self._end_gesture(session)
            return DragOutcome.UNCHANGED

        self._release_capture()
        self._state = Committing(session)
        self._in_flight[session.item_id] = session
        logger.debug(
            "Committing item %s: %s -> %s",
            session.item_id,
            session.live_start,
            session.live_end,
        )
        try:
            try:
                accepted = await self.timeline.store.update_item(
                    session.item_id, session_changes(session)
                )
                reason = "the store rejected the change"
            except CommitError as e:
                accepted = False
                reason = str(e) or "the commit failed"

            if accepted:
                await self.timeline.refresh()
                logger.debug("Item %s committed", session.item_id)
                return DragOutcome.COMMITTED

            await self._roll_back(session, reason)
            return DragOutcome.ROLLED_BACK
        finally:
            self._in_flight.pop(session.item_id, None)
            self.timeline.clear_overlay(session.item_id)
            self._settle(session)
            self._notify_change()

    async def cancel(self, reason: str = "cancelled") -> DragOutcome:
        """Abandon the gesture in progress, e.g. when the pointer capture is lost."""
        if not isinstance(self._state, Dragging):
            logger.debug(
                "Cancel (%s) ignored in state %s", reason, type(self._state).__name__
            )
            return DragOutcome.IGNORED
        session = self._state.session
        self._release_capture()
        self._state = RollingBack(session, reason)
        self.timeline.clear_overlay(session.item_id)
        self._notify_change()
        logger.debug("Drag on item %s cancelled: %s", session.item_id, reason)
        try:
            await self.timeline.refresh()
        finally:
            self._settle(session)
            self._notify_change()
        return DragOutcome.CANCELLED

    async def _roll_back(self, session: DragSession, reason: str) -> None:
        if self._is_foreground(session):
            self._state = RollingBack(session, reason)
        self.timeline.clear_overlay(session.item_id)
        self._notify_change()
        logger.warning("Commit of item %s failed: %s", session.item_id, reason)
        if self._on_commit_failure is not None:
            self._on_commit_failure(session.item_id, reason)
        await self.timeline.refresh()

    def _end_gesture(self, session: DragSession) -> None:
        self._release_capture()
        self.timeline.clear_overlay(session.item_id)
        self._state = IDLE
        self._notify_change()

    def _is_foreground(self, session: DragSession) -> bool:
        state = self._state
        return isinstance(state, (Committing, RollingBack)) and state.session is session

    def _settle(self, session: DragSession) -> None:
        # A later gesture may already own the foreground state
        if self._is_foreground(session):
            self._state = IDLE

    def _release_capture(self) -> None:
        if self._release is not None:
            release = self._release
            self._release = None
            release()

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._on_change()
