# SPDX-License-Identifier: MIT

import logging
from typing import Mapping, Optional

import pendulum

from lineup.model.drag import DragSession
from lineup.model.entity_id import EntityId
from lineup.model.item import ScheduledItem
from lineup.model.layout import Layout
from lineup.model.window import Resolution, TimeWindow
from lineup.service.layout import compute_layout, merge_overlay
from lineup.service.store import ItemStore
from lineup.service.time_axis import TimeAxis

logger = logging.getLogger(__name__)


class Timeline:
    """
    The authoritative item list for one window, plus live drag overlays.

    The item list is only ever replaced wholesale by a fresh load from the
    store. Overlays are never merged into it; rendering reads through them.
    When refreshes overlap, the one started last wins and results of older
    refreshes are dropped.
    """

    def __init__(
        self,
        store: ItemStore,
        window: TimeWindow,
        unit_widths: Optional[Mapping[Resolution, float]] = None,
        min_widths: Optional[Mapping[Resolution, float]] = None,
    ) -> None:
        self.store = store
        self._window = window
        self._unit_widths = unit_widths
        self._min_widths = min_widths
        # Fails fast on an inverted window
        self.axis()
        self._items: tuple[ScheduledItem, ...] = ()
        self._overlays: dict[EntityId, DragSession] = {}
        self._refresh_generation = 0

    @property
    def window(self) -> TimeWindow:
        return self._window

    @property
    def items(self) -> list[ScheduledItem]:
        return list(self._items)

    def set_window(self, window: TimeWindow) -> None:
        # Fails fast on an inverted window before anything is replaced
        TimeAxis(window, self._unit_widths, self._min_widths)
        self._window = window

    def axis(self) -> TimeAxis:
        return TimeAxis(
            self._window, unit_widths=self._unit_widths, min_widths=self._min_widths
        )

    async def refresh(self) -> bool:
        """Reload the window from the store and replace the item list wholesale."""
        self._refresh_generation += 1
        generation = self._refresh_generation
        window = self._window
        try:
            loaded = await self.store.load_items(window)
        except Exception:
            logger.warning("Refreshing the timeline failed", exc_info=True)
            return False
        if generation != self._refresh_generation:
            logger.debug("Dropping superseded refresh %d", generation)
            return False
        self._items = tuple(loaded)
        logger.debug("Timeline refreshed with %d items", len(self._items))
        return True

    def set_overlay(self, session: DragSession) -> None:
        self._overlays[session.item_id] = session

    def clear_overlay(self, item_id: EntityId) -> None:
        self._overlays.pop(item_id, None)

    def overlay(self, item_id: EntityId) -> Optional[DragSession]:
        return self._overlays.get(item_id)

    def rendered_items(self) -> list[ScheduledItem]:
        return merge_overlay(self._items, self._overlays)

    def rendered_item(self, item_id: EntityId) -> Optional[ScheduledItem]:
        for item in self.rendered_items():
            if item["id"] == item_id:
                return item
        return None

    def layout(self, now: Optional[pendulum.DateTime] = None) -> Layout:
        return compute_layout(
            self._items,
            self._window,
            now=now,
            unit_widths=self._unit_widths,
            min_widths=self._min_widths,
            overlays=self._overlays,
        )
