# SPDX-License-Identifier: MIT

import logging
from typing import Protocol

from lineup.errors import ItemNotFoundError
from lineup.model.entity_id import EntityId
from lineup.model.item import ItemChanges, ScheduledItem
from lineup.model.window import TimeWindow
from lineup.repository.item import ITEM_REPO, ItemRepository

logger = logging.getLogger(__name__)


class ItemStore(Protocol):
    """Persistence collaborator the timeline reads from and proposes edits to."""

    async def load_items(self, window: TimeWindow) -> list[ScheduledItem]: ...

    async def update_item(self, id: EntityId, changes: ItemChanges) -> bool:
        """Persist changed bounds; return False (or raise CommitError) on failure."""
        ...


class YamlItemStore:
    """Item store backed by the on-disk item repository."""

    def __init__(self, repository: ItemRepository = ITEM_REPO) -> None:
        self._repository = repository

    async def load_items(self, window: TimeWindow) -> list[ScheduledItem]:
        return self._repository.get_items_in_range(window["start"], window["end"])

    async def update_item(self, id: EntityId, changes: ItemChanges) -> bool:
        try:
            self._repository.modify_item(
                id, start=changes.get("start"), end=changes.get("end")
            )
        except (ItemNotFoundError, ValueError) as e:
            logger.warning("Rejected update of item %s: %s", id, e)
            return False
        self._repository.flush()
        return True
