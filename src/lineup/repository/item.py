# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lineup import configuration, time
from lineup.errors import ItemNotFoundError
from lineup.model.entity_id import EntityId, generate_entity_id
from lineup.model.item import ItemStatus, ScheduledItem


class ItemRepository:
    def __init__(self) -> None:
        self._items: Optional[list[ScheduledItem]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def items(self) -> list[ScheduledItem]:
        if self._items is None:
            self.__load_data()
        if self._items is None:
            raise ValueError()
        return self._items

    def __load_data(self) -> None:
        self._items = []
        if not configuration.DATA_ITEMS_DIR.is_dir():
            return
        for file_path in sorted(configuration.DATA_ITEMS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_item = load(file_path.read_text(), Loader=Loader)
            if raw_item is not None:
                self._items.append(self.__convert_item_for_deserialization(raw_item))

    def __save_data(self) -> None:
        configuration.DATA_ITEMS_DIR.mkdir(parents=True, exist_ok=True)

        # Write dirty entities
        for item in self.items:
            if item["id"] in self._dirty_ids:
                serializable_item = self.__convert_item_for_serialization(
                    deepcopy(item)
                )
                file_path = configuration.DATA_ITEMS_DIR / f"{item['id']}.yaml"
                file_path.write_text(dump(serializable_item, Dumper=Dumper))

        # Remove deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_ITEMS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._items is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_item_for_serialization(self, item: ScheduledItem) -> dict[str, Any]:
        serializable_item = cast(dict[str, Any], item)
        serializable_item["start"] = time.datetime_to_iso_str(serializable_item["start"])
        serializable_item["end"] = time.datetime_to_iso_str(serializable_item["end"])
        return serializable_item

    def __convert_item_for_deserialization(self, item: dict[str, Any]) -> ScheduledItem:
        deserializable_item = item
        deserializable_item["start"] = time.datetime_from_str(
            deserializable_item["start"]
        )
        deserializable_item["end"] = time.datetime_from_str(deserializable_item["end"])
        return cast(ScheduledItem, deserializable_item)

    def __find(self, id: EntityId) -> ScheduledItem:
        for item in self.items:
            if item["id"] == id:
                return item
        raise ItemNotFoundError(id)

    def save_new_item(
        self,
        group_key: str,
        start: pendulum.DateTime,
        end: pendulum.DateTime,
        title: Optional[str],
        status: ItemStatus = "draft",
        color: Optional[str] = None,
    ) -> EntityId:
        if end < start:
            raise ValueError("item end must not be before its start")
        self.is_dirty = True

        item: ScheduledItem = {
            "id": generate_entity_id(),
            "group_key": group_key,
            "start": start,
            "end": end,
            "title": title,
            "status": status,
            "color": color,
        }
        self.items.append(item)
        self._dirty_ids.add(item["id"])
        return item["id"]

    def modify_item(
        self,
        id: EntityId,
        group_key: Optional[str] = None,
        start: Optional[pendulum.DateTime] = None,
        end: Optional[pendulum.DateTime] = None,
        title: Optional[str] = None,
        status: Optional[ItemStatus] = None,
        color: Optional[str] = None,
        remove_title: bool = False,
        remove_color: bool = False,
    ) -> None:
        item = self.__find(id)

        new_start = start if start is not None else item["start"]
        new_end = end if end is not None else item["end"]
        if new_end < new_start:
            raise ValueError("item end must not be before its start")

        self.is_dirty = True
        self._dirty_ids.add(id)

        if group_key is not None:
            item["group_key"] = group_key
        item["start"] = new_start
        item["end"] = new_end
        if title is not None:
            item["title"] = title
        if status is not None:
            item["status"] = status
        if color is not None:
            item["color"] = color

        if remove_title:
            item["title"] = None
        if remove_color:
            item["color"] = None

    def delete_item(self, id: EntityId) -> None:
        item = self.__find(id)
        self.is_dirty = True
        self._items = [other for other in self.items if other is not item]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_items(self) -> list[ScheduledItem]:
        return deepcopy(self.items)

    def get_item(self, id: EntityId) -> ScheduledItem:
        return deepcopy(self.__find(id))

    def get_items_in_range(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> list[ScheduledItem]:
        """Items whose [start, end) intersects [start, end]; zero-length items count when inside."""
        matching = []
        for item in self.items:
            if item["start"] == item["end"]:
                if start <= item["start"] <= end:
                    matching.append(item)
            elif item["start"] < end and item["end"] > start:
                matching.append(item)
        return deepcopy(matching)


ITEM_REPO = ItemRepository()
