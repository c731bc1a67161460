"""Builders and in-memory fakes shared by the tests."""

import asyncio
from copy import deepcopy
from typing import Iterable, Optional

import pendulum

from lineup.errors import CommitError
from lineup.model.item import ItemChanges, ScheduledItem
from lineup.model.window import Resolution, TimeWindow


def dt(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> pendulum.DateTime:
    return pendulum.datetime(year, month, day, hour, minute, tz="UTC")


def make_item(
    id: str,
    start: pendulum.DateTime,
    end: pendulum.DateTime,
    group_key: str = "stage",
    title: Optional[str] = None,
) -> ScheduledItem:
    return {
        "id": id,
        "group_key": group_key,
        "start": start,
        "end": end,
        "title": title if title is not None else id,
    }


def make_window(
    start: pendulum.DateTime,
    end: pendulum.DateTime,
    resolution: Resolution = "day",
    zoom: float = 1.0,
) -> TimeWindow:
    return {"start": start, "end": end, "resolution": resolution, "zoom": zoom}


class FakeStore:
    """In-memory item store that records every call."""

    def __init__(
        self,
        items: Iterable[ScheduledItem] = (),
        accept: bool = True,
        error: Optional[Exception] = None,
    ) -> None:
        self.items = {item["id"]: deepcopy(item) for item in items}
        self.accept = accept
        self.error = error
        self.load_calls: list[TimeWindow] = []
        self.updates: list[tuple[str, ItemChanges]] = []
        self.gate: Optional[asyncio.Event] = None

    async def load_items(self, window: TimeWindow) -> list[ScheduledItem]:
        self.load_calls.append(window)
        return [deepcopy(item) for item in self.items.values()]

    async def update_item(self, id: str, changes: ItemChanges) -> bool:
        self.updates.append((id, dict(changes)))  # type: ignore[arg-type]
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if not self.accept:
            return False
        self.items[id] = {**self.items[id], **changes}  # type: ignore[typeddict-item]
        return True


def failing_store(items: list[ScheduledItem], message: str = "database offline") -> FakeStore:
    return FakeStore(items, error=CommitError(message))
