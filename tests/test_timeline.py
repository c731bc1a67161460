import asyncio

import pytest

from lineup.errors import InvalidWindowError
from lineup.service.timeline import Timeline
from support import FakeStore, dt, make_item, make_window

WINDOW = make_window(dt(2026, 1, 1), dt(2026, 1, 11), "day")


class SequencedStore:
    """Answers each load with the next batch, holding the first one until released."""

    def __init__(self, batches):
        self.batches = list(batches)
        self.release_first = None
        self.calls = 0

    async def load_items(self, window):
        self.calls += 1
        batch = self.batches.pop(0)
        if self.calls == 1:
            await self.release_first.wait()
        return batch

    async def update_item(self, id, changes):
        return True


class BrokenStore(FakeStore):
    async def load_items(self, window):
        raise RuntimeError("connection reset")


def test_refresh_replaces_the_items_wholesale():
    store = FakeStore([make_item("a", dt(2026, 1, 2), dt(2026, 1, 3))])
    timeline = Timeline(store, WINDOW)

    assert asyncio.run(timeline.refresh())
    assert [item["id"] for item in timeline.items] == ["a"]

    store.items = {"b": make_item("b", dt(2026, 1, 4), dt(2026, 1, 5))}
    asyncio.run(timeline.refresh())

    assert [item["id"] for item in timeline.items] == ["b"]
    assert store.load_calls == [WINDOW, WINDOW]


def test_last_started_refresh_wins():
    old = [make_item("old", dt(2026, 1, 2), dt(2026, 1, 3))]
    new = [make_item("new", dt(2026, 1, 2), dt(2026, 1, 3))]
    store = SequencedStore([old, new])
    timeline = Timeline(store, WINDOW)

    async def scenario():
        store.release_first = asyncio.Event()
        first = asyncio.create_task(timeline.refresh())
        await asyncio.sleep(0)
        second = await timeline.refresh()
        store.release_first.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert (first, second) == (False, True)
    assert [item["id"] for item in timeline.items] == ["new"]


def test_failed_refresh_keeps_the_previous_items():
    store = BrokenStore()
    timeline = Timeline(FakeStore([make_item("a", dt(2026, 1, 2), dt(2026, 1, 3))]), WINDOW)
    asyncio.run(timeline.refresh())
    timeline.store = store

    assert not asyncio.run(timeline.refresh())
    assert [item["id"] for item in timeline.items] == ["a"]


def test_inverted_window_is_refused():
    timeline = Timeline(FakeStore(), WINDOW)

    with pytest.raises(InvalidWindowError):
        timeline.set_window(make_window(dt(2026, 2, 1), dt(2026, 1, 1)))
    assert timeline.window == WINDOW


def test_construction_validates_the_window_with_the_configured_axis():
    with pytest.raises(InvalidWindowError):
        Timeline(FakeStore(), make_window(dt(2026, 2, 1), dt(2026, 1, 1)))

    timeline = Timeline(
        FakeStore(), WINDOW, unit_widths={"day": 40}, min_widths={"day": 5}
    )
    axis = timeline.axis()

    assert (axis.unit_width, axis.min_width) == (40, 5)
    assert axis.total_width == 400
