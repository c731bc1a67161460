import asyncio
import logging

from lineup.model.drag import Committing, DragMode, DragOutcome, Dragging, Idle
from lineup.service.drag import DragController, select_mode
from lineup.service.layout import find_box
from lineup.service.timeline import Timeline
from lineup.time import microseconds_between
from support import FakeStore, dt, failing_store, make_item, make_window

WINDOW = make_window(dt(2026, 1, 1), dt(2026, 1, 11), "day")


class CaptureProbe:
    def __init__(self):
        self.acquired = 0
        self.released = 0

    def __call__(self):
        self.acquired += 1

        def release():
            self.released += 1

        return release


def start_session(items, store=None, **kwargs):
    store = store if store is not None else FakeStore(items)
    timeline = Timeline(store, WINDOW, unit_widths={"day": 100})
    asyncio.run(timeline.refresh())
    controller = DragController(timeline, **kwargs)
    return store, timeline, controller


def box_of(timeline, item_id):
    box = find_box(timeline.layout(now=dt(2026, 1, 1)), item_id)
    assert box is not None
    return box


def test_press_position_selects_the_mode():
    box = {
        "item": make_item("a", dt(2026, 1, 2), dt(2026, 1, 4)),
        "group_key": "stage",
        "lane": 0,
        "left": 100.0,
        "width": 200.0,
    }

    assert select_mode(box, 105) == DragMode.MOVE_START
    assert select_mode(box, 295) == DragMode.MOVE_END
    assert select_mode(box, 200) == DragMode.MOVE_WHOLE
    assert select_mode(box, 110) == DragMode.MOVE_WHOLE


def test_move_end_across_start_is_rejected():
    _, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 5))]
    )
    assert controller.pointer_down(box_of(timeline, "a"), 395)

    session = controller.pointer_move(395 - 1000)

    assert session is not None
    assert session.mode == DragMode.MOVE_END
    assert session.live_start == dt(2026, 1, 1)
    assert session.live_end == dt(2026, 1, 5)


def test_rejected_move_end_holds_the_last_valid_value():
    _, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 5))]
    )
    controller.pointer_down(box_of(timeline, "a"), 395)

    controller.pointer_move(195)
    held = controller.pointer_move(-605)
    touching = controller.pointer_move(-5)

    assert held is not None and held.live_end == dt(2026, 1, 3)
    assert touching is not None and touching.live_end == dt(2026, 1, 3)
    assert timeline.rendered_item("a")["end"] == dt(2026, 1, 3)
    assert timeline.items[0]["end"] == dt(2026, 1, 5)


def test_move_start_never_reaches_the_end():
    _, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 2), dt(2026, 1, 4))]
    )
    controller.pointer_down(box_of(timeline, "a"), 103)

    controller.pointer_move(253)
    session = controller.pointer_move(403)

    assert session is not None
    assert session.live_start == dt(2026, 1, 3, 12)
    assert session.live_start < session.live_end


def test_move_whole_preserves_the_exact_duration():
    start = dt(2026, 1, 2, 3, 17).add(seconds=41, microseconds=9)
    end = dt(2026, 1, 4, 11, 5)
    _, timeline, controller = start_session([make_item("a", start, end)])
    duration = microseconds_between(start, end)
    controller.pointer_down(box_of(timeline, "a"), 200)

    for x in (201.3, 187.77, 512.5, -40.01, 333.333):
        session = controller.pointer_move(x)
        assert session is not None
        assert microseconds_between(session.live_start, session.live_end) == duration


def test_successful_commit_sends_changed_bounds_and_refetches():
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    )
    controller.pointer_down(box_of(timeline, "a"), 100)
    controller.pointer_move(300)

    outcome = asyncio.run(controller.pointer_up(500))

    assert outcome == DragOutcome.COMMITTED
    assert store.updates == [("a", {"start": dt(2026, 1, 5), "end": dt(2026, 1, 7)})]
    assert len(store.load_calls) == 2
    assert timeline.overlay("a") is None
    assert timeline.rendered_item("a")["start"] == dt(2026, 1, 5)
    assert isinstance(controller.state, Idle)


def test_move_end_commit_sends_only_the_end():
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    )
    controller.pointer_down(box_of(timeline, "a"), 195)

    asyncio.run(controller.pointer_up(295))

    assert store.updates == [("a", {"end": dt(2026, 1, 4)})]


def test_failed_commit_rolls_back_to_the_snapshot():
    failures = []
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))],
        store=FakeStore(
            [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))], accept=False
        ),
        on_commit_failure=lambda item_id, reason: failures.append(item_id),
    )
    controller.pointer_down(box_of(timeline, "a"), 100)
    controller.pointer_move(500)

    outcome = asyncio.run(controller.pointer_up(500))

    assert outcome == DragOutcome.ROLLED_BACK
    item = timeline.rendered_item("a")
    assert (item["start"], item["end"]) == (dt(2026, 1, 1), dt(2026, 1, 3))
    assert len(store.load_calls) == 2
    assert failures == ["a"]
    assert isinstance(controller.state, Idle)


def test_commit_error_is_treated_like_a_rejection():
    items = [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    reasons = []
    store, timeline, controller = start_session(
        items,
        store=failing_store(items, "database offline"),
        on_commit_failure=lambda item_id, reason: reasons.append(reason),
    )
    controller.pointer_down(box_of(timeline, "a"), 100)

    outcome = asyncio.run(controller.pointer_up(500))

    assert outcome == DragOutcome.ROLLED_BACK
    assert reasons == ["database offline"]
    assert timeline.rendered_item("a")["start"] == dt(2026, 1, 1)
    assert timeline.overlay("a") is None


def test_small_movement_is_a_click():
    selected = []
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))],
        on_select=selected.append,
    )
    controller.pointer_down(box_of(timeline, "a"), 100)
    controller.pointer_move(102)

    outcome = asyncio.run(controller.pointer_up(102))

    assert outcome == DragOutcome.CLICK
    assert selected == ["a"]
    assert store.updates == []
    assert timeline.rendered_item("a")["start"] == dt(2026, 1, 1)


def test_fully_rejected_gesture_commits_nothing():
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 5))]
    )
    controller.pointer_down(box_of(timeline, "a"), 395)

    outcome = asyncio.run(controller.pointer_up(-605))

    assert outcome == DragOutcome.UNCHANGED
    assert store.updates == []


def test_cancel_restores_without_persisting():
    store, timeline, controller = start_session(
        [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    )
    controller.pointer_down(box_of(timeline, "a"), 100)
    controller.pointer_move(400)

    outcome = asyncio.run(controller.cancel("pointer lost"))

    assert outcome == DragOutcome.CANCELLED
    assert store.updates == []
    assert timeline.rendered_item("a")["start"] == dt(2026, 1, 1)
    assert len(store.load_calls) == 2
    assert isinstance(controller.state, Idle)
    assert asyncio.run(controller.cancel()) == DragOutcome.IGNORED


def test_pointer_capture_is_released_on_every_exit():
    items = [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    probe = CaptureProbe()
    _, timeline, controller = start_session(items, capture_pointer=probe)
    gestures = [
        lambda: controller.pointer_up(101),
        lambda: controller.pointer_up(300),
        lambda: controller.cancel(),
    ]
    for gesture in gestures:
        controller.pointer_down(box_of(timeline, "a"), 100)
        asyncio.run(gesture())

    _, timeline, controller = start_session(
        items, store=FakeStore(items, accept=False), capture_pointer=probe
    )
    controller.pointer_down(box_of(timeline, "a"), 100)
    asyncio.run(controller.pointer_up(300))

    assert probe.acquired == 4
    assert probe.released == 4


def test_only_one_gesture_at_a_time():
    _, timeline, controller = start_session(
        [
            make_item("a", dt(2026, 1, 1), dt(2026, 1, 3)),
            make_item("b", dt(2026, 1, 5), dt(2026, 1, 7), group_key="light"),
        ]
    )
    assert controller.pointer_down(box_of(timeline, "a"), 100)

    assert not controller.pointer_down(box_of(timeline, "b"), 500)
    assert isinstance(controller.state, Dragging)
    assert controller.state.session.item_id == "a"


def test_commit_in_flight_blocks_only_the_same_item():
    items = [
        make_item("a", dt(2026, 1, 1), dt(2026, 1, 3)),
        make_item("b", dt(2026, 1, 5), dt(2026, 1, 7), group_key="light"),
    ]
    store, timeline, controller = start_session(items)

    async def scenario():
        store.gate = asyncio.Event()
        controller.pointer_down(box_of(timeline, "a"), 100)
        commit = asyncio.create_task(controller.pointer_up(300))
        await asyncio.sleep(0)

        assert isinstance(controller.state, Committing)
        assert controller.committing == ("a",)
        assert timeline.rendered_item("a")["start"] == dt(2026, 1, 3)
        assert not controller.pointer_down(box_of(timeline, "a"), 300)
        assert controller.pointer_down(box_of(timeline, "b"), 500)

        store.gate.set()
        outcome = await commit
        return outcome

    outcome = asyncio.run(scenario())

    assert outcome == DragOutcome.COMMITTED
    assert isinstance(controller.state, Dragging)
    assert controller.state.session.item_id == "b"
    assert controller.committing == ()


def test_pointer_up_without_a_drag_is_ignored():
    _, _, controller = start_session([])

    assert asyncio.run(controller.pointer_up(10)) == DragOutcome.IGNORED
    assert controller.pointer_move(10) is None


def test_cancel_during_a_commit_is_ignored_and_logged(caplog):
    items = [make_item("a", dt(2026, 1, 1), dt(2026, 1, 3))]
    store, timeline, controller = start_session(items)

    async def scenario():
        store.gate = asyncio.Event()
        controller.pointer_down(box_of(timeline, "a"), 100)
        commit = asyncio.create_task(controller.pointer_up(300))
        await asyncio.sleep(0)

        cancelled = await controller.cancel("pointer lost")

        store.gate.set()
        return cancelled, await commit

    with caplog.at_level(logging.DEBUG, logger="lineup.service.drag"):
        cancelled, committed = asyncio.run(scenario())

    assert cancelled == DragOutcome.IGNORED
    assert committed == DragOutcome.COMMITTED
    assert "ignored in state Committing" in caplog.text
    assert store.updates == [("a", {"start": dt(2026, 1, 3), "end": dt(2026, 1, 5)})]
