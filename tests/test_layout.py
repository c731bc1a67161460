from lineup.model.drag import DragMode, DragSession
from lineup.service.layout import compute_layout, find_box, hit_test, merge_overlay
from support import dt, make_item, make_window

WINDOW = make_window(dt(2026, 1, 1), dt(2026, 1, 11), "day")
WIDTHS = {"day": 100}


def test_layout_places_visible_items_in_lanes():
    items = [
        make_item("a", dt(2026, 1, 2), dt(2026, 1, 4)),
        make_item("b", dt(2026, 1, 3), dt(2026, 1, 5)),
        make_item("c", dt(2026, 2, 1), dt(2026, 2, 3)),
    ]

    layout = compute_layout(items, WINDOW, now=dt(2026, 1, 6), unit_widths=WIDTHS)

    lanes = layout["lanes_by_group"]["stage"]
    assert [[box["item"]["id"] for box in lane] for lane in lanes] == [["a"], ["b"]]
    assert (lanes[0][0]["left"], lanes[0][0]["width"]) == (100, 200)
    assert lanes[1][0]["lane"] == 1
    assert layout["now_offset"] == 500
    assert layout["total_width"] == 1000
    assert len(layout["tick_marks"]) == 11


def test_layout_omits_now_marker_outside_the_window():
    layout = compute_layout([], WINDOW, now=dt(2027, 1, 1), unit_widths=WIDTHS)

    assert layout["now_offset"] is None
    assert layout["lanes_by_group"] == {}


def test_overlay_replaces_only_the_dragged_item():
    a = make_item("a", dt(2026, 1, 2), dt(2026, 1, 4))
    b = make_item("b", dt(2026, 1, 5), dt(2026, 1, 6))
    session = DragSession(
        item_id="a",
        mode=DragMode.MOVE_WHOLE,
        anchor_x=150,
        original_start=a["start"],
        original_end=a["end"],
        live_start=dt(2026, 1, 5),
        live_end=dt(2026, 1, 7),
    )

    merged = merge_overlay([a, b], {"a": session})

    assert merged[0]["start"] == dt(2026, 1, 5)
    assert merged[1] is b
    assert a["start"] == dt(2026, 1, 2)

    layout = compute_layout(
        [a, b], WINDOW, now=dt(2026, 1, 1), unit_widths=WIDTHS, overlays={"a": session}
    )
    assert len(layout["lanes_by_group"]["stage"]) == 2


def test_find_box_and_hit_test():
    items = [make_item("a", dt(2026, 1, 2), dt(2026, 1, 4), group_key="light")]
    layout = compute_layout(items, WINDOW, now=dt(2026, 1, 1), unit_widths=WIDTHS)

    box = find_box(layout, "a")
    assert box is not None
    assert box["group_key"] == "light"
    assert hit_test(layout, "light", 0, 250) is box
    assert hit_test(layout, "light", 0, 350) is None
    assert hit_test(layout, "light", 1, 250) is None
    assert find_box(layout, "missing") is None
