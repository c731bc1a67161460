# SPDX-License-Identifier: MIT

import math
from typing import Optional, TypeAlias

from rich.console import Console
from rich.text import Text

from lineup.color import NOW_MARKER_COLOR, SELECTED_ITEM_COLOR, item_color
from lineup.model.layout import ItemBox, Layout
from lineup.model.window import TimeWindow
from lineup.time import datetime_to_display_local_datetime_str
from lineup.view.header import header

Cell: TypeAlias = tuple[str, str]


def to_column(offset: float, pixels_per_char: float) -> int:
    return int(offset // pixels_per_char)


def column_count(layout: Layout, pixels_per_char: float) -> int:
    return max(1, math.ceil(layout["total_width"] / pixels_per_char))


def render_tick_row(
    layout: Layout, pixels_per_char: float, left_column_width: int
) -> Text:
    """Tick labels at their columns; a label that would collide with the previous one is skipped."""
    columns = column_count(layout, pixels_per_char)
    cells = [" "] * columns
    next_free = 0
    for tick in layout["tick_marks"]:
        column = to_column(tick["offset"], pixels_per_char)
        label = tick["label"]
        if column < next_free or column + len(label) > columns:
            continue
        cells[column : column + len(label)] = list(label)
        next_free = column + len(label) + 1

    row = Text(" " * left_column_width)
    row.append("".join(cells), style="bold")
    return row


def render_lane_row(
    label: str,
    boxes: list[ItemBox],
    columns: int,
    pixels_per_char: float,
    left_column_width: int,
    now_column: Optional[int] = None,
    selected_id: Optional[str] = None,
) -> Text:
    cells: list[Cell] = [(" ", "")] * columns

    for box in boxes:
        first = min(to_column(box["left"], pixels_per_char), columns - 1)
        last = math.ceil((box["left"] + box["width"]) / pixels_per_char)
        last = min(max(last, first + 1), columns)
        color = item_color(box["item"])
        style = f"white on {color}"
        if box["item"]["id"] == selected_id:
            style = f"{SELECTED_ITEM_COLOR} on {color}"
        title = box["item"]["title"] or ""
        for index, column in enumerate(range(first, last)):
            char = title[index] if index < len(title) else " "
            cells[column] = (char, style)

    if now_column is not None and 0 <= now_column < columns:
        char, style = cells[now_column]
        if style == "":
            cells[now_column] = ("│", NOW_MARKER_COLOR)

    row = Text(label[:left_column_width].ljust(left_column_width), style="plum1")
    for char, style in cells:
        row.append(char, style=style)
    return row


def render_gantt(
    layout: Layout,
    pixels_per_char: float,
    left_column_width: int = 20,
    selected_id: Optional[str] = None,
) -> list[Text]:
    """The rows of a terminal gantt chart: tick labels, separator, then one row per lane."""
    columns = column_count(layout, pixels_per_char)
    now_column: Optional[int] = None
    if layout["now_offset"] is not None:
        now_column = min(to_column(layout["now_offset"], pixels_per_char), columns - 1)

    rows = [render_tick_row(layout, pixels_per_char, left_column_width)]
    rows.append(Text("─" * (left_column_width + columns), style="dim"))
    for group_key, lanes in layout["lanes_by_group"].items():
        for lane_index, boxes in enumerate(lanes):
            label = group_key if lane_index == 0 else ""
            rows.append(
                render_lane_row(
                    label,
                    boxes,
                    columns,
                    pixels_per_char,
                    left_column_width,
                    now_column=now_column,
                    selected_id=selected_id,
                )
            )
    return rows


def gantt_view(
    layout: Layout,
    window: TimeWindow,
    pixels_per_char: float,
    left_column_width: int = 20,
    selected_id: Optional[str] = None,
) -> None:
    """
    Print a layout as a gantt chart, one terminal row per lane.

    Args:
        layout: Layout computed for the window
        window: The window the layout was computed for
        pixels_per_char: Horizontal pixels represented by one terminal column
        left_column_width: Width of the group label column
        selected_id: Item to highlight, if any
    """
    header("gantt")

    console = Console()
    range_str = (
        f"{datetime_to_display_local_datetime_str(window['start'])} to "
        f"{datetime_to_display_local_datetime_str(window['end'])}"
    )
    console.print(
        f"\n[bold]{range_str}[/bold] "
        f"(resolution: {window['resolution']}, zoom: {window['zoom']})\n"
    )

    if not layout["lanes_by_group"]:
        console.print("[dim]No items in this window[/dim]\n")

    for row in render_gantt(
        layout, pixels_per_char, left_column_width, selected_id=selected_id
    ):
        console.print(row, no_wrap=True, overflow="crop")
