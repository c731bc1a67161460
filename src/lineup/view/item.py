# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from lineup.color import item_color
from lineup.model.entity_id import short_entity_id
from lineup.model.item import ScheduledItem
from lineup.time import datetime_to_display_local_datetime_str
from lineup.view.header import header


def items_view(report_name: str, items: list[ScheduledItem], use_color: bool = True) -> None:
    header(report_name)

    items_table = Table(box=box.SIMPLE)
    for column in ["id", "group", "title", "status", "start", "end"]:
        items_table.add_column(column)

    for item in sorted(items, key=lambda item: (item["group_key"], item["start"])):
        row = [
            short_entity_id(item["id"]),
            item["group_key"],
            item["title"] or "",
            item.get("status", "draft"),
            datetime_to_display_local_datetime_str(item["start"]),
            datetime_to_display_local_datetime_str(item["end"]),
        ]
        if use_color:
            color = item_color(item)
            row = [f"[{color}]{value}[/{color}]" for value in row]
        items_table.add_row(*row)

    console = Console()
    console.print(items_table)


def single_item_view(item: ScheduledItem) -> None:
    header("item")

    item_table = Table(box=box.SIMPLE)
    item_table.add_column("property")
    item_table.add_column("value")

    item_table.add_row("id", item["id"])
    item_table.add_row("group", item["group_key"])
    item_table.add_row("title", item["title"] or "")
    item_table.add_row("status", item.get("status", "draft"))
    item_table.add_row("color", item.get("color") or "")
    item_table.add_row("start", datetime_to_display_local_datetime_str(item["start"]))
    item_table.add_row("end", datetime_to_display_local_datetime_str(item["end"]))

    console = Console()
    console.print(item_table)
