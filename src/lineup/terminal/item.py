# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from lineup.errors import ItemNotFoundError
from lineup.repository.item import ITEM_REPO
from lineup.terminal.custom_typer import AliasedTyperGroup
from lineup.terminal.parse import parse_datetime, parse_item_id, parse_status
from lineup.view import item as item_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATETIME_HELP = "valid inputs: YYYY-MM-DD HH:mm, YYYY-MM-DD, (H)H:mm, today, yesterday, tomorrow, or day offset like 1, -1"


@app.command("add, a", no_args_is_help=True)
def add(
    group: Annotated[str, typer.Argument(help="group the item is laid out in")],
    start: Annotated[
        pendulum.DateTime,
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ],
    end: Annotated[
        pendulum.DateTime,
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ],
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    status: Annotated[
        Optional[str],
        typer.Option(
            "--status",
            "-st",
            help="draft, request, in_work, completed or canceled",
        ),
    ] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
) -> None:
    if end < start:
        raise typer.BadParameter("end must not be before start")

    id = ITEM_REPO.save_new_item(
        group,
        start.in_tz("UTC"),
        end.in_tz("UTC"),
        title,
        status=parse_status(status) or "draft",
        color=color,
    )
    item_report.single_item_view(ITEM_REPO.get_item(id))


@app.command("list, ls")
def list_items(
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    group: Annotated[Optional[str], typer.Option("--group", "-g")] = None,
) -> None:
    if start is not None and end is not None:
        items = ITEM_REPO.get_items_in_range(start, end)
    else:
        items = ITEM_REPO.get_all_items()
        if start is not None:
            items = [item for item in items if item["end"] >= start]
        if end is not None:
            items = [item for item in items if item["start"] <= end]
    if group is not None:
        items = [item for item in items if item["group_key"] == group]

    item_report.items_view("items", items)


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    item_report.single_item_view(ITEM_REPO.get_item(parse_item_id(id)))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    group: Annotated[Optional[str], typer.Option("--group", "-g")] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    status: Annotated[Optional[str], typer.Option("--status", "-st")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
    remove_title: Annotated[bool, typer.Option("--remove-title", "-rt")] = False,
    remove_color: Annotated[bool, typer.Option("--remove-color", "-rcol")] = False,
) -> None:
    real_id = parse_item_id(id)
    try:
        ITEM_REPO.modify_item(
            real_id,
            group_key=group,
            start=start.in_tz("UTC") if start is not None else None,
            end=end.in_tz("UTC") if end is not None else None,
            title=title,
            status=parse_status(status),
            color=color,
            remove_title=remove_title,
            remove_color=remove_color,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    item_report.single_item_view(ITEM_REPO.get_item(real_id))


@app.command("delete, d", no_args_is_help=True)
def delete(id: str) -> None:
    real_id = parse_item_id(id)
    try:
        ITEM_REPO.delete_item(real_id)
    except ItemNotFoundError as e:
        Console().print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    Console().print(f"[green]Deleted item {real_id}[/green]")
