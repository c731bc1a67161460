# SPDX-License-Identifier: MIT

import asyncio
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from lineup.model.drag import DragOutcome
from lineup.model.window import TimeWindow
from lineup.repository.configuration import CONFIGURATION_REPO
from lineup.repository.view import VIEW_REPO
from lineup.service.drag import EDGE_THRESHOLD_PX, DragController
from lineup.service.layout import find_box
from lineup.service.store import YamlItemStore
from lineup.service.timeline import Timeline
from lineup.service.viewport import ViewportController, default_window
from lineup.terminal.parse import parse_datetime, parse_item_id, parse_resolution
from lineup.time import now_utc
from lineup.view.gantt import gantt_view

DATETIME_HELP = "valid inputs: YYYY-MM-DD HH:mm, YYYY-MM-DD, (H)H:mm, today, yesterday, tomorrow, or day offset like 1, -1"


def current_window() -> TimeWindow:
    """The cached window of the previous view, or a fresh one from the configuration."""
    window = VIEW_REPO.get_window()
    if window is not None:
        return window
    config = CONFIGURATION_REPO.get_config()
    return default_window(
        config["default_resolution"], config["default_zoom"], now_utc()
    )


def build_timeline(window: TimeWindow) -> Timeline:
    config = CONFIGURATION_REPO.get_config()
    return Timeline(
        YamlItemStore(),
        window,
        unit_widths=config["unit_widths"],
        min_widths=config["min_widths"],
    )


def show_timeline(timeline: Timeline, selected_id: Optional[str] = None) -> None:
    asyncio.run(timeline.refresh())
    VIEW_REPO.save_window(timeline.window)
    config = CONFIGURATION_REPO.get_config()
    gantt_view(
        timeline.layout(),
        timeline.window,
        config["pixels_per_char"],
        selected_id=selected_id,
    )


def gantt(
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--end", "-e", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    resolution: Annotated[
        Optional[str],
        typer.Option("--resolution", "-r", help="hour, day, week or month"),
    ] = None,
    zoom: Annotated[Optional[float], typer.Option("--zoom", "-z")] = None,
    select: Annotated[
        Optional[str], typer.Option("--select", help="item id to highlight")
    ] = None,
) -> None:
    """Render the items of the current window as a gantt chart."""
    window = current_window()
    if start is not None:
        window["start"] = start
    if end is not None:
        window["end"] = end
    if zoom is not None:
        window["zoom"] = zoom
    parsed_resolution = parse_resolution(resolution)
    if parsed_resolution is not None:
        window["resolution"] = parsed_resolution
    if window["start"] > window["end"]:
        raise typer.BadParameter("start must not be after end")

    selected_id = parse_item_id(select) if select is not None else None
    show_timeline(build_timeline(window), selected_id=selected_id)


def drag(
    id: str,
    dx: Annotated[
        float,
        typer.Option("--dx", help="horizontal pointer movement in pixels"),
    ],
    grab: Annotated[
        str,
        typer.Option("--grab", "-g", help="where the item is pressed: start, end or whole"),
    ] = "whole",
    cancel: Annotated[
        bool,
        typer.Option("--cancel", help="lose the pointer before releasing"),
    ] = False,
) -> None:
    """Replay a pointer drag on an item of the current window."""
    console = Console()
    real_id = parse_item_id(id)
    timeline = build_timeline(current_window())

    failures: list[str] = []
    controller = DragController(
        timeline,
        on_commit_failure=lambda item_id, reason: failures.append(reason),
    )

    async def replay() -> DragOutcome:
        await timeline.refresh()
        box = find_box(timeline.layout(), real_id)
        if box is None:
            raise typer.BadParameter(f"Item {id} is not in the current window")
        if grab == "start":
            x = box["left"] + EDGE_THRESHOLD_PX / 2
        elif grab == "end":
            x = box["left"] + box["width"] - EDGE_THRESHOLD_PX / 2
        elif grab == "whole":
            x = box["left"] + box["width"] / 2
        else:
            raise typer.BadParameter("grab must be one of start, end or whole")

        controller.pointer_down(box, x)
        controller.pointer_move(x + dx)
        if cancel:
            return await controller.cancel("pointer lost")
        return await controller.pointer_up(x + dx)

    outcome = asyncio.run(replay())
    if outcome == DragOutcome.ROLLED_BACK:
        console.print(f"[red]Drag rolled back: {', '.join(failures)}[/red]")
    else:
        console.print(f"[green]Drag {outcome.value}[/green]")
    show_timeline(timeline, selected_id=real_id)
    if outcome == DragOutcome.ROLLED_BACK:
        raise typer.Exit(1)


def zoom(
    direction: Annotated[str, typer.Argument(help="in or out")],
) -> None:
    """Step the zoom of the current window, keeping its centre in place."""
    timeline = build_timeline(current_window())
    viewport = ViewportController(timeline)
    if direction == "in":
        changed = viewport.zoom_in()
    elif direction == "out":
        changed = viewport.zoom_out()
    else:
        raise typer.BadParameter("direction must be in or out")
    if not changed:
        Console().print("[dim]Already at the zoom limit[/dim]")
    show_timeline(timeline)


def pan(
    direction: Annotated[str, typer.Argument(help="left or right")],
    large: Annotated[bool, typer.Option("--large", "-l")] = False,
    pixels: Annotated[
        Optional[float],
        typer.Option("--pixels", "-p", help="pan by this many pixels instead"),
    ] = None,
) -> None:
    """Move the current window earlier (left) or later (right)."""
    if direction not in ("left", "right"):
        raise typer.BadParameter("direction must be left or right")
    timeline = build_timeline(current_window())
    viewport = ViewportController(timeline)
    if pixels is not None:
        viewport.pan_pixels(pixels if direction == "left" else -pixels)
    else:
        viewport.key(direction, modifier=large)
    show_timeline(timeline)


def today() -> None:
    """Recentre the current window on now."""
    timeline = build_timeline(current_window())
    ViewportController(timeline).today()
    show_timeline(timeline)
