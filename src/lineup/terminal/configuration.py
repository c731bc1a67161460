# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from lineup.configuration import Configuration
from lineup.model.window import RESOLUTIONS, Resolution
from lineup.repository.configuration import CONFIGURATION_REPO
from lineup.terminal.custom_typer import AliasedTyperGroup
from lineup.terminal.parse import parse_resolution

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _widths(widths: dict[Resolution, float]) -> str:
    return ", ".join(f"{resolution}={widths[resolution]:g}" for resolution in RESOLUTIONS)


def _configuration_table(config: Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("default_resolution", config["default_resolution"])
    table.add_row("default_zoom", f"{config['default_zoom']:g}")
    table.add_row("unit_widths", _widths(config["unit_widths"]))
    table.add_row("min_widths", _widths(config["min_widths"]))
    table.add_row("pixels_per_char", f"{config['pixels_per_char']:g}")
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (platform default)",
    )
    return table


def _parse_width_options(options: Optional[list[str]]) -> Optional[dict[Resolution, float]]:
    """Parse repeated resolution=pixels options, e.g. --unit-width day=150."""
    if options is None:
        return None
    widths: dict[Resolution, float] = {}
    for option in options:
        resolution, separator, value = option.partition("=")
        parsed_resolution = parse_resolution(resolution)
        if not separator or parsed_resolution is None:
            raise typer.BadParameter(f"Expected resolution=pixels, got {option}")
        try:
            width = float(value)
        except ValueError:
            raise typer.BadParameter(f"Width must be a number, got {value}")
        if width <= 0:
            raise typer.BadParameter(f"Width must be positive, got {value}")
        widths[parsed_resolution] = width
    return widths


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()
    Console().print(_configuration_table(config))


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Print report headers"),
    ] = None,
    default_resolution: Annotated[
        Optional[str],
        typer.Option("--default-resolution", help="hour, day, week or month"),
    ] = None,
    default_zoom: Annotated[Optional[float], typer.Option("--default-zoom")] = None,
    unit_widths: Annotated[
        Optional[list[str]],
        typer.Option(
            "--unit-width",
            help="pixels per unit at zoom 1.0 as resolution=pixels (repeatable)",
        ),
    ] = None,
    min_widths: Annotated[
        Optional[list[str]],
        typer.Option(
            "--min-width",
            help="narrowest item width as resolution=pixels (repeatable)",
        ),
    ] = None,
    pixels_per_char: Annotated[
        Optional[float],
        typer.Option("--pixels-per-char", help="pixels drawn by one terminal column"),
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level")] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory the items are stored in"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the platform data directory)",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None and log_level.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(LOG_LEVELS)}")
    if default_zoom is not None and default_zoom <= 0:
        raise typer.BadParameter("Default zoom must be positive")
    if pixels_per_char is not None and pixels_per_char <= 0:
        raise typer.BadParameter("Pixels per char must be positive")

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        default_resolution=parse_resolution(default_resolution),
        default_zoom=default_zoom,
        unit_widths=_parse_width_options(unit_widths),
        min_widths=_parse_width_options(min_widths),
        pixels_per_char=pixels_per_char,
        log_level=log_level.upper() if log_level is not None else None,
    )

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))
