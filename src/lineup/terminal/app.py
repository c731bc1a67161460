# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from lineup.terminal import configuration, item, view
from lineup.terminal.custom_typer import OrderedTyperGroup
from lineup.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="lineup - timeline layout and scheduling in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")
app.add_typer(item.app, name="item, i")
app.command(name="gantt, g")(view.gantt)
app.command(name="drag, d", no_args_is_help=True)(view.drag)
app.command(name="zoom, z", no_args_is_help=True)(view.zoom)
app.command(name="pan, p", no_args_is_help=True)(view.pan)
app.command(name="today, t")(view.today)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    lineup - timeline layout and scheduling in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
