# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """TyperGroup that resolves comma-separated command aliases, e.g. "gantt, g"."""

    _CMD_SPLIT_P = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name: str) -> str:
        for cmd in self.commands.values():
            name = cmd.name
            if name and default_name in self._CMD_SPLIT_P.split(name):
                return name
        return default_name

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        if name is None:
            name = cmd.name

        # An alias of an already registered command is not added twice
        existing_name = self._group_cmd_name(name or "")
        if existing_name in self.commands and existing_name != name:
            return

        super().add_command(cmd, name)


class OrderedTyperGroup(AliasedTyperGroup):
    """Lists top level commands in a fixed order instead of registration order."""

    COMMAND_ORDER = [
        "config, c",
        "item, i",
        "gantt, g",
        "drag, d",
        "zoom, z",
        "pan, p",
        "today, t",
    ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        result = [name for name in self.COMMAND_ORDER if name in self.commands]
        for cmd_name in self.commands.keys():
            if cmd_name not in result:
                result.append(cmd_name)
        return result
