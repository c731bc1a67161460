# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from lineup.model.entity_id import EntityId, resolve_entity_id
from lineup.model.item import ITEM_STATUSES, ItemStatus
from lineup.model.window import RESOLUTIONS, Resolution
from lineup.repository.item import ITEM_REPO
from lineup.time import datetime_from_str_utc


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    if datetime_param is None:
        return None

    datetime = str(datetime_param)

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"\d{4}-\d{2}-\d{2}", datetime):
        return datetime_from_str_utc(datetime)

    # Match (H)H:mm format (time only, use today's date)
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", datetime)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))

        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

        pendulum_date_time = pendulum.today("local").set(
            hour=hour, minute=minute, second=0, microsecond=0
        )
        return pendulum_date_time.in_tz("UTC")

    # Relative days, e.g. "1", "-1", "365"
    if re.match(r"^-?\d+$", datetime):
        days_offset = int(datetime)
        pendulum_date_time = pendulum.today().add(days=days_offset).start_of("day")
        return pendulum_date_time.in_tz("UTC")

    if datetime == "now" or datetime == "n":
        return pendulum.now().in_tz("UTC")
    if datetime == "today" or datetime == "t":
        return pendulum.today().start_of("day").in_tz("UTC")
    if datetime == "yesterday" or datetime == "y":
        return pendulum.yesterday().start_of("day").in_tz("UTC")
    if datetime == "tomorrow" or datetime == "o":
        return pendulum.tomorrow().start_of("day").in_tz("UTC")
    raise typer.BadParameter("Incorrect datetime format")


def parse_resolution(resolution: Optional[str]) -> Optional[Resolution]:
    if resolution is None:
        return None
    if resolution not in RESOLUTIONS:
        raise typer.BadParameter(
            f"Resolution must be one of {', '.join(RESOLUTIONS)}, got {resolution}"
        )
    return resolution  # type: ignore[return-value]


def parse_status(status: Optional[str]) -> Optional[ItemStatus]:
    if status is None:
        return None
    if status not in ITEM_STATUSES:
        raise typer.BadParameter(
            f"Status must be one of {', '.join(ITEM_STATUSES)}, got {status}"
        )
    return status  # type: ignore[return-value]


def parse_item_id(id_prefix: str) -> EntityId:
    """Resolve a full or shortened item id against the stored items."""
    ids = [item["id"] for item in ITEM_REPO.get_all_items()]
    entity_id = resolve_entity_id(id_prefix, ids)
    if entity_id is None:
        raise typer.BadParameter(f"No single item matches id {id_prefix}")
    return entity_id
