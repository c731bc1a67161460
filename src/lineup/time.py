# SPDX-License-Identifier: MIT

import calendar
from typing import cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_utc(datetime: str) -> pendulum.DateTime:
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime))
    pendulum_date_time = pendulum_date_time.set(tz="local")
    pendulum_date_time = pendulum_date_time.in_tz("UTC")
    return pendulum_date_time


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def epoch_microseconds(datetime: pendulum.DateTime) -> int:
    """Exact integer microseconds since the Unix epoch."""
    seconds = calendar.timegm(datetime.utctimetuple())
    return seconds * 1_000_000 + datetime.microsecond


def microseconds_between(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> int:
    return epoch_microseconds(end) - epoch_microseconds(start)


def month_index(datetime: pendulum.DateTime) -> int:
    """Calendar month index (year * 12 + month) used by the month axis."""
    return datetime.year * 12 + datetime.month
