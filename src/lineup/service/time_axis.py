# SPDX-License-Identifier: MIT

import math
from typing import Mapping, Optional

import pendulum

from lineup.configuration import DEFAULT_MIN_WIDTHS, DEFAULT_UNIT_WIDTHS
from lineup.errors import InvalidWindowError
from lineup.model.layout import TickMark
from lineup.model.window import Resolution, TimeWindow
from lineup.time import microseconds_between, month_index

# Length of one resolution unit for the linear resolutions.
UNIT_MICROSECONDS: dict[Resolution, int] = {
    "hour": 3_600 * 1_000_000,
    "day": 86_400 * 1_000_000,
    "week": 7 * 86_400 * 1_000_000,
}

TICK_FORMATS: dict[Resolution, str] = {
    "hour": "HH:mm",
    "day": "DD ddd",
    "month": "MMM YYYY",
}


class TimeAxis:
    """
    Mapping between instants and horizontal pixel offsets for one window.

    Hour, day and week are linear in elapsed time. Month columns are keyed by
    the calendar month index, so every month renders at the same width no
    matter how many days it has.

    Offsets are measured from the window start, which always maps to 0.

    Only a start after the end is an invalid window. A window whose start
    equals its end is empty and has zero width.
    """

    def __init__(
        self,
        window: TimeWindow,
        unit_widths: Optional[Mapping[Resolution, float]] = None,
        min_widths: Optional[Mapping[Resolution, float]] = None,
    ) -> None:
        if window["start"] > window["end"]:
            raise InvalidWindowError(window["start"], window["end"])
        self.window = window
        self.resolution: Resolution = window["resolution"]
        widths = dict(DEFAULT_UNIT_WIDTHS)
        if unit_widths is not None:
            widths.update(unit_widths)
        floors = dict(DEFAULT_MIN_WIDTHS)
        if min_widths is not None:
            floors.update(min_widths)
        self.unit_width: float = widths[self.resolution] * window["zoom"]
        self.min_width: float = floors[self.resolution]
        self._start = window["start"]
        self._end = window["end"]

    @property
    def total_width(self) -> float:
        """
        Width of the whole axis.

        A month window ending part way through a month includes that month's
        column.
        """
        if self.resolution == "month" and self._end > self._start:
            end = self._in_window_tz(self._end)
            months = month_index(end) - month_index(self._start)
            if end > end.start_of("month"):
                months += 1
            return months * self.unit_width
        return self.to_pixel(self._end)

    def to_pixel(self, instant: pendulum.DateTime) -> float:
        if self.resolution == "month":
            local = self._in_window_tz(instant)
            months = month_index(local) - month_index(self._start)
            return months * self.unit_width
        elapsed = microseconds_between(self._start, instant)
        return elapsed / UNIT_MICROSECONDS[self.resolution] * self.unit_width

    def to_instant(self, offset: float) -> pendulum.DateTime:
        if self.resolution == "month":
            months = math.floor(offset / self.unit_width)
            return self._start.start_of("month").add(months=months)
        elapsed = round(offset * UNIT_MICROSECONDS[self.resolution] / self.unit_width)
        return self._start.add(microseconds=elapsed)

    def shift(self, instant: pendulum.DateTime, dx: float) -> pendulum.DateTime:
        """
        Move an instant by the time span a horizontal pixel delta represents.

        Linear resolutions shift by an exact microsecond count. Month shifts by
        whole calendar months, truncated toward zero, keeping the day of month
        where the target month allows it.
        """
        if self.resolution == "month":
            return instant.add(months=int(dx / self.unit_width))
        delta = round(dx * UNIT_MICROSECONDS[self.resolution] / self.unit_width)
        return instant.add(microseconds=delta)

    def box(
        self, start: pendulum.DateTime, end: pendulum.DateTime
    ) -> tuple[float, float]:
        """Return (left, width) of an item, floored to min_width and clipped to the axis."""
        total = self.total_width
        left = min(max(self.to_pixel(start), 0.0), total)
        right = min(max(self.to_pixel(end), 0.0), total)
        width = max(right - left, self.min_width)
        if left + width > total:
            left = max(total - width, 0.0)
            width = min(width, total)
        return left, width

    def contains(self, start: pendulum.DateTime, end: pendulum.DateTime) -> bool:
        """Whether [start, end) intersects the window; zero-length items count when inside."""
        if start == end:
            return self._start <= start <= self._end
        return start < self._end and end > self._start

    def now_offset(self, now: pendulum.DateTime) -> Optional[float]:
        if now < self._start or now > self._end:
            return None
        return self.to_pixel(now)

    def ticks(self) -> list[TickMark]:
        """Tick marks at resolution granularity across the window, for axis labels."""
        unit = self.resolution
        if unit == "month":
            current = self._start.start_of("month")
        else:
            current = self._start.start_of(unit)
            if current < self._start:
                current = _step(current, unit)

        ticks: list[TickMark] = []
        while current <= self._end:
            ticks.append(
                {
                    "instant": current,
                    "offset": max(self.to_pixel(current), 0.0),
                    "label": tick_label(current, unit),
                }
            )
            current = _step(current, unit)
        return ticks

    def _in_window_tz(self, instant: pendulum.DateTime) -> pendulum.DateTime:
        if self._start.tz is None:
            return instant
        return instant.in_tz(self._start.tz)

    def seconds_per_pixel(self) -> float:
        """Approximate time span of one pixel, used for panning."""
        if self.resolution == "month":
            # Average Gregorian month
            return 30.436875 * 86_400 / self.unit_width
        return UNIT_MICROSECONDS[self.resolution] / 1_000_000 / self.unit_width


def _step(instant: pendulum.DateTime, unit: Resolution) -> pendulum.DateTime:
    if unit == "hour":
        return instant.add(hours=1)
    elif unit == "day":
        return instant.add(days=1)
    elif unit == "week":
        return instant.add(weeks=1)
    else:  # unit == "month"
        return instant.add(months=1)


def tick_label(instant: pendulum.DateTime, unit: Resolution) -> str:
    if unit == "week":
        return f"W{instant.week_of_year}"
    return instant.format(TICK_FORMATS[unit])
