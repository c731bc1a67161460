# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from lineup.model.window import ZOOM_FACTORS, Resolution, TimeWindow
from lineup.service.timeline import Timeline
from lineup.time import microseconds_between, now_utc

logger = logging.getLogger(__name__)

KEY_PAN_PX = 50
KEY_PAN_LARGE_PX = 100

# Span shown by a fresh window at each resolution
DEFAULT_SPANS: dict[Resolution, dict[str, int]] = {
    "hour": {"days": 1},
    "day": {"weeks": 2},
    "week": {"weeks": 12},
    "month": {"months": 12},
}


def default_window(
    resolution: Resolution, zoom: float, now: pendulum.DateTime
) -> TimeWindow:
    """A window starting at the beginning of the current resolution unit."""
    start = now.start_of(resolution)
    return {
        "start": start,
        "end": start.add(**DEFAULT_SPANS[resolution]),
        "resolution": resolution,
        "zoom": zoom,
    }


def next_zoom(zoom: float, direction: int) -> Optional[float]:
    """The adjacent zoom step above (direction 1) or below (direction -1), if any."""
    if direction > 0:
        larger = [factor for factor in ZOOM_FACTORS if factor > zoom]
        return larger[0] if larger else None
    smaller = [factor for factor in ZOOM_FACTORS if factor < zoom]
    return smaller[-1] if smaller else None


class ViewportController:
    """
    Zooming and panning of a timeline's window.

    Every method returns True when the window changed; the host then awaits
    `Timeline.refresh()`. Item data is never touched here.
    """

    def __init__(
        self,
        timeline: Timeline,
        now: Callable[[], pendulum.DateTime] = now_utc,
        on_window_change: Optional[Callable[[TimeWindow], None]] = None,
    ) -> None:
        self.timeline = timeline
        self._now = now
        self._on_window_change = on_window_change
        self._header_x: Optional[float] = None

    @property
    def window(self) -> TimeWindow:
        return self.timeline.window

    def wheel(self, delta_y: float, modifier: bool = False) -> bool:
        """Step the zoom with the zoom modifier held; a plain wheel is left to the host."""
        if not modifier or delta_y == 0:
            return False
        if delta_y < 0:
            return self.zoom_in()
        return self.zoom_out()

    def zoom_in(self) -> bool:
        return self._step_zoom(1)

    def zoom_out(self) -> bool:
        return self._step_zoom(-1)

    def _step_zoom(self, direction: int) -> bool:
        window = self.window
        zoom = next_zoom(window["zoom"], direction)
        if zoom is None:
            return False

        # Same pixel extent at the new zoom, around the same centre instant
        span = microseconds_between(window["start"], window["end"])
        half = span // 2
        center = window["start"].add(microseconds=half)
        new_span = round(span * window["zoom"] / zoom)
        new_half = new_span // 2
        start = center.subtract(microseconds=new_half)
        end = center.add(microseconds=new_span - new_half)
        logger.debug("Zoom %s -> %s around %s", window["zoom"], zoom, center)
        return self._apply(
            {
                "start": start,
                "end": end,
                "resolution": window["resolution"],
                "zoom": zoom,
            }
        )

    def pan_pixels(self, dx: float) -> bool:
        """
        Move the window as if its content were dragged by dx pixels.

        Dragging right (positive dx) reveals earlier time.
        """
        if dx == 0:
            return False
        window = self.window
        seconds = dx * self.timeline.axis().seconds_per_pixel()
        delta = round(seconds * 1_000_000)
        if delta == 0:
            return False
        return self._apply(
            {
                "start": window["start"].subtract(microseconds=delta),
                "end": window["end"].subtract(microseconds=delta),
                "resolution": window["resolution"],
                "zoom": window["zoom"],
            }
        )

    def header_press(self, x: float) -> None:
        self._header_x = x

    def header_drag(self, x: float) -> bool:
        if self._header_x is None:
            return False
        dx = x - self._header_x
        self._header_x = x
        return self.pan_pixels(dx)

    def header_release(self) -> bool:
        was_dragging = self._header_x is not None
        self._header_x = None
        return was_dragging

    def key(self, key: str, modifier: bool = False) -> bool:
        step = KEY_PAN_LARGE_PX if modifier else KEY_PAN_PX
        if key == "left":
            return self.pan_pixels(step)
        elif key == "right":
            return self.pan_pixels(-step)
        elif key in ("+", "="):
            return self.zoom_in()
        elif key == "-":
            return self.zoom_out()
        elif key == "today":
            return self.today()
        return False

    def today(self) -> bool:
        """Recentre the window on the current instant, keeping its span."""
        window = self.window
        span = microseconds_between(window["start"], window["end"])
        half = span // 2
        start = self._now().subtract(microseconds=half)
        return self._apply(
            {
                "start": start,
                "end": start.add(microseconds=span),
                "resolution": window["resolution"],
                "zoom": window["zoom"],
            }
        )

    def set_resolution(self, resolution: Resolution) -> bool:
        window = self.window
        if window["resolution"] == resolution:
            return False
        return self._apply(
            {
                "start": window["start"],
                "end": window["end"],
                "resolution": resolution,
                "zoom": window["zoom"],
            }
        )

    def _apply(self, window: TimeWindow) -> bool:
        if window == self.window:
            return False
        self.timeline.set_window(window)
        if self._on_window_change is not None:
            self._on_window_change(window)
        return True
