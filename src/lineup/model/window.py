# SPDX-License-Identifier: MIT

from typing import Literal, TypeAlias, TypedDict

import pendulum

Resolution: TypeAlias = Literal["hour", "day", "week", "month"]

RESOLUTIONS: tuple[Resolution, ...] = ("hour", "day", "week", "month")

# Ordered zoom steps; the viewport only ever moves to an adjacent entry.
ZOOM_FACTORS: tuple[float, ...] = (0.5, 1.0, 1.5, 2.0, 3.0, 4.0)

DEFAULT_ZOOM = 1.0


class TimeWindow(TypedDict):
    start: pendulum.DateTime
    end: pendulum.DateTime
    resolution: Resolution
    zoom: float
