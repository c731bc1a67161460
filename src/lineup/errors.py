# SPDX-License-Identifier: MIT


class LineupError(Exception):
    """Base class for errors raised by the timeline engine."""


class InvalidWindowError(LineupError, ValueError):
    """A time window whose start lies after its end was handed to the axis."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"window start {start} is after window end {end}")
        self.start = start
        self.end = end


class CommitError(LineupError):
    """Raised by an item store when persisting an edit fails."""


class ItemNotFoundError(LineupError, KeyError):
    def __init__(self, item_id: str) -> None:
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"no item with id {self.item_id}"
