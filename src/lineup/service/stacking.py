# SPDX-License-Identifier: MIT

from typing import Optional, Protocol, TypeAlias

MINIMIZED_X = 20
MINIMIZED_BOTTOM_MARGIN = 80
MINIMIZED_HEIGHT = 60
MINIMIZED_GAP = 10

Position: TypeAlias = tuple[int, int]


class StackingService(Protocol):
    """Positions for minimized auxiliary windows, injected into the host."""

    def register(self, id: str) -> Position: ...

    def unregister(self, id: str) -> None: ...

    def position(self, id: str) -> Optional[Position]: ...

    def positions(self) -> dict[str, Position]: ...


class MinimizedStack:
    """
    Minimized windows stacked upward from the bottom left of the viewport.

    The first registered window sits lowest. Unregistering compacts the
    remaining windows, keeping their registration order.
    """

    def __init__(self, viewport_height: int) -> None:
        self.viewport_height = viewport_height
        self._order: list[str] = []

    def register(self, id: str) -> Position:
        if id not in self._order:
            self._order.append(id)
        return self._position_at(self._order.index(id))

    def unregister(self, id: str) -> None:
        if id in self._order:
            self._order.remove(id)

    def position(self, id: str) -> Optional[Position]:
        if id not in self._order:
            return None
        return self._position_at(self._order.index(id))

    def positions(self) -> dict[str, Position]:
        return {id: self._position_at(index) for index, id in enumerate(self._order)}

    def resize(self, viewport_height: int) -> None:
        self.viewport_height = viewport_height

    def _position_at(self, index: int) -> Position:
        y = (
            self.viewport_height
            - MINIMIZED_BOTTOM_MARGIN
            - index * (MINIMIZED_HEIGHT + MINIMIZED_GAP)
        )
        return MINIMIZED_X, y
