"""Player agent: a box steered by input commands, clamped to the view."""

from __future__ import annotations

import threading

from umbra.core.enums import Direction
from umbra.core.models import Box

_DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class PlayerAgent:
    """Pure position, no velocity. Never touches the grid.

    Moves may come from any thread; a private lock serializes them.
    """

    __slots__ = ("_x", "_y", "size", "speed", "view_width", "view_height", "_lock")

    def __init__(
        self,
        x: int = 100,
        y: int = 100,
        size: int = 20,
        speed: int = 10,
        view_width: int = 800,
        view_height: int = 700,
    ) -> None:
        self.size = size
        self.speed = speed
        self.view_width = view_width
        self.view_height = view_height
        self._lock = threading.Lock()
        self._x, self._y = self._clamp(x, y)

    def _clamp(self, x: int, y: int) -> tuple[int, int]:
        x = max(0, min(x, self.view_width - self.size))
        y = max(0, min(y, self.view_height - self.size))
        return x, y

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def position(self) -> tuple[int, int]:
        with self._lock:
            return self._x, self._y

    @property
    def box(self) -> Box:
        x, y = self.position()
        return Box(x, y, self.size, self.size)

    def move(self, dx: int, dy: int) -> tuple[int, int]:
        """Apply a signed delta and clamp. Returns the new position."""
        with self._lock:
            self._x, self._y = self._clamp(self._x + dx, self._y + dy)
            return self._x, self._y

    def nudge(self, direction: Direction) -> tuple[int, int]:
        """One arrow-key step of ``speed`` pixels."""
        ux, uy = _DIRECTION_DELTAS[direction]
        return self.move(ux * self.speed, uy * self.speed)
