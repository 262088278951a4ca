"""Observer: an autonomous forager sweeping one grid row."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from umbra.core.enums import Heading

if TYPE_CHECKING:
    from umbra.core.grid import LifeGrid
    from umbra.core.registry import EntityRegistry

logger = logging.getLogger(__name__)

FOOD_PER_CELL = 0.5


@dataclass(slots=True)
class Observer:
    """Forager that bounces between the first and last column of its row.

    The row is fixed for the lifetime of the observer.
    """

    row: int
    col: int = 0
    heading: Heading = Heading.RIGHT
    food_resources: float = 0.0

    @classmethod
    def for_grid(cls, rows: int) -> Observer:
        return cls(row=rows // 2)

    def advance(self, cols: int) -> None:
        """Move one column along the heading, reflecting at either edge."""
        col = self.col + self.heading
        if col >= cols - 1:
            self.col = cols - 1
            self.heading = Heading.LEFT
        elif col <= 0:
            self.col = 0
            self.heading = Heading.RIGHT
        else:
            self.col = col

    def forage(self, grid: LifeGrid, registry: EntityRegistry) -> bool:
        """Eat the live cell under the observer, if any.

        Kills the cell in the grid and drops it from the registry in the same
        call, so both agree before anyone else looks.
        """
        if not grid.is_alive(self.row, self.col):
            return False
        grid.kill(self.row, self.col)
        registry.remove_at(self.row, self.col)
        self.food_resources += FOOD_PER_CELL
        logger.debug(
            "Observer collected food at (%d,%d) total=%.1f",
            self.row, self.col, self.food_resources,
        )
        return True
