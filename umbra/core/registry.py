"""Entity registry: the live cells of the grid as addressable entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from umbra.core.models import CellEntity, GridLayout

if TYPE_CHECKING:
    from umbra.core.grid import LifeGrid


class EntityRegistry:
    """Derived cache of alive cells keyed by ``(row, col)``.

    Rebuilt in full from the grid every tick. The only incremental update
    is ``remove_at``, used when a single cell is killed by foraging.
    """

    __slots__ = ("_layout", "_entities")

    def __init__(self, layout: GridLayout | None = None) -> None:
        self._layout = layout or GridLayout()
        self._entities: dict[tuple[int, int], CellEntity] = {}

    @property
    def layout(self) -> GridLayout:
        return self._layout

    def rebuild(self, grid: LifeGrid) -> None:
        """Replace every entry with the grid's current live cells."""
        layout = self._layout
        self._entities = {
            (row, col): CellEntity.at(row, col, layout)
            for row, col in grid.alive_cells()
        }

    def remove_at(self, row: int, col: int) -> CellEntity | None:
        return self._entities.pop((row, col), None)

    def get(self, row: int, col: int) -> CellEntity | None:
        return self._entities.get((row, col))

    def coordinates(self) -> frozenset[tuple[int, int]]:
        return frozenset(self._entities)

    def entities(self) -> tuple[CellEntity, ...]:
        return tuple(self._entities.values())

    def __contains__(self, coord: object) -> bool:
        return coord in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[CellEntity]:
        return iter(self._entities.values())
