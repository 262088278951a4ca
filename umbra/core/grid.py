"""Toroidal Game-of-Life grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from umbra.config import ConfigurationError
from umbra.core.enums import Domain

if TYPE_CHECKING:
    from umbra.systems.rng import DeterministicRNG

SURVIVAL_COUNTS = frozenset({2, 3})
BIRTH_COUNTS = frozenset({3})

_NEIGHBOR_OFFSETS = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


class LifeGrid:
    """2D boolean grid with wrapped edges, double-buffered flat lists.

    ``step()`` reads only the current buffer and writes only the next one,
    then swaps the two references, so a generation becomes visible all at
    once.
    """

    __slots__ = ("rows", "cols", "_cells", "_next")

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ConfigurationError(f"grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: list[bool] = [False] * (rows * cols)
        self._next: list[bool] = [False] * (rows * cols)

    # -- construction --

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        rng: DeterministicRNG,
        alive_probability: float = 0.15,
    ) -> LifeGrid:
        """Seed each cell independently alive with *alive_probability*."""
        grid = cls(rows, cols)
        grid._cells = [
            rng.next_bool(Domain.CELL_INIT, row, col, alive_probability)
            for row in range(rows)
            for col in range(cols)
        ]
        return grid

    @classmethod
    def from_cells(cls, rows: int, cols: int, alive: Iterable[tuple[int, int]]) -> LifeGrid:
        grid = cls(rows, cols)
        for row, col in alive:
            grid._cells[grid._idx(row, col)] = True
        return grid

    # -- access --

    def _idx(self, row: int, col: int) -> int:
        return (row % self.rows) * self.cols + (col % self.cols)

    def is_alive(self, row: int, col: int) -> bool:
        return self._cells[self._idx(row, col)]

    def kill(self, row: int, col: int) -> bool:
        """Mark one cell dead. Returns True if it was alive."""
        idx = self._idx(row, col)
        was_alive = self._cells[idx]
        self._cells[idx] = False
        return was_alive

    @property
    def alive_count(self) -> int:
        return sum(self._cells)

    def alive_cells(self) -> Iterator[tuple[int, int]]:
        """Yield ``(row, col)`` of every alive cell in row-major order."""
        cols = self.cols
        for idx, alive in enumerate(self._cells):
            if alive:
                yield divmod(idx, cols)

    def as_rows(self) -> tuple[tuple[bool, ...], ...]:
        cols = self.cols
        return tuple(tuple(self._cells[r * cols:(r + 1) * cols]) for r in range(self.rows))

    # -- evolution --

    def count_neighbors(self, row: int, col: int) -> int:
        """Count live cells in the 8-neighborhood, wrapping at every edge."""
        rows, cols, cells = self.rows, self.cols, self._cells
        count = 0
        for dr, dc in _NEIGHBOR_OFFSETS:
            r = (row + dr) % rows
            c = (col + dc) % cols
            if cells[r * cols + c]:
                count += 1
        return count

    def step(self) -> None:
        """Advance one generation and swap buffers."""
        cells, nxt, cols = self._cells, self._next, self.cols
        for row in range(self.rows):
            base = row * cols
            for col in range(cols):
                neighbors = self.count_neighbors(row, col)
                if cells[base + col]:
                    nxt[base + col] = neighbors in SURVIVAL_COUNTS
                else:
                    nxt[base + col] = neighbors in BIRTH_COUNTS
        self._cells, self._next = nxt, cells

    # -- copy --

    def copy(self) -> LifeGrid:
        new = LifeGrid.__new__(LifeGrid)
        new.rows = self.rows
        new.cols = self.cols
        new._cells = list(self._cells)
        new._next = [False] * (self.rows * self.cols)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LifeGrid):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]
