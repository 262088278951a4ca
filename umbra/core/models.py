"""Core data models: Vector2, Box, GridLayout, CellEntity, PlantResource."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class Box:
    """Axis-aligned bounding box in pixel space (top-left origin)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class GridLayout:
    """Grid-to-pixel transform: ``margin + index * cell_size``."""

    margin: int = 140
    cell_size: int = 8

    def cell_origin(self, row: int, col: int) -> Vector2:
        return Vector2(self.margin + col * self.cell_size, self.margin + row * self.cell_size)


@dataclass(frozen=True, slots=True)
class CellEntity:
    """An alive grid cell viewed as an addressable entity.

    Derived from the grid on every registry rebuild, never stored on its own.
    """

    row: int
    col: int
    pixel: Vector2

    @classmethod
    def at(cls, row: int, col: int, layout: GridLayout) -> CellEntity:
        return cls(row=row, col=col, pixel=layout.cell_origin(row, col))

    @property
    def entity_id(self) -> str:
        return f"Cell_{self.row}_{self.col}"

    @property
    def coord(self) -> tuple[int, int]:
        return (self.row, self.col)

    def box(self, cell_size: int) -> Box:
        return Box(self.pixel.x, self.pixel.y, cell_size, cell_size)


@dataclass(frozen=True, slots=True)
class PlantResource:
    """A static plant placed once at startup; never consumed."""

    grid_x: int
    grid_y: int
    energy: float
    weight: float
    pixel: Vector2 = Vector2()
