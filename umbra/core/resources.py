"""Plant resources: static food scattered across the grid at startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from umbra.core.enums import Domain
from umbra.core.models import GridLayout, PlantResource

if TYPE_CHECKING:
    from umbra.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class ResourceField:
    """Fixed, read-only set of plants.

    Plants may share a cell with each other or with live cells. Nothing in
    the engine consumes them yet; the observer forages live cells only.
    """

    __slots__ = ("_plants",)

    def __init__(self, plants: tuple[PlantResource, ...] = ()) -> None:
        self._plants = tuple(plants)

    @classmethod
    def generate(
        cls,
        rows: int,
        cols: int,
        rng: DeterministicRNG,
        density: float = 0.12,
        energy_range: tuple[float, float] = (50.0, 100.0),
        weight_range: tuple[float, float] = (5.0, 10.0),
        layout: GridLayout | None = None,
    ) -> ResourceField:
        layout = layout or GridLayout()
        count = round(rows * cols * density)
        plants: list[PlantResource] = []
        for i in range(count):
            gx = rng.next_int(Domain.PLANT_X, i, 0, 0, cols - 1)
            gy = rng.next_int(Domain.PLANT_Y, i, 0, 0, rows - 1)
            plants.append(PlantResource(
                grid_x=gx,
                grid_y=gy,
                energy=rng.next_uniform(Domain.PLANT_ENERGY, i, 0, *energy_range),
                weight=rng.next_uniform(Domain.PLANT_WEIGHT, i, 0, *weight_range),
                pixel=layout.cell_origin(gy, gx),
            ))
        field = cls(tuple(plants))
        logger.info("Initialized %d plant resources (total energy %.1f)", len(field), field.total_energy())
        return field

    @property
    def plants(self) -> tuple[PlantResource, ...]:
        return self._plants

    def total_energy(self) -> float:
        return sum(p.energy for p in self._plants)

    def __len__(self) -> int:
        return len(self._plants)

    def __iter__(self) -> Iterator[PlantResource]:
        return iter(self._plants)
