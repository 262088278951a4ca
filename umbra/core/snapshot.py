"""Immutable snapshot of the world state for reader threads."""

from __future__ import annotations

from dataclasses import dataclass

from umbra.core.collision import overlapping_cells
from umbra.core.enums import Heading
from umbra.core.models import Box, CellEntity, GridLayout, PlantResource
from umbra.core.world_state import WorldState


@dataclass(frozen=True, slots=True)
class ObserverView:
    row: int
    col: int
    heading: Heading
    food_resources: float


@dataclass(frozen=True, slots=True)
class PlayerView:
    x: int
    y: int
    size: int


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of one tick, safe to share across threads.

    Grid rows are copied into nested tuples and every entity type is a
    frozen dataclass, so nothing reachable from here aliases live state.
    """

    tick: int
    seed: int
    layout: GridLayout
    cells: tuple[tuple[bool, ...], ...]
    entities: tuple[CellEntity, ...]
    plants: tuple[PlantResource, ...]
    total_plant_energy: float
    observer: ObserverView
    player: PlayerView
    overlapping: tuple[CellEntity, ...]

    @classmethod
    def from_world(cls, world: WorldState) -> Snapshot:
        obs = world.observer
        player = world.player
        # overlapping is computed from the same (px, py) as PlayerView
        px, py = player.position()
        return cls(
            tick=world.tick,
            seed=world.seed,
            layout=world.layout,
            cells=world.grid.as_rows(),
            entities=world.registry.entities(),
            plants=world.plants.plants,
            total_plant_energy=world.plants.total_energy(),
            observer=ObserverView(obs.row, obs.col, obs.heading, obs.food_resources),
            player=PlayerView(px, py, player.size),
            overlapping=tuple(overlapping_cells(Box(px, py, player.size, player.size), world.registry)),
        )

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def alive_count(self) -> int:
        return len(self.entities)

    def alive_coordinates(self) -> frozenset[tuple[int, int]]:
        return frozenset(e.coord for e in self.entities)

    def is_alive(self, row: int, col: int) -> bool:
        return self.cells[row][col]
