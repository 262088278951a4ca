"""Mutable authoritative world state, only mutated by the WorldLoop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from umbra.core.grid import LifeGrid
from umbra.core.models import GridLayout
from umbra.core.observer import Observer
from umbra.core.player import PlayerAgent
from umbra.core.registry import EntityRegistry
from umbra.core.resources import ResourceField

if TYPE_CHECKING:
    from umbra.config import SimulationConfig
    from umbra.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class WorldState:
    """The single source of truth for the simulation.

    The player is the exception to single-writer ownership: input commands
    move it directly, guarded by its own lock.
    """

    __slots__ = ("tick", "seed", "layout", "grid", "registry", "plants", "observer", "player")

    def __init__(
        self,
        seed: int,
        grid: LifeGrid,
        plants: ResourceField,
        observer: Observer,
        player: PlayerAgent,
        layout: GridLayout | None = None,
    ) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.layout: GridLayout = layout or GridLayout()
        self.grid: LifeGrid = grid
        self.registry: EntityRegistry = EntityRegistry(self.layout)
        self.plants: ResourceField = plants
        self.observer: Observer = observer
        self.player: PlayerAgent = player
        self.registry.rebuild(grid)

    @classmethod
    def from_config(cls, config: SimulationConfig, rng: DeterministicRNG) -> WorldState:
        """Build a fresh world: random grid, plants, observer and player."""
        config.validate()
        rows, cols = config.resolved_rows(), config.resolved_cols()
        layout = GridLayout(margin=config.grid_margin, cell_size=config.cell_size)

        grid = LifeGrid.random(rows, cols, rng, config.alive_probability)
        plants = ResourceField.generate(
            rows, cols, rng,
            density=config.plant_density,
            energy_range=config.plant_energy_range,
            weight_range=config.plant_weight_range,
            layout=layout,
        )
        player = PlayerAgent(
            x=config.player_start_x,
            y=config.player_start_y,
            size=config.player_size,
            speed=config.player_speed,
            view_width=config.view_width,
            view_height=config.view_height,
        )
        world = cls(
            seed=rng.seed,
            grid=grid,
            plants=plants,
            observer=Observer.for_grid(rows),
            player=player,
            layout=layout,
        )
        logger.info(
            "World built: %dx%d cells, %d alive, seed=%d",
            rows, cols, len(world.registry), rng.seed,
        )
        return world
