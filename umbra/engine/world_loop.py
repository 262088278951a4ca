"""WorldLoop: the authoritative per-tick engine.

Phase cycle:
  1. Generation: apply the Life rule to the whole grid
  2. Registry: rebuild the alive-cell registry from the new grid
  3. Observer: advance one column, bouncing at the edges
  4. Forage: eat the cell under the observer, patching grid and registry
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from umbra.core.snapshot import Snapshot
from umbra.utils.event_log import SimEvent

if TYPE_CHECKING:
    from umbra.config import SimulationConfig
    from umbra.core.world_state import WorldState

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation.

    Single-threaded mutation of WorldState. Every grid, registry and
    observer write happens inside ``tick_once``, so whoever owns the loop
    is the only writer.
    """

    __slots__ = ("_config", "_world", "_tick_events", "_was_extinct")

    def __init__(self, config: SimulationConfig, world: WorldState) -> None:
        self._config = config
        self._world = world
        self._tick_events: list[SimEvent] = []
        self._was_extinct = world.grid.alive_count == 0

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    def _emit(self, category: str, message: str, cells: tuple[tuple[int, int], ...] = ()) -> None:
        self._tick_events.append(SimEvent(
            tick=self._world.tick,
            category=category,
            message=message,
            cells=cells,
        ))

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False if simulation should stop."""
        max_ticks = self._config.max_ticks
        if max_ticks and self._world.tick >= max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._world.tick)
            return False

        self._step()
        self._world.tick += 1
        return True

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current world state."""
        return Snapshot.from_world(self._world)

    def run(self) -> None:
        """Execute ticks back to back until ``max_ticks``.

        Headless use only: with ``max_ticks == 0`` this never returns.
        """
        logger.info("=== Simulation started (seed=%d) ===", self._world.seed)
        while self.tick_once():
            if self._world.tick % 50 == 0:
                self.log_summary()
        logger.info("=== Simulation finished at tick %d ===", self._world.tick)

    def log_summary(self) -> None:
        world = self._world
        px, py = world.player.position()
        logger.info(
            "Tick %d: active cells=%d | plants=%d energy=%.1f | observer food=%.1f at (%d,%d) | player=(%d, %d)",
            world.tick,
            len(world.registry),
            len(world.plants),
            world.plants.total_energy(),
            world.observer.food_resources,
            world.observer.row,
            world.observer.col,
            px,
            py,
        )

    def _step(self) -> None:
        """Execute one complete tick cycle."""
        self._tick_events = []
        world = self._world
        t0 = time.perf_counter()

        # --- Phase 1: Generation ---
        world.grid.step()

        # --- Phase 2: Registry ---
        world.registry.rebuild(world.grid)

        t1 = time.perf_counter()

        # --- Phase 3: Observer ---
        observer = world.observer
        observer.advance(world.grid.cols)

        # --- Phase 4: Forage ---
        if observer.forage(world.grid, world.registry):
            self._emit(
                "forage",
                f"Observer collected food at ({observer.row},{observer.col}) "
                f"total={observer.food_resources:.1f}",
                cells=((observer.row, observer.col),),
            )

        extinct = len(world.registry) == 0
        if extinct and not self._was_extinct:
            self._emit("extinction", "No live cells remain.")
            logger.info("Tick %d: grid went extinct.", world.tick)
        self._was_extinct = extinct

        t2 = time.perf_counter()
        logger.debug(
            "Tick %d: generation=%.4fs observer=%.4fs alive=%d",
            world.tick, t1 - t0, t2 - t1, len(world.registry),
        )
