"""EngineManager: runs the WorldLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot; the WorldLoop
mutates WorldState exclusively on its own thread (Single-Writer preserved).
Player commands bypass the loop and go straight to the PlayerAgent, which
guards itself.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from umbra.core.collision import cells_overlapping
from umbra.core.snapshot import Snapshot
from umbra.core.world_state import WorldState
from umbra.engine.world_loop import WorldLoop
from umbra.systems.rng import DeterministicRNG
from umbra.utils.event_log import EventLog

if TYPE_CHECKING:
    from umbra.config import SimulationConfig
    from umbra.core.enums import Direction
    from umbra.core.models import CellEntity

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - player commands (PlayerAgent lock)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: SimulationConfig) -> None:
        config.validate()
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_interval

        # Simulation components (built in _build)
        self._rng: DeterministicRNG | None = None
        self._loop: WorldLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def seed(self) -> int:
        assert self._rng is not None
        return self._rng.seed

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- player input --

    def move_player(self, dx: int, dy: int) -> tuple[int, int]:
        assert self._loop is not None
        return self._loop.world.player.move(dx, dy)

    def nudge_player(self, direction: Direction) -> tuple[int, int]:
        assert self._loop is not None
        return self._loop.world.player.nudge(direction)

    def player_position(self) -> tuple[int, int]:
        """Live position, which may be newer than the latest snapshot."""
        assert self._loop is not None
        return self._loop.world.player.position()

    def player_overlaps(self) -> list[CellEntity]:
        """Cells of the latest snapshot overlapping the player's live box."""
        assert self._loop is not None
        snap = self.get_snapshot()
        if snap is None:
            return []
        return cells_overlapping(self._loop.world.player.box, snap.entities, snap.layout.cell_size)

    # -- lifecycle --

    def start(self, paused: bool = False) -> None:
        """Launch the engine thread, optionally already paused."""
        if self._running.is_set():
            return
        self._stop_requested.clear()
        if paused:
            self._paused.set()
        else:
            self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs, paused=%s)", self._tick_rate, paused)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped with a fresh tick-0 snapshot."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        """Construct all simulation components from config."""
        self._rng = DeterministicRNG.from_optional_seed(self._config.world_seed)
        world = WorldState.from_config(self._config, self._rng)
        self._loop = WorldLoop(self._config, world)
        self._publish_snapshot_and_events()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        assert self._loop is not None

        while not self._stop_requested.is_set():
            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            started = time.perf_counter()
            if not self._loop.tick_once():
                logger.info("Simulation ended at tick %d.", self._loop.world.tick)
                break
            self._publish_snapshot_and_events()

            # Fixed cadence: sleep off whatever the tick did not use
            if not single_step:
                elapsed = time.perf_counter() - started
                self._stop_requested.wait(max(0.0, self._tick_rate - elapsed))

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot_and_events(self) -> None:
        """Swap snapshot + push events from the last tick."""
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

        events = self._loop.tick_events
        if events:
            self._event_log.append_many(events)

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.world.tick
        return 0
