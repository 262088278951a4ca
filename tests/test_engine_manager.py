"""Tests for the EngineManager and the API route functions.

Route handlers are plain functions, so they are called directly with the
manager injected instead of going through an HTTP client.
"""

import hashlib
import os
import sys
import time
import unittest

import pytest
from fastapi import HTTPException

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from umbra.api.app import create_app
from umbra.api.dependencies import get_engine_manager, set_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.routes.config import get_config
from umbra.api.routes.control import ControlAction, control, set_speed
from umbra.api.routes.map import encode_rle, get_map
from umbra.api.routes.player import ArrowKey, get_player, move_player, nudge_player
from umbra.api.routes.state import get_state, get_stats
from umbra.api.schemas import PlayerMoveRequest
from umbra.config import ConfigurationError, SimulationConfig


def _build_manager(**overrides) -> EngineManager:
    cfg = dict(world_seed=42, grid_rows=20, grid_cols=24, tick_interval=0.01)
    cfg.update(overrides)
    return EngineManager(SimulationConfig(**cfg))


def _advance(mgr: EngineManager, ticks: int) -> None:
    """Tick on the calling thread and publish, as the engine thread would."""
    for _ in range(ticks):
        mgr._loop.tick_once()
        mgr._publish_snapshot_and_events()


def _fingerprint(mgr: EngineManager) -> str:
    snap = mgr.get_snapshot()
    parts = [f"tick={snap.tick}", f"seed={snap.seed}"]
    parts.extend(f"{r},{c}" for r, c in sorted(snap.alive_coordinates()))
    obs = snap.observer
    parts.append(f"obs={obs.row},{obs.col},{obs.heading},{obs.food_resources}")
    parts.extend(f"p{p.grid_x},{p.grid_y},{p.energy:.6f}" for p in snap.plants)
    return hashlib.sha256("\n".join(parts).encode()).hexdigest()


def _wait_for(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestDeterministicReplay:
    """Two managers with the same seed must agree at every tick."""

    def test_initial_state_identical(self):
        assert _fingerprint(_build_manager()) == _fingerprint(_build_manager())

    def test_20_ticks_identical(self):
        a, b = _build_manager(), _build_manager()
        for _ in range(20):
            _advance(a, 1)
            _advance(b, 1)
            assert _fingerprint(a) == _fingerprint(b)

    def test_different_seeds_diverge(self):
        assert _fingerprint(_build_manager(world_seed=42)) != _fingerprint(_build_manager(world_seed=99))

    def test_unseeded_runs_pick_a_seed(self):
        mgr = _build_manager(world_seed=None)
        assert isinstance(mgr.seed, int)
        assert mgr.get_snapshot().seed == mgr.seed


class TestLifecycle(unittest.TestCase):

    def setUp(self):
        self.mgr = _build_manager()

    def tearDown(self):
        self.mgr.stop()

    def test_initial_snapshot_published(self):
        snap = self.mgr.get_snapshot()
        self.assertIsNotNone(snap)
        self.assertEqual(snap.tick, 0)
        self.assertFalse(self.mgr.running)

    def test_background_thread_ticks(self):
        self.mgr.start()
        self.assertTrue(_wait_for(lambda: self.mgr.get_snapshot().tick >= 3))
        self.mgr.stop()
        self.assertFalse(self.mgr.running)

    def test_pause_holds_tick(self):
        self.mgr.start()
        self.assertTrue(_wait_for(lambda: self.mgr.get_snapshot().tick >= 1))
        self.mgr.pause()
        time.sleep(0.05)
        held = self.mgr.get_snapshot().tick
        time.sleep(0.1)
        self.assertEqual(self.mgr.get_snapshot().tick, held)

    def test_single_step(self):
        self.mgr.start()
        self.mgr.pause()
        time.sleep(0.05)
        before = self.mgr.get_snapshot().tick
        self.mgr.step()
        self.assertTrue(_wait_for(lambda: self.mgr.get_snapshot().tick == before + 1))

    def test_start_paused_holds_tick_zero(self):
        self.mgr.start(paused=True)
        self.assertTrue(self.mgr.running)
        self.assertTrue(self.mgr.paused)
        time.sleep(0.05)
        self.assertEqual(self.mgr.get_snapshot().tick, 0)

    def test_step_from_stopped_runs_one_tick(self):
        for _ in range(20):
            mgr = _build_manager(tick_interval=0.001)
            try:
                control(ControlAction.step, manager=mgr)
                self.assertTrue(_wait_for(lambda m=mgr: m.get_snapshot().tick >= 1))
                time.sleep(0.02)
                self.assertEqual(mgr.get_snapshot().tick, 1)
                self.assertTrue(mgr.paused)
            finally:
                mgr.stop()

    def test_max_ticks_ends_thread(self):
        mgr = _build_manager(max_ticks=5)
        mgr.start()
        self.assertTrue(_wait_for(lambda: not mgr.running))
        self.assertEqual(mgr.get_snapshot().tick, 5)

    def test_reset_returns_to_tick_zero(self):
        _advance(self.mgr, 4)
        self.mgr.reset()
        self.assertEqual(self.mgr.get_snapshot().tick, 0)
        self.assertEqual(len(self.mgr.event_log), 0)

    def test_tick_rate_bounds(self):
        self.mgr.tick_rate = 100.0
        self.assertEqual(self.mgr.tick_rate, 2.0)
        self.mgr.tick_rate = 0.0
        self.assertEqual(self.mgr.tick_rate, 0.01)

    def test_bad_config_rejected(self):
        with self.assertRaises(ConfigurationError):
            _build_manager(grid_rows=0)


class TestPlayerInput:

    def test_move_is_live_before_next_snapshot(self):
        mgr = _build_manager()
        mgr.move_player(30, 0)
        assert mgr.player_position() == (130, 100)
        assert mgr.get_snapshot().player.x == 100
        _advance(mgr, 1)
        assert mgr.get_snapshot().player.x == 130

    def test_move_route_clamps(self):
        mgr = _build_manager()
        resp = move_player(PlayerMoveRequest(dx=-1000, dy=1000), manager=mgr)
        assert (resp.x, resp.y) == (0, 680)

    def test_nudge_route(self):
        mgr = _build_manager()
        resp = nudge_player(ArrowKey.left, manager=mgr)
        assert (resp.x, resp.y) == (90, 100)

    def test_overlaps_reported(self):
        mgr = _build_manager(alive_probability=1.0)
        # Park the player over the grid's top-left corner
        move_player(PlayerMoveRequest(dx=40, dy=40), manager=mgr)
        resp = get_player(manager=mgr)
        ids = {c.id for c in resp.overlapping}
        assert "Cell_0_0" in ids
        assert all(c.row <= 2 and c.col <= 2 for c in resp.overlapping)


class TestRoutes:

    def test_state_payload(self):
        mgr = _build_manager()
        _advance(mgr, 3)
        resp = get_state(since_tick=0, include_plants=True, manager=mgr)
        snap = mgr.get_snapshot()
        assert resp.tick == 3
        assert resp.alive_count == len(resp.cells) == snap.alive_count
        assert {(c.row, c.col) for c in resp.cells} == snap.alive_coordinates()
        assert resp.observer.direction in (-1, 1)
        assert len(resp.plants) == len(snap.plants)
        assert resp.total_plant_energy == pytest.approx(sum(p.energy for p in resp.plants))

    def test_state_without_plants(self):
        mgr = _build_manager()
        resp = get_state(since_tick=0, include_plants=False, manager=mgr)
        assert resp.plants == []
        assert resp.total_plant_energy > 0

    def test_map_rle_decodes(self):
        mgr = _build_manager()
        resp = get_map(manager=mgr)
        decoded: list[int] = []
        for i in range(0, len(resp.grid), 2):
            decoded.extend([resp.grid[i]] * resp.grid[i + 1])
        assert len(decoded) == resp.rows * resp.cols == 20 * 24
        snap = mgr.get_snapshot()
        flat = [int(v) for row in snap.cells for v in row]
        assert decoded == flat

    def test_encode_rle_small(self):
        cells = ((True, True, False), (False, False, True))
        assert encode_rle(cells) == [1, 2, 0, 3, 1, 1]

    def test_stats(self):
        mgr = _build_manager()
        stats = get_stats(manager=mgr)
        snap = mgr.get_snapshot()
        assert stats.active_cells == snap.alive_count
        assert stats.plant_count == len(snap.plants) == round(20 * 24 * 0.12)
        assert stats.observer_food == 0.0
        assert (stats.player_x, stats.player_y) == (100, 100)

    def test_config(self):
        resp = get_config(manager=_build_manager())
        assert (resp.grid_rows, resp.grid_cols) == (20, 24)
        assert resp.world_seed == 42
        assert resp.tick_rate == 0.01

    def test_control_reset_and_speed(self):
        mgr = _build_manager()
        _advance(mgr, 2)
        resp = control(ControlAction.reset, manager=mgr)
        assert (resp.status, resp.tick) == ("ok", 0)
        resp = set_speed(tps=10.0, manager=mgr)
        assert mgr.tick_rate == pytest.approx(0.1)

    def test_control_pause_when_stopped(self):
        resp = control(ControlAction.pause, manager=_build_manager())
        assert resp.status == "error"

    def test_events_since_tick(self):
        mgr = _build_manager(alive_probability=0.6)
        _advance(mgr, 30)
        events = get_state(since_tick=0, include_plants=False, manager=mgr).events
        later = get_state(since_tick=15, include_plants=False, manager=mgr).events
        assert all(e.tick >= 15 for e in later)
        assert len(later) <= len(events)

    def test_missing_snapshot_is_503(self):
        mgr = _build_manager()
        mgr._latest_snapshot = None
        with pytest.raises(HTTPException) as exc:
            get_map(manager=mgr)
        assert exc.value.status_code == 503


class TestApp:

    def test_routes_registered(self):
        app = create_app(SimulationConfig(world_seed=1))
        paths = set(app.openapi()["paths"])
        for p in ("/api/v1/state", "/api/v1/map", "/api/v1/player/move",
                  "/api/v1/control/{action}", "/api/v1/config", "/api/v1/stats"):
            assert p in paths

    def test_dependency_requires_server(self):
        set_engine_manager(None)
        with pytest.raises(RuntimeError):
            get_engine_manager()
