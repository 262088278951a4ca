"""GET /api/v1/config: expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from umbra.api.dependencies import get_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        world_seed=manager.seed,
        grid_rows=cfg.resolved_rows(),
        grid_cols=cfg.resolved_cols(),
        view_width=cfg.view_width,
        view_height=cfg.view_height,
        grid_margin=cfg.grid_margin,
        cell_size=cfg.cell_size,
        alive_probability=cfg.alive_probability,
        plant_density=cfg.plant_density,
        plant_energy_range=cfg.plant_energy_range,
        plant_weight_range=cfg.plant_weight_range,
        player_size=cfg.player_size,
        player_speed=cfg.player_speed,
        max_ticks=cfg.max_ticks,
        tick_rate=manager.tick_rate,
    )
