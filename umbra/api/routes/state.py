"""GET /api/v1/state: per-tick snapshot data (polled by the UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from umbra.api.dependencies import get_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.schemas import (
    CellSchema,
    EventSchema,
    ObserverSchema,
    PlantSchema,
    PlayerSchema,
    SimulationStats,
    WorldStateResponse,
)
from umbra.core.models import CellEntity

router = APIRouter()


def cell_schema(e: CellEntity) -> CellSchema:
    return CellSchema(id=e.entity_id, row=e.row, col=e.col, pixel_x=e.pixel.x, pixel_y=e.pixel.y)


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    include_plants: bool = Query(True, description="Plants never change; clients may fetch them once"),
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    obs = snapshot.observer
    plants = [
        PlantSchema(
            grid_x=p.grid_x, grid_y=p.grid_y,
            pixel_x=p.pixel.x, pixel_y=p.pixel.y,
            energy=p.energy, weight=p.weight,
        )
        for p in snapshot.plants
    ] if include_plants else []

    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message)
        for ev in manager.event_log.since_tick(since_tick)
    ]

    return WorldStateResponse(
        tick=snapshot.tick,
        seed=snapshot.seed,
        alive_count=snapshot.alive_count,
        cells=[cell_schema(e) for e in snapshot.entities],
        observer=ObserverSchema(
            row=obs.row, col=obs.col,
            direction=int(obs.heading), food_resources=obs.food_resources,
        ),
        player=PlayerSchema(
            x=snapshot.player.x, y=snapshot.player.y, size=snapshot.player.size,
            overlapping=[cell_schema(e) for e in snapshot.overlapping],
        ),
        plants=plants,
        total_plant_energy=snapshot.total_plant_energy,
        events=events,
    )


@router.get("/stats", response_model=SimulationStats)
def get_stats(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStats:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    px, py = manager.player_position()

    return SimulationStats(
        tick=snapshot.tick,
        active_cells=snapshot.alive_count,
        plant_count=len(snapshot.plants),
        total_plant_energy=snapshot.total_plant_energy,
        observer_food=snapshot.observer.food_resources,
        player_x=px,
        player_y=py,
        overlapping_count=len(manager.player_overlaps()),
        running=manager.running,
        paused=manager.paused,
    )
