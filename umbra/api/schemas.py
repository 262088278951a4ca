"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Cells / entities ---

class CellSchema(BaseModel):
    id: str
    row: int
    col: int
    pixel_x: int
    pixel_y: int


class PlantSchema(BaseModel):
    grid_x: int
    grid_y: int
    pixel_x: int
    pixel_y: int
    energy: float
    weight: float


class ObserverSchema(BaseModel):
    row: int
    col: int
    direction: int = Field(description="+1 moving right, -1 moving left")
    food_resources: float


class PlayerSchema(BaseModel):
    x: int
    y: int
    size: int
    overlapping: list[CellSchema] = Field(default_factory=list)


# --- Map ---

class LayoutSchema(BaseModel):
    margin: int
    cell_size: int


class MapResponse(BaseModel):
    tick: int
    rows: int
    cols: int
    layout: LayoutSchema
    grid: list[int] = Field(description="Row-major RLE of cell states: [value, count, value, count, ...] (0=dead, 1=alive)")


# --- World State ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str


class WorldStateResponse(BaseModel):
    tick: int
    seed: int
    alive_count: int
    cells: list[CellSchema]
    observer: ObserverSchema
    player: PlayerSchema
    plants: list[PlantSchema] = Field(default_factory=list)
    total_plant_energy: float = 0.0
    events: list[EventSchema] = Field(default_factory=list)


# --- Player ---

class PlayerMoveRequest(BaseModel):
    dx: int = Field(0, ge=-1000, le=1000)
    dy: int = Field(0, ge=-1000, le=1000)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class SimulationConfigResponse(BaseModel):
    world_seed: int
    grid_rows: int
    grid_cols: int
    view_width: int
    view_height: int
    grid_margin: int
    cell_size: int
    alive_probability: float
    plant_density: float
    plant_energy_range: tuple[float, float]
    plant_weight_range: tuple[float, float]
    player_size: int
    player_speed: int
    max_ticks: int
    tick_rate: float


# --- Stats ---

class SimulationStats(BaseModel):
    """The counters the desktop HUD used to draw."""

    tick: int
    active_cells: int
    plant_count: int
    total_plant_energy: float
    observer_food: float
    player_x: int
    player_y: int
    overlapping_count: int
    running: bool
    paused: bool
