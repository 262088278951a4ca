"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when the simulation is constructed with invalid parameters."""


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    world_seed: int | None = None          # None = draw a fresh seed at startup

    # View / layout (pixels)
    view_width: int = 800
    view_height: int = 700
    grid_margin: int = 140
    cell_size: int = 8

    # Grid (None = derived from the view and cell size)
    grid_rows: int | None = None
    grid_cols: int | None = None
    alive_probability: float = 0.15

    # Plants
    plant_density: float = 0.12
    plant_energy_range: tuple[float, float] = (50.0, 100.0)
    plant_weight_range: tuple[float, float] = (5.0, 10.0)

    # Player
    player_start_x: int = 100
    player_start_y: int = 100
    player_size: int = 20
    player_speed: int = 10

    # Timing
    tick_interval: float = 0.2             # seconds between ticks
    max_ticks: int = 0                     # 0 = run until stopped

    # Logging
    log_level: str = "INFO"

    def resolved_rows(self) -> int:
        if self.grid_rows is not None:
            return self.grid_rows
        return (self.view_height - 2 * self.grid_margin) // self.cell_size

    def resolved_cols(self) -> int:
        if self.grid_cols is not None:
            return self.grid_cols
        return (self.view_width - 2 * self.grid_margin) // self.cell_size

    def validate(self) -> SimulationConfig:
        """Fail fast on values that would otherwise surface mid-simulation."""
        if self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size}")
        rows, cols = self.resolved_rows(), self.resolved_cols()
        if rows <= 0 or cols <= 0:
            raise ConfigurationError(f"grid dimensions must be positive, got {rows}x{cols}")
        if not 0.0 <= self.alive_probability <= 1.0:
            raise ConfigurationError(f"alive_probability must be in [0, 1], got {self.alive_probability}")
        if self.plant_density < 0.0:
            raise ConfigurationError(f"plant_density must be non-negative, got {self.plant_density}")
        for name in ("plant_energy_range", "plant_weight_range"):
            low, high = getattr(self, name)
            if low > high:
                raise ConfigurationError(f"{name} is inverted: ({low}, {high})")
        if self.player_size <= 0 or self.player_size > min(self.view_width, self.view_height):
            raise ConfigurationError(f"player_size {self.player_size} does not fit the view")
        if self.tick_interval <= 0:
            raise ConfigurationError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.max_ticks < 0:
            raise ConfigurationError(f"max_ticks must be >= 0, got {self.max_ticks}")
        return self
