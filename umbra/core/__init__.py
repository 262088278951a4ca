"""Core data models and world representation."""

from umbra.core.enums import Direction, Domain, Heading
from umbra.core.models import Box, CellEntity, GridLayout, PlantResource, Vector2
from umbra.core.grid import LifeGrid
from umbra.core.registry import EntityRegistry
from umbra.core.resources import ResourceField
from umbra.core.observer import Observer
from umbra.core.player import PlayerAgent
from umbra.core.world_state import WorldState
from umbra.core.snapshot import Snapshot

__all__ = [
    "Box",
    "CellEntity",
    "Direction",
    "Domain",
    "EntityRegistry",
    "GridLayout",
    "Heading",
    "LifeGrid",
    "Observer",
    "PlantResource",
    "PlayerAgent",
    "ResourceField",
    "Snapshot",
    "Vector2",
    "WorldState",
]
