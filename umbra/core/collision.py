"""Axis-aligned bounding-box overlap queries.

Report only: nothing here moves or blocks an entity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from umbra.core.models import Box, CellEntity
    from umbra.core.registry import EntityRegistry


def overlaps(a: Box, b: Box) -> bool:
    """True when the boxes intersect on both axes. Shared edges count."""
    return not (
        a.right < b.left
        or a.left > b.right
        or a.bottom < b.top
        or a.top > b.bottom
    )


def cells_overlapping(player_box: Box, cells: Iterable[CellEntity], cell_size: int) -> list[CellEntity]:
    """Return the members of *cells* whose boxes overlap *player_box*, in order."""
    return [e for e in cells if overlaps(e.box(cell_size), player_box)]


def overlapping_cells(player_box: Box, registry: EntityRegistry) -> list[CellEntity]:
    """Return the registry's cells whose boxes overlap *player_box*, row-major."""
    return cells_overlapping(player_box, registry, registry.layout.cell_size)
