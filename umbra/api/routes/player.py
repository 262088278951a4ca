"""Player input routes under /api/v1/player, standing in for the keyboard."""

from __future__ import annotations

import logging
from enum import Enum

from fastapi import APIRouter, Depends

from umbra.api.dependencies import get_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.routes.state import cell_schema
from umbra.api.schemas import PlayerMoveRequest, PlayerSchema
from umbra.core.enums import Direction

logger = logging.getLogger(__name__)

router = APIRouter()


class ArrowKey(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


_ARROW_DIRECTIONS = {
    ArrowKey.up: Direction.UP,
    ArrowKey.down: Direction.DOWN,
    ArrowKey.left: Direction.LEFT,
    ArrowKey.right: Direction.RIGHT,
}


def _player_payload(manager: EngineManager) -> PlayerSchema:
    x, y = manager.player_position()
    return PlayerSchema(
        x=x, y=y, size=manager.config.player_size,
        overlapping=[cell_schema(e) for e in manager.player_overlaps()],
    )


@router.get("/player", response_model=PlayerSchema)
def get_player(manager: EngineManager = Depends(get_engine_manager)) -> PlayerSchema:
    return _player_payload(manager)


@router.post("/player/move", response_model=PlayerSchema)
def move_player(
    body: PlayerMoveRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> PlayerSchema:
    x, y = manager.move_player(body.dx, body.dy)
    logger.debug("Player moved by (%d, %d) to (%d, %d)", body.dx, body.dy, x, y)
    return _player_payload(manager)


@router.post("/player/nudge/{key}", response_model=PlayerSchema)
def nudge_player(
    key: ArrowKey,
    manager: EngineManager = Depends(get_engine_manager),
) -> PlayerSchema:
    manager.nudge_player(_ARROW_DIRECTIONS[key])
    return _player_payload(manager)
