"""GET /api/v1/map: run-length encoded cell grid."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from umbra.api.dependencies import get_engine_manager
from umbra.api.engine_manager import EngineManager
from umbra.api.schemas import LayoutSchema, MapResponse

router = APIRouter()


def encode_rle(cells: tuple[tuple[bool, ...], ...]) -> list[int]:
    """Row-major RLE: [value, count, value, count, ...]."""
    rle: list[int] = []
    cur_val = -1
    cur_count = 0
    for row in cells:
        for alive in row:
            v = int(alive)
            if v == cur_val:
                cur_count += 1
            else:
                if cur_count:
                    rle.append(cur_val)
                    rle.append(cur_count)
                cur_val = v
                cur_count = 1
    if cur_count:
        rle.append(cur_val)
        rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not initialized yet.")

    return MapResponse(
        tick=snapshot.tick,
        rows=snapshot.rows,
        cols=snapshot.cols,
        layout=LayoutSchema(margin=snapshot.layout.margin, cell_size=snapshot.layout.cell_size),
        grid=encode_rle(snapshot.cells),
    )
