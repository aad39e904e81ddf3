"""GET /api/v1/map: world map cells with exploration progress and death drops."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from wasteland.api.dependencies import get_engine_manager
from wasteland.api.engine_manager import EngineManager
from wasteland.api.routes.state import stacks_out
from wasteland.api.schemas import DeathDropSchema, MapCellSchema, MapResponse
from wasteland.core.enums import WALKABLE_CELL_TYPES

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    with manager.locked() as engine:
        grid = engine.world.grid
        cells = []
        for cell in sorted(grid, key=lambda c: (c.pos.y, c.pos.x)):
            drop = cell.death_drop
            cells.append(MapCellSchema(
                x=cell.pos.x,
                y=cell.pos.y,
                cell_type=cell.cell_type.value,
                walkable=cell.cell_type in WALKABLE_CELL_TYPES,
                exploration_point_id=cell.exploration_point_id,
                progress=cell.progress,
                death_drop=DeathDropSchema(
                    owner_id=drop.owner_id, death_round=drop.death_round, items=stacks_out(drop.items),
                ) if drop is not None else None,
            ))
        return MapResponse(width=grid.width, height=grid.height, cells=cells)
