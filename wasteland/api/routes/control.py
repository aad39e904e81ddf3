"""POST endpoints that drive the session: expedition, rounds, travel, reset."""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException

from wasteland.api.dependencies import get_engine_manager
from wasteland.api.engine_manager import EngineManager
from wasteland.api.routes.state import position_out, stacks_out
from wasteland.api.schemas import (
    ControlResponse,
    ExpeditionRequest,
    LootEventSchema,
    PathRequest,
    PathResponse,
    ResetRequest,
    RoundReportSchema,
)
from wasteland.core.models import Vector2
from wasteland.engine.round_engine import RoundReport

router = APIRouter()


def _serialize_report(r: RoundReport) -> RoundReportSchema:
    return RoundReportSchema(
        round=r.round,
        point_id=r.point_id,
        layer_index=r.layer_index,
        defeated=[str(k) for k in r.defeated],
        loot=[
            LootEventSchema(
                cell_index=e.cell_index,
                garbage_id=e.garbage_id,
                stacks=stacks_out(e.stacks),
                is_advanced=e.is_advanced,
                related_explorer_ids=e.related_explorer_ids,
            )
            for e in r.loot
        ],
        remainder=stacks_out(r.remainder),
        deaths=r.deaths,
        new_layer=r.new_layer,
        exploration_completed=r.exploration_completed,
        session_ended=r.session_ended,
        accepted_quests=r.accepted_quests,
    )


@router.post("/expedition", response_model=ControlResponse)
def start_expedition(req: ExpeditionRequest, manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    with manager.locked() as engine:
        w = engine.world
        if w.session is not None:
            raise HTTPException(status_code=409, detail=f"Expedition already running at {w.session.point_id}")
        if req.point_id not in w.tables.point_map:
            raise HTTPException(status_code=404, detail=f"Unknown exploration point {req.point_id}")
        session = engine.start_expedition(req.point_id, req.explorer_ids)
        if session is None:
            raise HTTPException(status_code=409, detail="Expedition could not start (point explored or no explorers).")
        return ControlResponse(status="ok", message=f"Entered {session.point_id}.", round=w.round)


@router.post("/round/advance", response_model=RoundReportSchema)
def advance_round(manager: EngineManager = Depends(get_engine_manager)) -> RoundReportSchema:
    with manager.locked() as engine:
        report = engine.advance_round()
        if report is None:
            raise HTTPException(status_code=409, detail="No expedition in progress.")
        return _serialize_report(report)


@router.post("/path", response_model=PathResponse)
def request_path(req: PathRequest, manager: EngineManager = Depends(get_engine_manager)) -> PathResponse:
    with manager.locked() as engine:
        if engine.world.session is not None:
            raise HTTPException(status_code=409, detail="Cannot travel during an expedition.")
        path = engine.request_path(Vector2(req.x, req.y))
        if path is None:
            return PathResponse(found=False)
        return PathResponse(found=True, path=[position_out(p) for p in path])


@router.post("/travel/step", response_model=ControlResponse)
def travel_step(manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    with manager.locked() as engine:
        pos = engine.travel_step()
        if pos is None:
            return ControlResponse(status="noop", message="No route to follow.", round=engine.world.round)
        return ControlResponse(status="ok", message=f"Moved to {pos}.", round=engine.world.round)


@router.post("/shelter/return", response_model=ControlResponse)
def return_to_shelter(manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    with manager.locked() as engine:
        w = engine.world
        if w.session is not None:
            raise HTTPException(status_code=409, detail="Expedition still in progress.")
        if not w.party:
            return ControlResponse(status="noop", message="No party to return.", round=w.round)
        moved = engine.return_to_shelter()
        if not moved and w.party:
            return ControlResponse(status="noop", message="The team is not on the shelter.", round=w.round)
        count = sum(s.quantity for s in moved)
        return ControlResponse(status="ok", message=f"Stored {count} items in the warehouse.", round=w.round)


@router.post("/reset", response_model=ControlResponse)
def reset(req: ResetRequest | None = None, manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    config = manager.config
    if req is not None and req.seed is not None:
        config = replace(config, world_seed=req.seed)
    manager.reset(config)
    return ControlResponse(status="ok", message=f"Session reset with seed {config.world_seed}.", round=0)
