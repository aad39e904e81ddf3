"""GET /api/v1/state, /api/v1/events: dynamic session data (polled by UI)."""

from __future__ import annotations

from typing import Iterable

from fastapi import APIRouter, Depends, Query

from wasteland.api.dependencies import get_engine_manager, get_event_log
from wasteland.api.engine_manager import EngineManager
from wasteland.api.schemas import (
    BoardCellSchema,
    EventSchema,
    ExplorerSchema,
    GameStateResponse,
    ItemStackSchema,
    MonsterSchema,
    PositionSchema,
    SessionSchema,
)
from wasteland.core.models import Explorer, ItemStack, Vector2
from wasteland.utils.event_log import EventLog

router = APIRouter()


def stacks_out(stacks: Iterable[ItemStack]) -> list[ItemStackSchema]:
    return [ItemStackSchema(item_id=s.item_id, quantity=s.quantity) for s in stacks]


def position_out(pos: Vector2) -> PositionSchema:
    return PositionSchema(x=pos.x, y=pos.y)


def _serialize_explorer(e: Explorer) -> ExplorerSchema:
    return ExplorerSchema(
        id=e.id,
        name_key=e.template.name_key,
        hp=e.hp,
        max_hp=e.max_hp,
        stamina=e.stamina,
        max_stamina=e.max_stamina,
        inventory_capacity=e.inventory_capacity,
        identity_tags=e.identity_tags,
        inventory=stacks_out(e.inventory),
        equipment=list(e.equipment),
        slot_types=list(e.slot_types),
    )


@router.get("/state", response_model=GameStateResponse)
def get_state(manager: EngineManager = Depends(get_engine_manager)) -> GameStateResponse:
    with manager.locked() as engine:
        w = engine.world
        session = None
        if w.session is not None:
            s = w.session
            session = SessionSchema(
                point_id=s.point_id,
                layer_index=s.layer_index,
                max_layers=s.point.max_layers,
                started_round=s.started_round,
                board=[
                    BoardCellSchema(
                        index=c.index, column=c.column, row=c.row,
                        explorer_id=c.explorer_id,
                        monster_key=str(c.monster_id) if c.monster_id is not None else None,
                        garbage_id=c.garbage_id,
                    )
                    for c in s.board
                ],
                monsters=[
                    MonsterSchema(key=str(k), template_id=m.template_id, hp=m.hp)
                    for k, m in w.monsters.items()
                ],
            )
        return GameStateResponse(
            round=w.round,
            day=w.day,
            shelter_level=w.shelter_level,
            team_position=position_out(w.team_position),
            travel_path=[position_out(p) for p in w.travel.path],
            party=[_serialize_explorer(e) for e in w.party.values()],
            session=session,
            holding_area=stacks_out(w.holding.stacks()),
            warehouse=stacks_out(w.warehouse.stacks()),
        )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since_round: int | None = Query(None, ge=0, description="Only events from this round on"),
    limit: int = Query(50, ge=1, le=1000),
    log: EventLog = Depends(get_event_log),
) -> list[EventSchema]:
    events = log.since_round(since_round)[-limit:] if since_round is not None else log.latest(limit)
    return [
        EventSchema(round=e.round, category=e.category, message=e.message, subject_ids=list(e.subject_ids))
        for e in events
    ]
