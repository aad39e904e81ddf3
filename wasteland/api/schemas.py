"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Shared ---

class ItemStackSchema(BaseModel):
    item_id: str
    quantity: int


class PositionSchema(BaseModel):
    x: int
    y: int


# --- State ---

class ExplorerSchema(BaseModel):
    id: str
    name_key: str = ""
    hp: int
    max_hp: int
    stamina: int
    max_stamina: int
    inventory_capacity: int
    identity_tags: list[str] = Field(default_factory=list)
    inventory: list[ItemStackSchema] = Field(default_factory=list)
    equipment: list[str | None] = Field(default_factory=list)
    slot_types: list[str] = Field(default_factory=list)


class MonsterSchema(BaseModel):
    key: str
    template_id: str
    hp: int


class BoardCellSchema(BaseModel):
    index: int
    column: int
    row: int
    explorer_id: str | None = None
    monster_key: str | None = None
    garbage_id: str | None = None


class SessionSchema(BaseModel):
    point_id: str
    layer_index: int
    max_layers: int
    started_round: int
    board: list[BoardCellSchema]
    monsters: list[MonsterSchema] = Field(default_factory=list)


class GameStateResponse(BaseModel):
    round: int
    day: int
    shelter_level: int
    team_position: PositionSchema
    travel_path: list[PositionSchema] = Field(default_factory=list)
    party: list[ExplorerSchema] = Field(default_factory=list)
    session: SessionSchema | None = None
    holding_area: list[ItemStackSchema] = Field(default_factory=list)
    warehouse: list[ItemStackSchema] = Field(default_factory=list)


# --- Map ---

class DeathDropSchema(BaseModel):
    owner_id: str
    death_round: int
    items: list[ItemStackSchema]


class MapCellSchema(BaseModel):
    x: int
    y: int
    cell_type: str
    walkable: bool
    exploration_point_id: str | None = None
    progress: int | None = None
    death_drop: DeathDropSchema | None = None


class MapResponse(BaseModel):
    width: int
    height: int
    cells: list[MapCellSchema]


# --- Progression ---

class QuestSchema(BaseModel):
    quest_id: str
    name_key: str = ""
    status: str
    priority: int
    completion_type: str
    target_id: str
    target_value: int
    current_value: int
    chapter_end: bool = False
    next_quest_id: str | None = None
    reward: list[ItemStackSchema] = Field(default_factory=list)


class ChapterSchema(BaseModel):
    chapter_id: str
    chapter_number: int
    name_key: str = ""
    status: str
    map_ids: list[str]
    current_map_index: int
    current: bool = False


class QuestActionResponse(BaseModel):
    quest_id: str
    success: bool
    chapter_end: bool = False
    current_chapter_id: str | None = None
    reward: list[ItemStackSchema] = Field(default_factory=list)


# --- Events ---

class EventSchema(BaseModel):
    round: int
    category: str
    message: str
    subject_ids: list[str] = Field(default_factory=list)


# --- Control ---

class ExpeditionRequest(BaseModel):
    point_id: str
    explorer_ids: list[str] = Field(default_factory=list)


class PathRequest(BaseModel):
    x: int
    y: int


class PathResponse(BaseModel):
    found: bool
    path: list[PositionSchema] = Field(default_factory=list)


class LootEventSchema(BaseModel):
    cell_index: int
    garbage_id: str
    stacks: list[ItemStackSchema]
    is_advanced: bool
    related_explorer_ids: list[str] = Field(default_factory=list)


class RoundReportSchema(BaseModel):
    round: int
    point_id: str
    layer_index: int
    defeated: list[str] = Field(default_factory=list)
    loot: list[LootEventSchema] = Field(default_factory=list)
    remainder: list[ItemStackSchema] = Field(default_factory=list)
    deaths: list[str] = Field(default_factory=list)
    new_layer: bool = False
    exploration_completed: bool = False
    session_ended: bool = False
    accepted_quests: list[str] = Field(default_factory=list)


class ControlResponse(BaseModel):
    status: str
    message: str
    round: int = 0


class ResetRequest(BaseModel):
    seed: int | None = None
