"""Quests and chapters: GET lists, POST complete / claim."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from wasteland.api.dependencies import get_engine_manager
from wasteland.api.engine_manager import EngineManager
from wasteland.api.routes.state import stacks_out
from wasteland.api.schemas import ChapterSchema, QuestActionResponse, QuestSchema
from wasteland.core.chapters import Chapter
from wasteland.core.quests import Quest

router = APIRouter()


def _serialize_quest(q: Quest) -> QuestSchema:
    return QuestSchema(
        quest_id=q.quest_id,
        name_key=q.template.name_key,
        status=q.status.name,
        priority=q.priority,
        completion_type=q.completion.type,
        target_id=q.completion.target_id,
        target_value=q.completion.target_value,
        current_value=q.completion.current_value,
        chapter_end=q.chapter_end,
        next_quest_id=q.next_quest_id,
        reward=stacks_out(q.reward.all_stacks()),
    )


def _serialize_chapter(c: Chapter, current_id: str | None) -> ChapterSchema:
    return ChapterSchema(
        chapter_id=c.chapter_id,
        chapter_number=c.number,
        name_key=c.template.name_key,
        status=c.status.name,
        map_ids=list(c.map_ids),
        current_map_index=c.current_map_index,
        current=c.chapter_id == current_id,
    )


@router.get("/quests", response_model=list[QuestSchema])
def get_quests(manager: EngineManager = Depends(get_engine_manager)) -> list[QuestSchema]:
    """Accepted, completed and claimed quests in display order."""
    with manager.locked() as engine:
        quests = engine.world.quests
        quests.update_progress()
        return [_serialize_quest(q) for q in quests.accepted_quests()]


@router.post("/quests/{quest_id}/complete", response_model=QuestActionResponse)
def complete_quest(quest_id: str, manager: EngineManager = Depends(get_engine_manager)) -> QuestActionResponse:
    with manager.locked() as engine:
        if engine.world.quests.get(quest_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown quest {quest_id}")
        result = engine.complete_quest(quest_id)
        return QuestActionResponse(
            quest_id=quest_id,
            success=result.success,
            chapter_end=result.chapter_end,
            current_chapter_id=engine.world.chapters.ctx.current_chapter_id,
        )


@router.post("/quests/{quest_id}/claim", response_model=QuestActionResponse)
def claim_quest(quest_id: str, manager: EngineManager = Depends(get_engine_manager)) -> QuestActionResponse:
    with manager.locked() as engine:
        if engine.world.quests.get(quest_id) is None:
            raise HTTPException(status_code=404, detail=f"Unknown quest {quest_id}")
        reward = engine.claim_quest_reward(quest_id)
        return QuestActionResponse(
            quest_id=quest_id,
            success=reward is not None,
            current_chapter_id=engine.world.chapters.ctx.current_chapter_id,
            reward=stacks_out(reward.all_stacks()) if reward is not None else [],
        )


@router.get("/chapters", response_model=list[ChapterSchema])
def get_chapters(manager: EngineManager = Depends(get_engine_manager)) -> list[ChapterSchema]:
    with manager.locked() as engine:
        chapters = engine.world.chapters
        current_id = chapters.ctx.current_chapter_id
        return [_serialize_chapter(c, current_id) for c in chapters.all_chapters()]
