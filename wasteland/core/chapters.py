"""Chapter progression.

Chapter 1 starts unlocked and in progress; every other chapter is locked
until the chapter before it completes. Unlocking follows chapter numbers
with no gaps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from wasteland.core.enums import ChapterStatus

if TYPE_CHECKING:
    from wasteland.core.tables import ChapterTemplate

logger = logging.getLogger(__name__)


@dataclass
class ChapterSystemContext:
    """Save-friendly snapshot of chapter progress."""

    current_chapter_id: str | None = None
    unlocked_chapter_ids: set[str] = field(default_factory=set)
    completed_chapter_ids: set[str] = field(default_factory=set)


@dataclass(slots=True)
class Chapter:
    chapter_id: str
    template: ChapterTemplate
    map_ids: list[str]
    status: ChapterStatus = ChapterStatus.LOCKED
    current_map_index: int = 1          # 1-based

    @property
    def number(self) -> int:
        return self.template.chapter_number

    def advance_to(self, status: ChapterStatus) -> None:
        """Move forward to *status*; never moves backwards."""
        if status > self.status:
            self.status = status


class ChapterEngine:
    def __init__(self, templates: Iterable[ChapterTemplate], ctx: ChapterSystemContext | None = None) -> None:
        self.ctx = ctx if ctx is not None else ChapterSystemContext()
        self._chapters: dict[str, Chapter] = {
            t.chapter_id: Chapter(t.chapter_id, t, t.map_id_list) for t in templates
        }
        self._apply_context()

    def _apply_context(self) -> None:
        first = self.chapter_by_number(1)
        if first is not None:
            first.advance_to(ChapterStatus.UNLOCKED)
            self.ctx.unlocked_chapter_ids.add(first.chapter_id)
            if self.ctx.current_chapter_id is None:
                self.ctx.current_chapter_id = first.chapter_id

        for chapter_id in self.ctx.unlocked_chapter_ids:
            chapter = self._chapters.get(chapter_id)
            if chapter is not None:
                chapter.advance_to(ChapterStatus.UNLOCKED)

        current = self.current_chapter()
        if current is not None:
            current.advance_to(ChapterStatus.IN_PROGRESS)

        for chapter_id in self.ctx.completed_chapter_ids:
            chapter = self._chapters.get(chapter_id)
            if chapter is not None:
                chapter.advance_to(ChapterStatus.COMPLETED)

    # -- queries --

    def get(self, chapter_id: str) -> Chapter | None:
        return self._chapters.get(chapter_id)

    def chapter_by_number(self, number: int) -> Chapter | None:
        for chapter in self._chapters.values():
            if chapter.number == number:
                return chapter
        return None

    def current_chapter(self) -> Chapter | None:
        if self.ctx.current_chapter_id is None:
            return None
        return self._chapters.get(self.ctx.current_chapter_id)

    def all_chapters(self) -> list[Chapter]:
        return sorted(self._chapters.values(), key=lambda c: c.number)

    def unlocked_chapters(self) -> list[Chapter]:
        return [c for c in self.all_chapters() if c.status != ChapterStatus.LOCKED]

    def is_unlocked(self, chapter_id: str) -> bool:
        return chapter_id in self.ctx.unlocked_chapter_ids

    def is_completed(self, chapter_id: str) -> bool:
        return chapter_id in self.ctx.completed_chapter_ids

    def current_map_ids(self) -> list[str]:
        current = self.current_chapter()
        return list(current.map_ids) if current is not None else []

    def current_map_id(self) -> str | None:
        """Map id at the current chapter's map index, falling back to its first map."""
        current = self.current_chapter()
        if current is None or not current.map_ids:
            return None
        idx = current.current_map_index - 1
        if 0 <= idx < len(current.map_ids):
            return current.map_ids[idx]
        return current.map_ids[0]

    # -- transitions --

    def unlock_next(self) -> Chapter | None:
        """Complete the current chapter and enter the next one.

        On the last chapter the current chapter is still marked completed,
        it stays current and ``None`` is returned.
        """
        current = self.current_chapter()
        if current is None:
            return None
        current.advance_to(ChapterStatus.COMPLETED)
        self.ctx.completed_chapter_ids.add(current.chapter_id)

        nxt = self.chapter_by_number(current.number + 1)
        if nxt is None:
            logger.info("Chapter %s completed, no chapter follows", current.chapter_id)
            return None

        nxt.advance_to(ChapterStatus.UNLOCKED)
        self.ctx.unlocked_chapter_ids.add(nxt.chapter_id)
        nxt.advance_to(ChapterStatus.IN_PROGRESS)
        nxt.current_map_index = 1
        self.ctx.current_chapter_id = nxt.chapter_id
        logger.info("Chapter %s completed, entering chapter %s", current.chapter_id, nxt.chapter_id)
        return nxt

    def switch_to_map(self, map_index: int) -> bool:
        """Select a map (1-based) within the current chapter."""
        current = self.current_chapter()
        if current is None or not 1 <= map_index <= len(current.map_ids):
            return False
        current.current_map_index = map_index
        return True

    # -- persistence --

    def get_context(self) -> ChapterSystemContext:
        return ChapterSystemContext(
            current_chapter_id=self.ctx.current_chapter_id,
            unlocked_chapter_ids=set(self.ctx.unlocked_chapter_ids),
            completed_chapter_ids=set(self.ctx.completed_chapter_ids),
        )

    def restore_context(self, ctx: ChapterSystemContext) -> None:
        """Load saved progress. Statuses are re-derived and only move forward."""
        self.ctx = ChapterSystemContext(
            current_chapter_id=ctx.current_chapter_id,
            unlocked_chapter_ids=set(ctx.unlocked_chapter_ids),
            completed_chapter_ids=set(ctx.completed_chapter_ids),
        )
        self._apply_context()
