"""Core data models, tables and progression state."""

from wasteland.core.enums import CellType, ChapterStatus, Domain, QuestStatus
from wasteland.core.models import (
    BOARD_HEIGHT,
    BOARD_SIZE,
    BOARD_WIDTH,
    BoardCell,
    DeathDrop,
    ExplorationLayer,
    Explorer,
    GridCell,
    ItemStack,
    Monster,
    MonsterKey,
    Vector2,
)
from wasteland.core.grid import WorldGrid
from wasteland.core.tables import ConfigError, TableBundle
from wasteland.core.quests import QuestEngine, QuestSystemContext
from wasteland.core.chapters import ChapterEngine, ChapterSystemContext

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_SIZE",
    "BOARD_WIDTH",
    "BoardCell",
    "CellType",
    "ChapterEngine",
    "ChapterStatus",
    "ChapterSystemContext",
    "ConfigError",
    "DeathDrop",
    "Domain",
    "ExplorationLayer",
    "Explorer",
    "GridCell",
    "ItemStack",
    "Monster",
    "MonsterKey",
    "QuestEngine",
    "QuestStatus",
    "QuestSystemContext",
    "TableBundle",
    "Vector2",
    "WorldGrid",
]
