"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    BOARD_CELL = 0      # Picking an empty board cell
    SPAWN_WEIGHT = 1    # Weighted monster / garbage selection


@unique
class CellType(str, Enum):
    """World map cell types. Only Road, Shelter and ExplorationPoint are walkable."""

    SHELTER = "Shelter"
    ROAD = "Road"
    EXPLORATION_POINT = "ExplorationPoint"
    OBSTACLE = "Obstacle"
    BUILT = "Built"


WALKABLE_CELL_TYPES: frozenset[CellType] = frozenset(
    {CellType.SHELTER, CellType.ROAD, CellType.EXPLORATION_POINT}
)


@unique
class SpawnKind(str, Enum):
    """Occupant kinds a spawn-table entry can produce."""

    MONSTER = "Monster"
    GARBAGE = "Garbage"


@unique
class QuestStatus(IntEnum):
    """Quest lifecycle. Values are ordered; transitions only move forward."""

    NOT_TRIGGERED = 0
    ACCEPTED = 1
    COMPLETED = 2
    REWARD_CLAIMED = 3


@unique
class ChapterStatus(IntEnum):
    """Chapter lifecycle. Values are ordered; transitions only move forward."""

    LOCKED = 0
    UNLOCKED = 1
    IN_PROGRESS = 2
    COMPLETED = 3


@unique
class QuestTriggerType(str, Enum):
    ROUND_REACHED = "RoundReached"
    QUEST_COMPLETED = "QuestCompleted"
    RESOURCE_OWNED = "ResourceOwned"
    EXPLORATION_COMPLETED = "ExplorationCompleted"
    MONSTER_DEFEATED = "MonsterDefeated"
    SHELTER_LEVEL_REACHED = "ShelterLevelReached"


@unique
class QuestCompletionType(str, Enum):
    COLLECT_RESOURCE = "CollectResource"
    DEFEAT_MONSTER = "DefeatMonster"
    COMPLETE_EXPLORATION = "CompleteExploration"
    BUILD_FACILITY = "BuildFacility"
    REACH_ROUND = "ReachRound"
