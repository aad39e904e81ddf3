"""A small built-in world used when no table directory is configured.

Map legend: S shelter, R road, O obstacle, B built, M/P exploration points.

    x: 0 1 2 3 4 5 6 7
    y0 S R R R O R R P
    y1 O O R R R R O O
    y2 R R R O B O O O
    y3 M O O O O O O O
"""

from __future__ import annotations

from wasteland.core.enums import CellType
from wasteland.core.tables import (
    AdvancedConditionTemplate,
    ChapterTemplate,
    EquipmentTemplate,
    ExplorationPointTemplate,
    ExplorerTemplate,
    GarbageTemplate,
    MapCellTemplate,
    MonsterTemplate,
    QuestTemplate,
    ResourceTemplate,
    TableBundle,
)

DEMO_MAP = (
    "SRRRORRP",
    "OORRRROO",
    "RRROBOOO",
    "MOOOOOOO",
)

_LEGEND = {
    "S": CellType.SHELTER,
    "R": CellType.ROAD,
    "O": CellType.OBSTACLE,
    "B": CellType.BUILT,
    "M": CellType.EXPLORATION_POINT,
    "P": CellType.EXPLORATION_POINT,
}
_POINT_IDS = {"M": "P_market", "P": "P_ruins"}


def demo_map_cells() -> list[MapCellTemplate]:
    cells = []
    for y, row in enumerate(DEMO_MAP):
        for x, ch in enumerate(row):
            cells.append(MapCellTemplate(x=x, y=y, cell_type=_LEGEND[ch], exploration_point_id=_POINT_IDS.get(ch)))
    return cells


def demo_tables(default_max_stack: int = 99) -> TableBundle:
    return TableBundle(
        explorers=[
            ExplorerTemplate("ex_engineer", "Mara", max_hp=30, attack=3, inventory_capacity=4, identity_tags="Engineer"),
            ExplorerTemplate("ex_medic", "Jonah", max_hp=24, attack=2, inventory_capacity=4, identity_tags="Medic|Engineer"),
            ExplorerTemplate("ex_scout", "Ivy", max_hp=20, attack=2, inventory_capacity=6, identity_tags="Scout"),
        ],
        monsters=[
            MonsterTemplate("rat", "Mutant Rat", hp=3, attack=1),
            MonsterTemplate("zombie", "Shambler", hp=8, attack=3),
        ],
        map_cells=demo_map_cells(),
        exploration_points=[
            ExplorationPointTemplate(
                "P_market", "Abandoned Market", max_layers=2, difficulty="Easy",
                spawn_table="Garbage_trash_bag_6|Garbage_tool_box_3|Garbage_fridge_2",
            ),
            # "none" is not a monster, so its weight leaves room for garbage draws
            ExplorationPointTemplate(
                "P_ruins", "Collapsed Clinic", max_layers=2, difficulty="Normal",
                spawn_table="Monster_rat_2|Monster_none_6|Garbage_tool_box_3|Garbage_trash_bag_2",
            ),
        ],
        resources=[
            ResourceTemplate("scrap_metal", "Scrap Metal", max_stack=20),
            ResourceTemplate("cloth", "Cloth", max_stack=20),
            ResourceTemplate("wire", "Wire", max_stack=10),
            ResourceTemplate("tool_parts", "Tool Parts", max_stack=10),
            ResourceTemplate("canned_food", "Canned Food", max_stack=10),
            ResourceTemplate("water", "Water", max_stack=10),
        ],
        equipment=[
            EquipmentTemplate("crowbar", "Crowbar", tags="Tool|Weapon"),
            EquipmentTemplate("work_jacket", "Work Jacket", tags="Armor"),
        ],
        garbage=[
            GarbageTemplate(
                "trash_bag", "Trash Bag", base_output="scrap_metal_2|cloth_1", categories="Household",
                advanced_condition_ids="C_engineer", advanced_output="scrap_metal_4|wire_2",
            ),
            GarbageTemplate(
                "tool_box", "Tool Box", base_output="scrap_metal_1", categories="Tool",
                advanced_condition_ids="C_column", advanced_output="tool_parts_3",
            ),
            GarbageTemplate(
                "fridge", "Dead Fridge", base_output="canned_food_1|water_1", categories="Household",
                advanced_condition_ids="C_column|C_engineer", advanced_output="canned_food_3|water_2",
            ),
        ],
        advanced_conditions=[
            AdvancedConditionTemplate(
                "C_engineer", "ExplorerTagCount", "Engineers know what to keep",
                categories="Household", params="ExplorerTag=Engineer;MinCount=1",
            ),
            AdvancedConditionTemplate(
                "C_column", "GarbageColumnCluster", "A stash along one aisle",
                categories="Tool|Household", params="MinCount=2",
            ),
        ],
        quests=[
            QuestTemplate(
                "Q_first_steps", "RoundReached", "CompleteExploration", "First steps",
                trigger_params="round=0", completion_target_id="P_market", completion_target_value=1,
                reward_resources="water_3|canned_food_2", next_quest_id="Q_scrap", priority=1,
            ),
            QuestTemplate(
                "Q_scrap", "QuestCompleted", "CollectResource", "Scrap run",
                trigger_params="questId=Q_first_steps", completion_target_id="scrap_metal",
                completion_target_value=6, reward_items="crowbar_1", priority=2,
            ),
            QuestTemplate(
                "Q_rats", "MonsterDefeated", "DefeatMonster", "Pest control",
                trigger_params="monsterId=rat;quantity=1", completion_target_id="rat",
                completion_target_value=3, reward_resources="cloth_2", priority=3, chapter_end=True,
            ),
        ],
        chapters=[
            ChapterTemplate("CH_1", 1, "The Shelter", map_ids="map_town"),
            ChapterTemplate("CH_2", 2, "Beyond the Wall", map_ids="map_town|map_outskirts"),
        ],
        default_max_stack=default_max_stack,
    )
