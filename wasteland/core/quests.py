"""Quest progression: trigger checks, completion tracking and rewards.

Lifecycle (strictly forward):
  NOT_TRIGGERED -> ACCEPTED      automatic, once the trigger condition holds
  ACCEPTED      -> COMPLETED     explicit, only when current >= target
  COMPLETED     -> REWARD_CLAIMED explicit, returns the reward once

The completion value is recomputed from the context counters whenever it
is read, so it never drifts from the world it describes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Sequence

from wasteland.core.enums import QuestCompletionType, QuestStatus, QuestTriggerType
from wasteland.core.parsing import ParamValue, parse_params, parse_stacks

if TYPE_CHECKING:
    from wasteland.core.models import Explorer, ItemStack
    from wasteland.core.tables import QuestTemplate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

@dataclass
class QuestSystemContext:
    """Everything quest conditions are evaluated against.

    Counters only grow. Mutate through :class:`QuestEngine` recorders.
    """

    current_round: int = 0
    current_day: int = 1
    shelter_level: int = 1
    party: list[Explorer] = field(default_factory=list)
    completed_quests: set[str] = field(default_factory=set)
    completed_explorations: dict[str, int] = field(default_factory=dict)
    defeated_monsters: dict[str, int] = field(default_factory=dict)
    built_facilities: dict[str, int] = field(default_factory=dict)

    def owned(self, item_id: str) -> int:
        """Aggregate quantity of *item_id* across the party's inventories."""
        return sum(e.count_item(item_id) for e in self.party)


# ---------------------------------------------------------------------------
# Quest model
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TriggerCondition:
    type: str
    params: dict[str, ParamValue] = field(default_factory=dict)


@dataclass(slots=True)
class CompletionCondition:
    type: str
    target_id: str
    target_value: int
    current_value: int = 0


@dataclass(slots=True)
class QuestReward:
    resources: list[ItemStack] = field(default_factory=list)
    items: list[ItemStack] = field(default_factory=list)

    def all_stacks(self) -> list[ItemStack]:
        return [s.copy() for s in (*self.resources, *self.items)]


@dataclass(slots=True)
class Quest:
    quest_id: str
    template: QuestTemplate
    trigger: TriggerCondition
    completion: CompletionCondition
    reward: QuestReward
    status: QuestStatus = QuestStatus.NOT_TRIGGERED
    next_quest_id: str | None = None
    priority: int = 999
    chapter_end: bool = False

    @classmethod
    def from_template(cls, template: QuestTemplate) -> Quest:
        return cls(
            quest_id=template.quest_id,
            template=template,
            trigger=TriggerCondition(template.trigger_type, parse_params(template.trigger_params)),
            completion=CompletionCondition(
                type=template.completion_type,
                target_id=template.completion_target_id,
                target_value=template.completion_target_value,
            ),
            reward=QuestReward(
                resources=parse_stacks(template.reward_resources),
                items=parse_stacks(template.reward_items),
            ),
            next_quest_id=template.next_quest_id or None,
            priority=template.priority,
            chapter_end=template.chapter_end,
        )

    @property
    def is_completable(self) -> bool:
        return self.completion.current_value >= self.completion.target_value


@dataclass(slots=True)
class QuestCompletion:
    success: bool
    chapter_end: bool = False


# ---------------------------------------------------------------------------
# Condition evaluation
# ---------------------------------------------------------------------------

def _num(params: dict[str, ParamValue], key: str) -> float | None:
    """Numeric param value, or None when missing or not a number."""
    try:
        value = float(params[key])
    except (KeyError, TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _at_least(actual: int, params: dict[str, ParamValue], key: str) -> bool:
    threshold = _num(params, key)
    if threshold is None:
        logger.debug("Trigger param %r missing or not numeric in %r", key, params)
        return False
    return actual >= threshold


def check_trigger(trigger: TriggerCondition, ctx: QuestSystemContext) -> bool:
    """Evaluate a trigger condition. Unknown trigger types never fire."""
    p = trigger.params
    match trigger.type:
        case QuestTriggerType.ROUND_REACHED.value:
            return _at_least(ctx.current_round, p, "round")
        case QuestTriggerType.QUEST_COMPLETED.value:
            return str(p.get("questId", "")) in ctx.completed_quests
        case QuestTriggerType.RESOURCE_OWNED.value:
            return _at_least(ctx.owned(str(p.get("resourceId", ""))), p, "quantity")
        case QuestTriggerType.EXPLORATION_COMPLETED.value:
            return ctx.completed_explorations.get(str(p.get("explorationPointId", "")), 0) > 0
        case QuestTriggerType.MONSTER_DEFEATED.value:
            needed = _num(p, "quantity") or 1
            return ctx.defeated_monsters.get(str(p.get("monsterId", "")), 0) >= needed
        case QuestTriggerType.SHELTER_LEVEL_REACHED.value:
            return _at_least(ctx.shelter_level, p, "level")
    return False


def completion_value(completion: CompletionCondition, ctx: QuestSystemContext) -> int:
    """Current progress value of a completion condition, derived from *ctx*."""
    target = completion.target_id
    match completion.type:
        case QuestCompletionType.COLLECT_RESOURCE.value:
            return ctx.owned(target)
        case QuestCompletionType.DEFEAT_MONSTER.value:
            return ctx.defeated_monsters.get(target, 0)
        case QuestCompletionType.COMPLETE_EXPLORATION.value:
            return ctx.completed_explorations.get(target, 0)
        case QuestCompletionType.BUILD_FACILITY.value:
            return ctx.built_facilities.get(target, 0)
        case QuestCompletionType.REACH_ROUND.value:
            return ctx.current_round
    return 0


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class QuestEngine:
    """Owns all quests of a session and the context they are evaluated in."""

    def __init__(self, templates: Iterable[QuestTemplate], ctx: QuestSystemContext | None = None) -> None:
        self.ctx = ctx if ctx is not None else QuestSystemContext()
        self._quests: dict[str, Quest] = {}
        for template in templates:
            self._quests[template.quest_id] = Quest.from_template(template)

    # -- queries --

    def get(self, quest_id: str) -> Quest | None:
        return self._quests.get(quest_id)

    def all_quests(self) -> list[Quest]:
        return list(self._quests.values())

    def accepted_quests(self) -> list[Quest]:
        """Quests past NOT_TRIGGERED, lowest priority value first."""
        visible = [q for q in self._quests.values() if q.status >= QuestStatus.ACCEPTED]
        visible.sort(key=lambda q: q.priority)
        return visible

    # -- transitions --

    def check_and_auto_accept(self) -> list[Quest]:
        """Accept every untriggered quest whose trigger holds. Returns the newly accepted."""
        accepted: list[Quest] = []
        for quest in self._quests.values():
            if quest.status != QuestStatus.NOT_TRIGGERED:
                continue
            if check_trigger(quest.trigger, self.ctx):
                quest.status = QuestStatus.ACCEPTED
                quest.completion.current_value = completion_value(quest.completion, self.ctx)
                accepted.append(quest)
                logger.info("Quest %s accepted", quest.quest_id)
        return accepted

    def update_progress(self) -> None:
        for quest in self._quests.values():
            if quest.status in (QuestStatus.ACCEPTED, QuestStatus.COMPLETED):
                quest.completion.current_value = completion_value(quest.completion, self.ctx)

    def complete_quest(self, quest_id: str) -> QuestCompletion:
        """ACCEPTED -> COMPLETED, if the freshly computed value reaches the target."""
        quest = self._quests.get(quest_id)
        if quest is None or quest.status != QuestStatus.ACCEPTED:
            return QuestCompletion(False)

        quest.completion.current_value = completion_value(quest.completion, self.ctx)
        if not quest.is_completable:
            return QuestCompletion(False)

        quest.status = QuestStatus.COMPLETED
        self.ctx.completed_quests.add(quest_id)
        logger.info("Quest %s completed%s", quest_id, " (chapter end)" if quest.chapter_end else "")
        self.check_and_auto_accept()
        return QuestCompletion(True, quest.chapter_end)

    def claim_reward(self, quest_id: str) -> QuestReward | None:
        """COMPLETED -> REWARD_CLAIMED. Returns the reward, or None if not claimable."""
        quest = self._quests.get(quest_id)
        if quest is None or quest.status != QuestStatus.COMPLETED:
            return None
        quest.status = QuestStatus.REWARD_CLAIMED
        logger.info("Quest %s reward claimed", quest_id)
        if quest.next_quest_id:
            self.check_and_auto_accept()
        return quest.reward

    # -- context recorders --

    def _refresh(self) -> list[Quest]:
        self.update_progress()
        return self.check_and_auto_accept()

    def record_exploration_completed(self, point_id: str) -> list[Quest]:
        counters = self.ctx.completed_explorations
        counters[point_id] = counters.get(point_id, 0) + 1
        return self._refresh()

    def record_monster_defeated(self, monster_template_id: str) -> list[Quest]:
        counters = self.ctx.defeated_monsters
        counters[monster_template_id] = counters.get(monster_template_id, 0) + 1
        return self._refresh()

    def record_facility_built(self, facility_id: str) -> list[Quest]:
        counters = self.ctx.built_facilities
        counters[facility_id] = counters.get(facility_id, 0) + 1
        return self._refresh()

    def update_round(self, round_no: int, day: int) -> list[Quest]:
        self.ctx.current_round = round_no
        self.ctx.current_day = day
        return self._refresh()

    def update_shelter_level(self, level: int) -> list[Quest]:
        self.ctx.shelter_level = level
        return self.check_and_auto_accept()

    def update_party(self, party: Sequence[Explorer]) -> list[Quest]:
        self.ctx.party = list(party)
        return self._refresh()
