"""Decides whether a garbage object yields its base or its advanced output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from wasteland.core.parsing import parse_stacks
from wasteland.systems.loot.base import CONDITION_REGISTRY

if TYPE_CHECKING:
    from wasteland.core.models import ItemStack
    from wasteland.core.tables import AdvancedConditionTemplate, GarbageTemplate
    from wasteland.systems.loot.base import LootContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedLoot:
    stacks: list[ItemStack]
    is_advanced: bool = False
    related_explorer_ids: list[str] = field(default_factory=list)


def _base(garbage: GarbageTemplate) -> ResolvedLoot:
    return ResolvedLoot(parse_stacks(garbage.base_output))


def resolve_output(
    garbage: GarbageTemplate,
    all_conditions: Sequence[AdvancedConditionTemplate],
    ctx: LootContext,
) -> ResolvedLoot:
    """Resolve one garbage object.

    Conditions referenced by the garbage are tried in table order; the first
    satisfied one selects the advanced output, provided it is non-empty.
    Nothing in *ctx* is modified, so repeated calls give the same result.
    """
    referenced = set(garbage.condition_ids)
    applicable = [c for c in all_conditions if c.condition_id in referenced]
    if not applicable:
        return _base(garbage)

    categories = garbage.category_set
    for condition in applicable:
        handler = CONDITION_REGISTRY.get(condition.condition_type)
        if handler is None:
            logger.debug("No handler for condition type %r (%s)", condition.condition_type, condition.condition_id)
            continue
        if not handler.inspects_whole_board:
            wanted = condition.category_set
            if wanted and not (wanted & categories):
                continue
        result = handler.evaluate(condition, ctx)
        if not result.satisfied:
            continue

        advanced = parse_stacks(garbage.advanced_output)
        if not advanced:
            return _base(garbage)
        return ResolvedLoot(advanced, True, list(result.related_explorer_ids))

    return _base(garbage)
