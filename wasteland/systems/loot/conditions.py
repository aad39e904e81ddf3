"""Built-in LootCondition implementations.

To add a new condition type:
  1. Create a LootCondition subclass here (or in a separate module).
  2. Register it in ``registry.py``.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from wasteland.core.models import BOARD_WIDTH
from wasteland.core.parsing import parse_params
from wasteland.systems.loot.base import NOT_SATISFIED, ConditionResult, LootCondition

if TYPE_CHECKING:
    from wasteland.core.tables import AdvancedConditionTemplate
    from wasteland.systems.loot.base import LootContext


def _positive_int(value, default: int) -> int:
    """Read a count parameter; anything missing, non-numeric or zero yields *default*."""
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    return number or default


class ExplorerTagCountCondition(LootCondition):
    """Satisfied when at least ``MinCount`` party members carry ``ExplorerTag``.

    Params: ``ExplorerTag=Engineer;MinCount=2`` (MinCount defaults to 1).
    The matching members are reported as related explorers.
    """

    @property
    def condition_type(self) -> str:
        return "ExplorerTagCount"

    def evaluate(self, condition: AdvancedConditionTemplate, ctx: LootContext) -> ConditionResult:
        params = parse_params(condition.params)
        tag = str(params.get("ExplorerTag", "")).strip()
        if not tag:
            return NOT_SATISFIED
        min_count = _positive_int(params.get("MinCount"), 1)

        matching = [e.id for e in ctx.party if tag in e.identity_tags]
        if len(matching) >= min_count:
            return ConditionResult(True, matching)
        return NOT_SATISFIED


class GarbageColumnClusterCondition(LootCondition):
    """Satisfied when one board column holds ``MinCount`` qualifying garbage.

    A garbage object qualifies when it lists this condition id and its
    categories overlap the condition's categories (an empty category list on
    the condition accepts everything). Params: ``MinCount=2`` (default 2).
    """

    inspects_whole_board = True

    @property
    def condition_type(self) -> str:
        return "GarbageColumnCluster"

    def evaluate(self, condition: AdvancedConditionTemplate, ctx: LootContext) -> ConditionResult:
        params = parse_params(condition.params)
        min_count = _positive_int(params.get("MinCount"), 2)
        wanted = condition.category_set

        per_column: Counter[int] = Counter()
        for cell in ctx.board.garbage_cells():
            garbage = ctx.garbage_catalog.get(cell.garbage_id)
            if garbage is None or condition.condition_id not in garbage.condition_ids:
                continue
            if wanted and not (wanted & garbage.category_set):
                continue
            per_column[cell.index % BOARD_WIDTH] += 1

        if any(count >= min_count for count in per_column.values()):
            return ConditionResult(True)
        return NOT_SATISFIED
