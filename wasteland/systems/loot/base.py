"""Base classes for the advanced-output condition plugin system.

LootCondition      - Abstract base class; subclass and implement `evaluate()`.
ConditionResult    - (satisfied, related_explorer_ids) returned by a handler.
LootContext        - Party, board and garbage catalog a handler may inspect.
CONDITION_REGISTRY - Module-level dict of handlers keyed by condition type.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
    from wasteland.core.models import Explorer, ExplorationLayer
    from wasteland.core.tables import AdvancedConditionTemplate, GarbageTemplate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class LootContext:
    """Read-only view of the round a garbage object is resolved in."""
    party: Sequence[Explorer]
    board: ExplorationLayer
    garbage_catalog: Mapping[str, GarbageTemplate]


@dataclass(slots=True)
class ConditionResult:
    satisfied: bool
    related_explorer_ids: list[str] = field(default_factory=list)


NOT_SATISFIED = ConditionResult(False)


# ---------------------------------------------------------------------------
# Abstract condition
# ---------------------------------------------------------------------------

class LootCondition(ABC):
    """Base class for advanced-output condition handlers.

    Subclass this and implement:
      - condition_type:  type tag as written in the condition table
      - evaluate(cond, ctx): return a ConditionResult

    Handlers that look at the whole board rather than the garbage being
    resolved set ``inspects_whole_board`` so the resolver skips its
    per-object category pre-check.
    """

    inspects_whole_board: bool = False

    @property
    @abstractmethod
    def condition_type(self) -> str:
        """Type tag (e.g. 'ExplorerTagCount')."""

    @abstractmethod
    def evaluate(self, condition: AdvancedConditionTemplate, ctx: LootContext) -> ConditionResult:
        """Evaluate *condition* against the context. Must not mutate ctx."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

CONDITION_REGISTRY: dict[str, LootCondition] = {}


def register_condition(handler: LootCondition, *aliases: str) -> LootCondition:
    """Register a handler under its type tag and any legacy aliases."""
    for key in (handler.condition_type, *aliases):
        if key in CONDITION_REGISTRY:
            logger.debug("Replacing loot condition handler for %r", key)
        CONDITION_REGISTRY[key] = handler
    return handler
