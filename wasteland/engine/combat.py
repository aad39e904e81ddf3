"""Combat resolution seam.

The round engine hands the board, party and monster registry to a
``CombatResolver`` and continues with whatever comes back. Real combat
rules live outside the core; two simple resolvers ship with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wasteland.core.models import Explorer, ExplorationLayer, Monster, MonsterKey


@dataclass(slots=True)
class CombatOutcome:
    board: ExplorationLayer
    party: dict[str, Explorer]
    monsters: dict[MonsterKey, Monster]


class CombatResolver(Protocol):
    def resolve(
        self,
        board: ExplorationLayer,
        party: dict[str, Explorer],
        monsters: dict[MonsterKey, Monster],
    ) -> CombatOutcome: ...


class PassiveCombatResolver:
    """No fighting: monsters already at 0 HP are dropped, nothing else changes."""

    def resolve(self, board, party, monsters) -> CombatOutcome:
        alive = {key: m for key, m in monsters.items() if m.alive}
        return CombatOutcome(board=board, party=party, monsters=alive)


class SkirmishCombatResolver:
    """One deterministic exchange per round.

    Every living explorer, in party order, hits the first living monster in
    board order for its template attack (minimum 1). Each monster still
    standing then hits the first living explorer in party order.
    """

    def resolve(self, board, party, monsters) -> CombatOutcome:
        order = [key for key in board.monster_keys() if key in monsters]

        for explorer in party.values():
            if not explorer.alive:
                continue
            target = next((monsters[k] for k in order if monsters[k].alive), None)
            if target is None:
                break
            target.hp = max(0, target.hp - max(1, explorer.template.attack))

        for key in order:
            monster = monsters[key]
            if not monster.alive:
                continue
            victim = next((e for e in party.values() if e.alive), None)
            if victim is None:
                break
            victim.take_damage(monster.template.attack)

        return CombatOutcome(board=board, party=party, monsters=monsters)
