"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for one game session."""

    # World
    world_seed: int = 42
    tables_dir: str | None = None          # JSON table directory; None = bundled demo tables

    # Clock
    rounds_per_day: int = 48
    death_drop_expire_rounds: int = 96     # Rounds a death drop stays on its map cell (death round included)

    # Explorers
    stamina_cost_per_round: int = 1
    equipment_slot_types: tuple[str, ...] = ("Tool", "Weapon", "Armor", "Accessory", "Special", "Spare")

    # Inventory
    default_max_stack: int = 99            # Used when an item has no resource/equipment entry

    # Logging
    log_level: str = "INFO"

    def day_for_round(self, round_no: int) -> int:
        return round_no // self.rounds_per_day + 1
