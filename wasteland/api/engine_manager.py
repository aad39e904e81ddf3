"""EngineManager: owns the live game session behind the API.

The game is turn-driven, so there is no background thread: every request
that reads or mutates the session takes the lock for its whole duration
(single writer, consistent reads).
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from wasteland.core.world_state import WorldState
from wasteland.data import load_tables
from wasteland.engine.combat import SkirmishCombatResolver
from wasteland.engine.round_engine import RoundEngine
from wasteland.systems.rng import DeterministicRNG
from wasteland.utils.event_log import EventLog

if TYPE_CHECKING:
    from wasteland.config import SimulationConfig
    from wasteland.engine.combat import CombatResolver

logger = logging.getLogger(__name__)


class EngineManager:
    """Thread-safe holder of one RoundEngine and its event log."""

    def __init__(self, config: SimulationConfig, combat: CombatResolver | None = None) -> None:
        self.config = config
        self._combat = combat
        self._lock = threading.Lock()
        self._event_log = EventLog()
        self._engine: RoundEngine | None = None
        self._build()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @contextmanager
    def locked(self) -> Iterator[RoundEngine]:
        """Hold the session lock and yield the engine."""
        with self._lock:
            yield self._engine

    def reset(self, config: SimulationConfig | None = None) -> None:
        """Throw the session away and start a new one, optionally with a new config."""
        with self._lock:
            if config is not None:
                self.config = config
            self._event_log.clear()
            self._build()
        logger.info("Session reset (seed=%d)", self.config.world_seed)

    def _build(self) -> None:
        cfg = self.config
        tables = load_tables(cfg)
        world = WorldState(cfg, tables)
        self._engine = RoundEngine(
            world,
            combat=self._combat or SkirmishCombatResolver(),
            rng=DeterministicRNG(cfg.world_seed),
            event_log=self._event_log,
        )
