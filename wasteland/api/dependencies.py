"""Request dependencies: the live session manager and its event feed."""

from __future__ import annotations

from wasteland.api.engine_manager import EngineManager
from wasteland.utils.event_log import EventLog

_manager: EngineManager | None = None


def set_engine_manager(manager: EngineManager | None) -> None:
    global _manager
    _manager = manager


def get_engine_manager() -> EngineManager:
    if _manager is None:
        raise RuntimeError("No game session: the app lifespan has not started.")
    return _manager


def get_event_log() -> EventLog:
    """Event feed of the current session; read without taking the session lock."""
    return get_engine_manager().event_log
