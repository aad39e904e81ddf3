from wasteland.utils.event_log import EventLog, GameEvent
from wasteland.utils.logging import setup_logging

__all__ = ["EventLog", "GameEvent", "setup_logging"]
