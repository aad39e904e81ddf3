"""Bounded, thread-safe feed of game events for the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """One line in the event feed."""

    round: int
    category: str            # "expedition", "combat", "loot", "death", "quest", "chapter", "travel"
    message: str
    subject_ids: tuple[str, ...] = ()


class EventLog:
    """Ring buffer of the most recent events. Oldest entries fall off first."""

    __slots__ = ("_buffer", "_lock")

    def __init__(self, max_events: int = 2000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def record(self, round_no: int, category: str, message: str, *subject_ids: str) -> GameEvent:
        event = GameEvent(round_no, category, message, tuple(subject_ids))
        with self._lock:
            self._buffer.append(event)
        return event

    def since_round(self, round_no: int) -> list[GameEvent]:
        with self._lock:
            return [e for e in self._buffer if e.round >= round_no]

    def latest(self, count: int = 50) -> list[GameEvent]:
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
