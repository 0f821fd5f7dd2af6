"""What happened during one Session.advance call, for sound and effects."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterator, List


class EventKind(Enum):
    PLAYER_FIRED = auto()
    ENEMY_FIRED = auto()
    ENEMY_KILLED = auto()
    BONUS_KILLED = auto()
    PLAYER_HIT = auto()
    WAVE_ADVANCED = auto()
    SPEED_STAGE_CHANGED = auto()  # value: new stage (1-4)
    PHASE_CHANGED = auto()        # value: new Phase


@dataclass(frozen=True)
class FrameEvent:
    kind: EventKind
    value: Any = None


class FrameEvents:
    """Ordered events of a single frame."""

    def __init__(self):
        self._events: List[FrameEvent] = []

    def emit(self, kind: EventKind, value: Any = None):
        self._events.append(FrameEvent(kind, value))

    def has(self, kind: EventKind) -> bool:
        return any(e.kind is kind for e in self._events)

    def of(self, kind: EventKind) -> List[FrameEvent]:
        return [e for e in self._events if e.kind is kind]

    def __iter__(self) -> Iterator[FrameEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self):
        return f"FrameEvents({[e.kind.name for e in self._events]})"
