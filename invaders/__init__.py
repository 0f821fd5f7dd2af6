"""
Invaders: a frame-stepped Space Invaders simulation.

The package is display-free. A front end (see spaceinvader.py) feeds it
elapsed time, a monotonic timestamp and an InputState each frame, then paints
`Session.snapshot()` and reacts to the returned FrameEvents.
"""
from .errors import ConfigurationError, InvadersError, InvariantViolation
from .events import EventKind, FrameEvent, FrameEvents
from .entities import BonusCraft, Enemy, Player, Projectile
from .session import EnemyView, InputState, Phase, ProjectileView, Session, Snapshot
from .settings import GameConfig
from .swarm import Swarm, SwarmUpdate
from .utils import Rect, clamp, lerp, overlaps, random_float, random_int

__all__ = [
    "BonusCraft", "ConfigurationError", "Enemy", "EnemyView", "EventKind",
    "FrameEvent", "FrameEvents", "GameConfig", "InputState", "InvadersError",
    "InvariantViolation", "Phase", "Player", "Projectile", "ProjectileView",
    "Rect", "Session", "Snapshot", "Swarm", "SwarmUpdate", "clamp", "lerp",
    "overlaps", "random_float", "random_int",
]
