from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, Optional


# ============================
# GEOMETRY
# ============================
@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def centerx(self) -> float:
        return self.x + self.width / 2


def overlaps(a: Rect, b: Rect) -> bool:
    """Strict AABB test: rects that only touch along an edge do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def bounds(rects: Iterable[Rect]) -> Optional[Rect]:
    rects = list(rects)
    if not rects:
        return None
    left = min(r.x for r in rects)
    top = min(r.y for r in rects)
    right = max(r.right for r in rects)
    bottom = max(r.bottom for r in rects)
    return Rect(left, top, right - left, bottom - top)


# ============================
# NUMBERS
# ============================
def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def random_int(lo: int, hi: int, rng: Optional[random.Random] = None) -> int:
    # inclusive on both ends
    return (rng or random).randint(lo, hi)


def random_float(lo: float, hi: float, rng: Optional[random.Random] = None) -> float:
    # [lo, hi)
    return lo + (rng or random).random() * (hi - lo)
