# game/targets.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from config import (
    WIN_W, WIN_H, INTERACTION_RADIUS, BOUNDS_MARGIN_X, BOUNDS_MARGIN_Y,
    PICK_START, BOMB_START, PICK_RADIUS, BOMB_RADIUS, FEEDBACK_SEC,
)
from gesture.types import GestureResult, THUMB_TIP, RIGHT_ANKLE
from gesture.utils import dist, to_screen

PICK = "pick"
KICK = "kick"


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def for_surface(cls, w: float, h: float,
                    margin_x: float = BOUNDS_MARGIN_X, margin_y: float = BOUNDS_MARGIN_Y) -> "Bounds":
        return cls(margin_x, w - margin_x, margin_y, h - margin_y)

    def contains(self, p) -> bool:
        return self.min_x <= p[0] <= self.max_x and self.min_y <= p[1] <= self.max_y


def is_hit(anchor_px, target_center, radius: float = INTERACTION_RADIUS) -> bool:
    return dist(anchor_px, target_center) < radius


def random_position(bounds: Bounds, rng=None) -> Tuple[float, float]:
    rng = rng if rng is not None else np.random.default_rng()
    x = float(np.clip(rng.uniform(bounds.min_x, bounds.max_x), bounds.min_x, bounds.max_x))
    y = float(np.clip(rng.uniform(bounds.min_y, bounds.max_y), bounds.min_y, bounds.max_y))
    return x, y


@dataclass
class Target:
    kind: str
    position: Tuple[float, float]
    radius: int
    caption: str
    anchor: str
    highlighted: bool = False


@dataclass
class Feedback:
    message: str = ""
    until: float = 0.0

    def show(self, message: str, now: float, duration: float = FEEDBACK_SEC):
        self.message = message
        self.until = now + duration

    def visible(self, now: float) -> bool:
        return bool(self.message) and now < self.until


@dataclass(frozen=True)
class Hit:
    kind: str
    anchor_px: Tuple[float, float]
    old_position: Tuple[float, float]
    new_position: Tuple[float, float]


HIT_MESSAGES = {PICK: "Great Pick! +1", KICK: "Nice Kick! +1"}


@dataclass
class PickKickGame:
    width: float = WIN_W
    height: float = WIN_H
    radius: float = INTERACTION_RADIUS
    rng: Optional[np.random.Generator] = None
    bounds: Optional[Bounds] = None
    pick_count: int = 0
    kick_count: int = 0
    feedback: Feedback = field(default_factory=Feedback)

    def __post_init__(self):
        if self.bounds is None:
            self.bounds = Bounds.for_surface(self.width, self.height)
        if self.rng is None:
            self.rng = np.random.default_rng()
        self.targets = {
            PICK: Target(PICK, PICK_START, PICK_RADIUS, "Pick", THUMB_TIP),
            KICK: Target(KICK, BOMB_START, BOMB_RADIUS, "Bomb", RIGHT_ANKLE),
        }
        self._last = {PICK: False, KICK: False}

    def reset(self):
        self.pick_count = 0
        self.kick_count = 0
        self.feedback = Feedback()

    def check(self, kind: str, result: GestureResult, now: float) -> Optional[Hit]:
        """手势触发时：锚点映射到屏幕，离目标够近就算命中"""
        target = self.targets[kind]
        lm = result.anchor(target.anchor)
        if lm is None:
            return None

        anchor_px = to_screen(lm, self.width, self.height)
        if not is_hit(anchor_px, target.position, self.radius):
            return None

        if kind == PICK:
            self.pick_count += 1
        else:
            self.kick_count += 1
        self.feedback.show(HIT_MESSAGES[kind], now)

        old = target.position
        target.position = random_position(self.bounds, self.rng)
        return Hit(kind, anchor_px, old, target.position)

    def apply(self, result: GestureResult, now: float) -> List[Hit]:
        hits = []
        flags = {PICK: result.pick_detected, KICK: result.kick_detected}
        for kind, detected in flags.items():
            self.targets[kind].highlighted = detected
            # 只在 false -> true 时判定一次
            if detected and not self._last[kind]:
                hit = self.check(kind, result, now)
                if hit is not None:
                    hits.append(hit)
            self._last[kind] = detected
        return hits
