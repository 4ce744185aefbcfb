"""Meteor: a falling, spinning hazard that takes several hits."""

import random
from typing import Optional

from models import Color

from ...config import (
    METEOR_SIZE, METEOR_HEALTH, METEOR_MIN_SPEED, METEOR_MAX_SPEED,
    METEOR_MIN_SPIN, METEOR_MAX_SPIN,
)
from ..descriptors import Renderable


class Meteor:
    """Meteor with per-instance fall speed and spin."""

    def __init__(
        self,
        x: float,
        y: float,
        speed: float = METEOR_MIN_SPEED,
        rotation_speed: float = METEOR_MIN_SPIN,
    ):
        self.x = x
        self.y = y
        self.width = METEOR_SIZE
        self.height = METEOR_SIZE
        self.speed = speed
        self.health = METEOR_HEALTH
        self.max_health = METEOR_HEALTH
        self.rotation = 0.0
        self.rotation_speed = rotation_speed

    @classmethod
    def random_at(cls, x: float, y: float, rng: Optional[random.Random] = None) -> 'Meteor':
        """Meteor with speed in [2, 5) and spin in [0.05, 0.15)."""
        rng = rng or random
        return cls(
            x, y,
            speed=METEOR_MIN_SPEED + rng.random() * (METEOR_MAX_SPEED - METEOR_MIN_SPEED),
            rotation_speed=METEOR_MIN_SPIN + rng.random() * (METEOR_MAX_SPIN - METEOR_MIN_SPIN),
        )

    @property
    def destroyed(self) -> bool:
        return self.health <= 0

    @property
    def health_ratio(self) -> float:
        return self.health / self.max_health

    def advance(self) -> None:
        self.y += self.speed
        self.rotation += self.rotation_speed

    def hit(self) -> None:
        """Lose one point of health."""
        self.health = max(0, self.health - 1)

    def is_on_screen(self, canvas_height: float) -> bool:
        return self.y < canvas_height

    def describe(self) -> Renderable:
        # Brown at full health, shading to red as it cracks
        ratio = self.health_ratio
        color = Color(
            r=139 + int(116 * (1 - ratio)),
            g=int(69 * ratio),
            b=19,
        )
        return Renderable(
            kind='meteor',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=color,
            rotation=self.rotation,
            health_ratio=ratio,
        )

    def __repr__(self) -> str:
        return f"Meteor(x={self.x:.1f}, y={self.y:.1f}, health={self.health})"
