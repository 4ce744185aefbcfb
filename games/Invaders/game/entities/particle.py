"""Explosion particle with gravity and a fading lifetime."""

import colorsys
import random
from typing import List, Optional

from models import Color

from ...config import (
    PARTICLE_LIFE, PARTICLE_GRAVITY, PARTICLE_MAX_SPEED, PARTICLE_SIZE,
    EXPLOSION_PARTICLES,
)
from ..descriptors import Renderable


def _warm_color(rng: random.Random) -> Color:
    """Random saturated colour with hue between 10 and 70 degrees."""
    hue = (rng.random() * 60 + 10) / 360
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return Color(r=int(r * 255), g=int(g * 255), b=int(b * 255))


class Particle:
    """Single spark of an explosion."""

    def __init__(
        self,
        x: float,
        y: float,
        vx: float,
        vy: float,
        color: Color,
        life: int = PARTICLE_LIFE,
    ):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.life = life
        self.max_life = life
        self.color = color

    @classmethod
    def random_at(cls, x: float, y: float, rng: Optional[random.Random] = None) -> 'Particle':
        """Spark at (x, y) with velocity in [-5, 5) on each axis."""
        rng = rng or random
        spread = PARTICLE_MAX_SPEED * 2
        return cls(
            x, y,
            vx=(rng.random() - 0.5) * spread,
            vy=(rng.random() - 0.5) * spread,
            color=_warm_color(rng),
        )

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def alpha(self) -> float:
        return max(0.0, self.life / self.max_life)

    def advance(self) -> None:
        """Integrate velocity, apply gravity, burn one frame of life."""
        self.x += self.vx
        self.y += self.vy
        self.vy += PARTICLE_GRAVITY
        self.life -= 1

    def describe(self) -> Renderable:
        return Renderable(
            kind='particle',
            x=self.x,
            y=self.y,
            width=PARTICLE_SIZE,
            height=PARTICLE_SIZE,
            color=self.color,
            alpha=self.alpha,
        )


def explosion(x: float, y: float, rng: Optional[random.Random] = None) -> List[Particle]:
    """Burst of EXPLOSION_PARTICLES sparks centred on (x, y)."""
    return [Particle.random_at(x, y, rng) for _ in range(EXPLOSION_PARTICLES)]
