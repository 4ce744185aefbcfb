"""Boss: a large ship with rotating movement patterns and volley fire."""

import math
from typing import List

from models import BulletOwner

from ...config import (
    BOSS_WIDTH, BOSS_HEIGHT, BOSS_BASE_HEALTH, BOSS_HEALTH_PER_LEVEL, BOSS_SPEED,
    BOSS_PATTERN_FRAMES, BOSS_BASE_SHOOT_INTERVAL, BOSS_SHOOT_INTERVAL_STEP,
    BOSS_MIN_SHOOT_INTERVAL, BOSS_SPREAD_LEVEL, BOSS_BULLET_SPEED,
    BOSS_SPREAD_BULLET_SPEED, SCREEN_WIDTH, SCREEN_HEIGHT, Colors,
)
from ..descriptors import Renderable
from .bullet import Bullet


# Movement patterns, cycled in this order
PATTERN_SWEEP = 0
PATTERN_FOLLOW = 1
PATTERN_SWAY = 2
PATTERN_COUNT = 3

# Muzzle offsets from the boss's left edge
_VOLLEY_OFFSETS = (30.0, 60.0, 90.0)
_SPREAD_OFFSETS = (45.0, 75.0)


def shoot_interval_for(level: int) -> int:
    """Frames between volleys, faster each level down to a floor."""
    return max(BOSS_BASE_SHOOT_INTERVAL - level * BOSS_SHOOT_INTERVAL_STEP, BOSS_MIN_SHOOT_INTERVAL)


class Boss:
    """Boss guarding every third level.

    The boss owns its bullets: they advance with the boss and are pruned
    once they leave the bottom of the canvas.

    Attributes:
        health: Remaining health, stored clamped at 0
        pattern: Active movement pattern index
        pattern_timer: Frames spent in the active pattern
        shoot_timer: Frames since the last volley
        bullets: Live boss bullets
    """

    def __init__(
        self,
        x: float,
        y: float,
        level: int,
        canvas_width: float = SCREEN_WIDTH,
        canvas_height: float = SCREEN_HEIGHT,
    ):
        self.x = x
        self.y = y
        self.width = BOSS_WIDTH
        self.height = BOSS_HEIGHT
        self.level = level
        self.health = BOSS_BASE_HEALTH + level * BOSS_HEALTH_PER_LEVEL
        self.max_health = self.health
        self.speed = BOSS_SPEED
        self.direction = 1
        self.pattern = PATTERN_SWEEP
        self.pattern_timer = 0
        self.shoot_timer = 0
        self.bullets: List[Bullet] = []
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    @property
    def shoot_interval(self) -> int:
        return shoot_interval_for(self.level)

    @property
    def destroyed(self) -> bool:
        return self.health <= 0

    @property
    def health_ratio(self) -> float:
        return self.health / self.max_health

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    def advance(self, player_center_x: float) -> None:
        """Move by the active pattern, fire when due, advance own bullets."""
        self.pattern_timer += 1
        if self.pattern_timer > BOSS_PATTERN_FRAMES:
            self.pattern = (self.pattern + 1) % PATTERN_COUNT
            self.pattern_timer = 0

        if self.pattern == PATTERN_SWEEP:
            self._sweep()
        elif self.pattern == PATTERN_FOLLOW:
            if self.x + self.width / 2 < player_center_x:
                self.x += self.speed * 0.5
            else:
                self.x -= self.speed * 0.5
        else:
            self.x += math.sin(self.pattern_timer * 0.1) * 2

        self.shoot_timer += 1
        if self.shoot_timer > self.shoot_interval:
            self.bullets.extend(self.volley())
            self.shoot_timer = 0

        for bullet in self.bullets:
            bullet.advance()
        self.bullets = [b for b in self.bullets if b.y < self.canvas_height]

    def _sweep(self) -> None:
        right = self.canvas_width - self.width
        self.x += self.direction * self.speed
        if self.x <= 0 or self.x >= right:
            self.x = max(0.0, min(right, self.x))
            self.direction *= -1

    def volley(self) -> List[Bullet]:
        """Bullets for one volley, spread shots included from level 6."""
        muzzle_y = self.y + self.height
        bullets = [
            Bullet(self.x + dx, muzzle_y, BOSS_BULLET_SPEED, BulletOwner.BOSS)
            for dx in _VOLLEY_OFFSETS
        ]
        if self.level >= BOSS_SPREAD_LEVEL:
            bullets.extend(
                Bullet(self.x + dx, muzzle_y, BOSS_SPREAD_BULLET_SPEED, BulletOwner.BOSS,
                       color=Colors.BOSS_SPREAD_BULLET)
                for dx in _SPREAD_OFFSETS
            )
        return bullets

    def hit(self, damage: int = 1) -> None:
        self.health = max(0, self.health - damage)

    def describe(self) -> Renderable:
        return Renderable(
            kind='boss',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=Colors.BOSS,
            frame=self.pattern,
            health_ratio=self.health_ratio,
        )

    def __repr__(self) -> str:
        return f"Boss(level={self.level}, x={self.x:.1f}, health={self.health}/{self.max_health})"
