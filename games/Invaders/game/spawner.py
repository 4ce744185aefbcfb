"""Timer-driven spawning of power-ups, meteors, bosses and invader shots.

Every timer accumulates elapsed milliseconds. A category fires once its
timer exceeds ``base + random() * jitter``, with the jitter redrawn on each
check, and then resets to zero. All randomness flows through one
injectable ``random.Random`` so runs can be replayed from a seed.
"""

import random
from typing import Optional

from models import PowerUpType

from ..config import (
    POWER_UP_SIZE, POWER_UP_SPAWN_BASE_MS, POWER_UP_SPAWN_LUCK_MS, POWER_UP_SPAWN_JITTER_MS,
    METEOR_SIZE, METEOR_SPAWN_Y, METEOR_SPAWN_BASE_MS, METEOR_SPAWN_JITTER_MS,
    BOSS_WIDTH, BOSS_SPAWN_Y, BOSS_SPAWN_DELAY_MS, BOSS_LEVEL_INTERVAL,
    INVADER_SHOT_BASE_MS, INVADER_SHOT_JITTER_MS, SCREEN_WIDTH, SCREEN_HEIGHT,
)
from .entities import Boss, Bullet, Meteor, PowerUp
from .wave import InvaderWave
from starfall.logging import get_logger

log = get_logger('invaders.spawner')

_POWER_UP_TYPES = list(PowerUpType)


def is_boss_level(level: int) -> bool:
    return level % BOSS_LEVEL_INTERVAL == 0


class Spawner:
    """Owns the spawn timers. Returns new entities; never stores them."""

    def __init__(
        self,
        canvas_width: float = SCREEN_WIDTH,
        canvas_height: float = SCREEN_HEIGHT,
        rng: Optional[random.Random] = None,
    ):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.rng = rng or random.Random()
        self.power_up_timer = 0.0
        self.meteor_timer = 0.0
        self.boss_timer = 0.0
        self.invader_shot_timer = 0.0

    def reset(self) -> None:
        """Zero every timer."""
        self.power_up_timer = 0.0
        self.meteor_timer = 0.0
        self.boss_timer = 0.0
        self.invader_shot_timer = 0.0

    def power_up_threshold(self, luck: int) -> float:
        """Draw a fresh power-up threshold; higher luck spawns sooner."""
        base = POWER_UP_SPAWN_BASE_MS - luck * POWER_UP_SPAWN_LUCK_MS
        return base + self.rng.random() * POWER_UP_SPAWN_JITTER_MS

    def spawn_power_up(self, dt_ms: float, luck: int = 1) -> Optional[PowerUp]:
        """Advance the power-up timer; return a new pickup when it fires."""
        self.power_up_timer += dt_ms
        if self.power_up_timer <= self.power_up_threshold(luck):
            return None
        self.power_up_timer = 0.0

        x = self.rng.random() * (self.canvas_width - POWER_UP_SIZE)
        kind = _POWER_UP_TYPES[int(self.rng.random() * len(_POWER_UP_TYPES))]
        log.debug(f"Spawned power-up {kind.value} at x={x:.0f}")
        return PowerUp(x, 0.0, kind)

    def spawn_meteor(self, dt_ms: float) -> Optional[Meteor]:
        """Advance the meteor timer; return a new meteor when it fires."""
        self.meteor_timer += dt_ms
        if self.meteor_timer <= METEOR_SPAWN_BASE_MS + self.rng.random() * METEOR_SPAWN_JITTER_MS:
            return None
        self.meteor_timer = 0.0

        x = self.rng.random() * (self.canvas_width - METEOR_SIZE)
        meteor = Meteor.random_at(x, METEOR_SPAWN_Y, self.rng)
        log.debug(f"Spawned {meteor!r}")
        return meteor

    def boss_eligible(self, level: int, boss_alive: bool, boss_defeated: bool, wave_empty: bool) -> bool:
        """A boss may appear on every third level once its wave is cleared."""
        return is_boss_level(level) and wave_empty and not boss_alive and not boss_defeated

    def spawn_boss(
        self,
        dt_ms: float,
        level: int,
        boss_alive: bool,
        boss_defeated: bool,
        wave_empty: bool,
    ) -> Optional[Boss]:
        """Advance the boss timer while eligible; return a boss after the delay.

        The timer only runs while a boss could appear, and drops back to
        zero whenever it cannot.
        """
        if not self.boss_eligible(level, boss_alive, boss_defeated, wave_empty):
            self.boss_timer = 0.0
            return None

        self.boss_timer += dt_ms
        if self.boss_timer <= BOSS_SPAWN_DELAY_MS:
            return None
        self.boss_timer = 0.0

        boss = Boss(
            self.canvas_width / 2 - BOSS_WIDTH / 2,
            BOSS_SPAWN_Y,
            level,
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
        )
        log.info(f"Boss spawned for level {level} with {boss.health} health")
        return boss

    def invader_shot(self, dt_ms: float, wave: InvaderWave) -> Optional[Bullet]:
        """Advance the invader-shot timer; a random invader fires when due.

        The timer resets on every attempt, even when the wave is empty.
        """
        self.invader_shot_timer += dt_ms
        if self.invader_shot_timer <= INVADER_SHOT_BASE_MS + self.rng.random() * INVADER_SHOT_JITTER_MS:
            return None
        self.invader_shot_timer = 0.0

        shooter = wave.random_shooter(self.rng)
        if shooter is None:
            return None
        return wave.shot_from(shooter)
