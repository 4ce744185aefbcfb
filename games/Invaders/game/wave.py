"""Invader wave: grid layout and collective march."""

import random
from typing import List, Optional

from models import BulletOwner, InvaderType

from ..config import (
    SCREEN_WIDTH, WAVE_ROWS, WAVE_COLS, WAVE_SPACING, WAVE_START_Y, WAVE_DROP,
    INVADER_WIDTH, INVADER_BULLET_SPEED,
)
from .entities import Bullet, Invader
from starfall.logging import get_logger

log = get_logger('invaders.wave')


def row_type(row: int) -> InvaderType:
    """Top two rows are fast, next two normal, the rest heavy."""
    if row < 2:
        return InvaderType.FAST
    if row < 4:
        return InvaderType.NORMAL
    return InvaderType.HEAVY


class InvaderWave:
    """All live invaders, moving as one block.

    The block marches sideways; when any invader reaches an edge in the
    direction of travel the whole block reverses and drops one step.
    """

    def __init__(self, canvas_width: float = SCREEN_WIDTH):
        self.canvas_width = canvas_width
        self.invaders: List[Invader] = []
        self.direction = 1

    def __len__(self) -> int:
        return len(self.invaders)

    def __iter__(self):
        return iter(self.invaders)

    @property
    def empty(self) -> bool:
        return not self.invaders

    def create_grid(self) -> None:
        """Replace the wave with a fresh grid centred horizontally."""
        start_x = (self.canvas_width - (WAVE_COLS - 1) * WAVE_SPACING) / 2
        self.invaders = [
            Invader(start_x + col * WAVE_SPACING, WAVE_START_Y + row * WAVE_SPACING, row_type(row))
            for row in range(WAVE_ROWS)
            for col in range(WAVE_COLS)
        ]
        self.direction = 1
        log.debug(f"New wave: {len(self.invaders)} invaders")

    def _at_edge(self) -> bool:
        right = self.canvas_width - INVADER_WIDTH
        for invader in self.invaders:
            if invader.x <= 0 and self.direction == -1:
                return True
            if invader.x >= right and self.direction == 1:
                return True
        return False

    def advance(self, speed: float) -> None:
        """Bounce at the edges, then march every invader and animate it.

        Args:
            speed: Horizontal pixels per frame
        """
        if self._at_edge():
            self.direction *= -1
            for invader in self.invaders:
                invader.y += WAVE_DROP

        for invader in self.invaders:
            invader.x += self.direction * speed
            invader.advance()

    def random_shooter(self, rng: Optional[random.Random] = None) -> Optional[Invader]:
        """Uniformly random live invader, or None when the wave is empty."""
        if not self.invaders:
            return None
        rng = rng or random
        return self.invaders[int(rng.random() * len(self.invaders))]

    @staticmethod
    def shot_from(invader: Invader) -> Bullet:
        """Bullet fired from an invader's underside."""
        return Bullet(
            invader.x + invader.width / 2,
            invader.y + invader.height,
            INVADER_BULLET_SPEED,
            BulletOwner.INVADER,
        )

    def lowest_bottom(self) -> Optional[float]:
        """Largest invader bottom edge, or None when empty."""
        if not self.invaders:
            return None
        return max(invader.bottom for invader in self.invaders)

    def reached(self, y: float) -> bool:
        """True if any invader's bottom edge is at or below y."""
        bottom = self.lowest_bottom()
        return bottom is not None and bottom >= y
