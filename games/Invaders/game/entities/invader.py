"""Invader entity. Movement is driven by the wave controller."""

from models import InvaderType

from ...config import INVADER_WIDTH, INVADER_HEIGHT, INVADER_ANIM_SPEED, INVADER_POINTS, Colors
from ..descriptors import Renderable


class Invader:
    """One member of a wave.

    The invader only animates itself; the wave controller moves every
    invader together.
    """

    def __init__(self, x: float, y: float, invader_type: InvaderType = InvaderType.NORMAL):
        self.x = x
        self.y = y
        self.width = INVADER_WIDTH
        self.height = INVADER_HEIGHT
        self.type = invader_type
        self.anim_frame = 0
        self.anim_speed = INVADER_ANIM_SPEED[invader_type]

    @property
    def points(self) -> int:
        """Base points before combo and damage multipliers."""
        return INVADER_POINTS[self.type]

    @property
    def sprite_frame(self) -> int:
        """Two-frame animation index (0 or 1)."""
        return (self.anim_frame // self.anim_speed) % 2

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def advance(self) -> None:
        """Step the animation counter."""
        self.anim_frame += 1

    def describe(self) -> Renderable:
        return Renderable(
            kind='invader',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=Colors.INVADERS[self.type],
            frame=self.sprite_frame,
            variant=self.type.value,
        )

    def __repr__(self) -> str:
        return f"Invader({self.type.value}, x={self.x:.1f}, y={self.y:.1f})"
