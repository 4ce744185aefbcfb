"""Bullet entity: a small box moving vertically at a signed speed."""

from typing import Optional

from models import BulletOwner, Color

from ...config import BULLET_WIDTH, BULLET_HEIGHT, Colors
from ..descriptors import Renderable


_OWNER_COLORS = {
    BulletOwner.PLAYER: Colors.PLAYER_BULLET,
    BulletOwner.INVADER: Colors.INVADER_BULLET,
    BulletOwner.BOSS: Colors.BOSS_BULLET,
}


class Bullet:
    """Bullet fired by the player, an invader or the boss.

    Negative speed moves up the screen, positive moves down.
    """

    def __init__(
        self,
        x: float,
        y: float,
        speed: float,
        owner: BulletOwner = BulletOwner.PLAYER,
        color: Optional[Color] = None,
    ):
        self.x = x
        self.y = y
        self.width = BULLET_WIDTH
        self.height = BULLET_HEIGHT
        self.speed = speed
        self.owner = owner
        self.color = color if color is not None else _OWNER_COLORS[owner]

    def advance(self) -> None:
        """Move one frame along the vertical axis."""
        self.y += self.speed

    def is_on_screen(self, canvas_height: float) -> bool:
        """Bullets are kept while 0 < y < canvas_height."""
        return 0 < self.y < canvas_height

    def describe(self) -> Renderable:
        return Renderable(
            kind='bullet',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=self.color,
            variant=self.owner.value,
        )

    def __repr__(self) -> str:
        return f"Bullet({self.owner.value}, x={self.x:.1f}, y={self.y:.1f}, v={self.speed:+.1f})"
