"""Falling, spinning power-up pickup."""

from models import PowerUpType

from ...config import POWER_UP_SIZE, POWER_UP_FALL_SPEED, POWER_UP_SPIN, Colors
from ..descriptors import Renderable


class PowerUp:
    """Pickup that grants a timed ability when it touches the player."""

    def __init__(self, x: float, y: float, power_type: PowerUpType):
        self.x = x
        self.y = y
        self.width = POWER_UP_SIZE
        self.height = POWER_UP_SIZE
        self.type = power_type
        self.speed = POWER_UP_FALL_SPEED
        self.rotation = 0.0

    def advance(self) -> None:
        self.y += self.speed
        self.rotation += POWER_UP_SPIN

    def is_on_screen(self, canvas_height: float) -> bool:
        return self.y < canvas_height

    def describe(self) -> Renderable:
        return Renderable(
            kind='power_up',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=Colors.POWER_UPS[self.type],
            rotation=self.rotation,
            variant=self.type.value,
        )

    def __repr__(self) -> str:
        return f"PowerUp({self.type.value}, x={self.x:.1f}, y={self.y:.1f})"
