"""Player ship: keyboard-steered, fires upward, carries power-up timers."""

from typing import Dict, List

from models import BulletOwner, PowerUpType

from ...config import (
    PLAYER_WIDTH, PLAYER_HEIGHT, PLAYER_SPEED, PLAYER_SHOOT_COOLDOWN,
    PLAYER_BULLET_SPEED, SPEED_BOOST_FACTOR, MULTI_SHOT_SPREAD,
    POWER_UP_DURATIONS, Colors, seconds_to_frames,
)
from ..descriptors import Renderable
from .bullet import Bullet


class Player:
    """The player's ship.

    All timers count frames and tick toward zero in advance().

    Attributes:
        x: Left edge
        y: Top edge
        shoot_cooldown: Frames until the next shot is allowed
        power_ups: Remaining frames per power-up type
        fire_rate: Fire-rate upgrade level (divides the cooldown)
        speed_level: Speed upgrade level (+10% speed per level above 1)
    """

    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y
        self.width = PLAYER_WIDTH
        self.height = PLAYER_HEIGHT
        self.speed = PLAYER_SPEED
        self.shoot_cooldown = 0
        self.power_ups: Dict[PowerUpType, int] = {kind: 0 for kind in PowerUpType}
        self.fire_rate = 1
        self.speed_level = 1

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def has_shield(self) -> bool:
        return self.power_ups[PowerUpType.SHIELD] > 0

    @property
    def has_multi_shot(self) -> bool:
        return self.power_ups[PowerUpType.MULTI_SHOT] > 0

    @property
    def has_speed_boost(self) -> bool:
        return self.power_ups[PowerUpType.SPEED_BOOST] > 0

    @property
    def current_speed(self) -> float:
        """Movement speed this frame, including boost and upgrade."""
        speed = self.speed * (1 + (self.speed_level - 1) * 0.1)
        if self.has_speed_boost:
            speed *= SPEED_BOOST_FACTOR
        return speed

    @property
    def cooldown_frames(self) -> int:
        """Frames between shots at the current fire-rate level."""
        return max(1, PLAYER_SHOOT_COOLDOWN // self.fire_rate)

    def advance(self, left: bool, right: bool, canvas_width: float) -> None:
        """Move per held direction, clamp to the canvas, tick timers.

        Args:
            left: Move-left intent
            right: Move-right intent
            canvas_width: Right bound for the ship's left edge + width
        """
        speed = self.current_speed
        if left:
            self.x -= speed
        if right:
            self.x += speed
        self.x = max(0.0, min(canvas_width - self.width, self.x))

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        for kind, remaining in self.power_ups.items():
            if remaining > 0:
                self.power_ups[kind] = remaining - 1

    def shoot(self) -> List[Bullet]:
        """Fire if the cooldown allows.

        Returns:
            New bullets (empty while cooling down). Three bullets 5px apart
            with multi-shot, otherwise one from the ship's nose.
        """
        if self.shoot_cooldown > 0:
            return []

        nose = self.x + self.width / 2
        if self.has_multi_shot:
            offsets = (-MULTI_SHOT_SPREAD, 0.0, MULTI_SHOT_SPREAD)
        else:
            offsets = (0.0,)
        bullets = [
            Bullet(nose + offset, self.y, PLAYER_BULLET_SPEED, BulletOwner.PLAYER)
            for offset in offsets
        ]

        self.shoot_cooldown = self.cooldown_frames
        return bullets

    def hit(self) -> bool:
        """Take a hit.

        Returns:
            True if the hit damages the player, False if the shield
            absorbed it (the shield is consumed).
        """
        if self.has_shield:
            self.power_ups[PowerUpType.SHIELD] = 0
            return False
        return True

    def apply_power_up(self, kind: PowerUpType) -> None:
        """Start (or restart) a power-up's timer at its full duration."""
        self.power_ups[kind] = seconds_to_frames(POWER_UP_DURATIONS[kind])

    def describe(self) -> Renderable:
        return Renderable(
            kind='player',
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            color=Colors.PLAYER,
            shielded=self.has_shield,
        )

    def __repr__(self) -> str:
        active = {k.value: v for k, v in self.power_ups.items() if v > 0}
        return f"Player(x={self.x:.1f}, y={self.y:.1f}, cooldown={self.shoot_cooldown}, power_ups={active})"
