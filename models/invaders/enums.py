"""
Invaders-specific enumerations.

These enums define the entity kinds, modes and states of the Invaders game.
"""

from enum import Enum

from starfall.games.game_state import GameState


class InvaderType(str, Enum):
    """Invader variants. Row 0-1 are fast, 2-3 normal, 4 heavy."""
    FAST = "fast"
    NORMAL = "normal"
    HEAVY = "heavy"


class PowerUpType(str, Enum):
    """Temporary player ability modifiers."""
    MULTI_SHOT = "multiShot"
    SHIELD = "shield"
    SPEED_BOOST = "speedBoost"


class BulletOwner(str, Enum):
    """Who fired a bullet."""
    PLAYER = "player"
    INVADER = "invader"
    BOSS = "boss"


class GameMode(str, Enum):
    """Rule set for a session.

    Attributes:
        NORMAL: Survive as long as possible
        TIME_ATTACK: Fixed countdown with scoring objectives
    """
    NORMAL = "normal"
    TIME_ATTACK = "timeAttack"

    @property
    def label(self) -> str:
        """Human-readable label for the UI."""
        return "Time Attack" if self is GameMode.TIME_ATTACK else "Normal"

    def toggled(self) -> 'GameMode':
        """The other mode."""
        return GameMode.NORMAL if self is GameMode.TIME_ATTACK else GameMode.TIME_ATTACK


class UpgradeKind(str, Enum):
    """Upgrade tracks bought with upgrade points."""
    DAMAGE = "damage"
    FIRE_RATE = "fire_rate"
    SPEED = "speed"
    LUCK = "luck"

    @classmethod
    def from_slot(cls, slot: int) -> 'UpgradeKind':
        """Map keyboard slot 1-4 to an upgrade track."""
        order = [cls.DAMAGE, cls.FIRE_RATE, cls.SPEED, cls.LUCK]
        if not 1 <= slot <= len(order):
            raise ValueError(f'Upgrade slot must be in range [1, {len(order)}], got {slot}')
        return order[slot - 1]


class SoundEvent(str, Enum):
    """Discrete events reported to the sound sink."""
    SHOOT = "shoot"
    EXPLOSION = "explosion"
    ENEMY_HIT = "enemyHit"
    POWER_UP = "powerUp"


class InvadersInternalState(str, Enum):
    """Internal states of an Invaders session.

    These map to the common GameState for runner compatibility:
    - START -> GameState.PLAYING (title screen shown within game)
    - PLAYING -> GameState.PLAYING
    - PAUSED -> GameState.PAUSED
    - GAME_OVER -> GameState.GAME_OVER
    """
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"

    def to_game_state(self) -> GameState:
        """Convert internal state to common GameState."""
        mapping = {
            InvadersInternalState.START: GameState.PLAYING,
            InvadersInternalState.PLAYING: GameState.PLAYING,
            InvadersInternalState.PAUSED: GameState.PAUSED,
            InvadersInternalState.GAME_OVER: GameState.GAME_OVER,
        }
        return mapping[self]
