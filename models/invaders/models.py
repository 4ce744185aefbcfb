"""
Invaders-specific data models.

These models define the session state owned by the simulation loop:
combo tracking, upgrade levels, time-attack objectives and the session
counters themselves.
"""

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict

from .enums import GameMode, InvadersInternalState, UpgradeKind


MAX_UPGRADE_LEVEL = 5

# Multiplier is 1.0 + 0.1 per combo step, capped at 3.0. Held in tenths so
# score arithmetic stays exact.
BASE_MULTIPLIER_TENTHS = 10
MAX_MULTIPLIER_TENTHS = 30


class ComboData(BaseModel):
    """Immutable combo state.

    Attributes:
        combo: Current consecutive-hit streak (non-negative)
        timer_ms: Milliseconds left before the streak decays (non-negative)
        max_combo: Highest streak reached this session (non-negative)

    Examples:
        >>> ComboData(combo=5).multiplier
        1.5
        >>> ComboData(combo=25).multiplier
        3.0
    """
    combo: int = 0
    timer_ms: float = 0.0
    max_combo: int = 0

    @field_validator('combo', 'max_combo')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate combo counters are non-negative."""
        if v < 0:
            raise ValueError(f'Combo values must be non-negative, got {v}')
        return v

    @field_validator('timer_ms')
    @classmethod
    def clamp_timer(cls, v: float) -> float:
        """Timer is stored clamped at zero."""
        return max(0.0, v)

    @computed_field
    @property
    def multiplier_tenths(self) -> int:
        """Score multiplier in tenths (10..30)."""
        return min(BASE_MULTIPLIER_TENTHS + self.combo, MAX_MULTIPLIER_TENTHS)

    @computed_field
    @property
    def multiplier(self) -> float:
        """Score multiplier in [1.0, 3.0]."""
        return self.multiplier_tenths / 10

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"ComboData(combo={self.combo}, x{self.multiplier:.1f}, timer={self.timer_ms:.0f}ms, max={self.max_combo})"


class Upgrades(BaseModel):
    """Upgrade levels bought with upgrade points. All tracks start at 1."""
    damage: int = Field(1, ge=1, le=MAX_UPGRADE_LEVEL)
    fire_rate: int = Field(1, ge=1, le=MAX_UPGRADE_LEVEL)
    speed: int = Field(1, ge=1, le=MAX_UPGRADE_LEVEL)
    luck: int = Field(1, ge=1, le=MAX_UPGRADE_LEVEL)

    model_config = ConfigDict(validate_assignment=True)

    def level_of(self, kind: UpgradeKind) -> int:
        """Current level of an upgrade track."""
        return getattr(self, kind.value)


class TimeAttackObjectives(BaseModel):
    """Thresholds a time-attack run is scored against."""
    score: int = Field(5000, ge=0)
    combo: int = Field(10, ge=0)
    meteors_destroyed: int = Field(5, ge=0)

    model_config = ConfigDict(frozen=True)


class SessionState(BaseModel):
    """Mutable per-session counters, validated on every assignment.

    Owned exclusively by the game mode. Entity collections live beside it
    on the game mode rather than in the model.

    Attributes:
        score: Points scored this session
        lives: Remaining lives (stored clamped at 0)
        level: Current wave number, starting at 1
        combo: Current combo state
        upgrades: Upgrade levels
        upgrade_points: Unspent upgrade points
        mode: Normal or time attack
        meteors_destroyed: Meteors destroyed this session
        invader_speed: Horizontal wave speed in pixels per frame
        time_attack_frames: Frames elapsed in the time-attack countdown
        objectives_completed: Whether the one-time objectives bonus was paid
        boss_defeated: Whether this level's boss has been destroyed
        internal_state: start, playing, paused or gameOver
    """
    score: int = Field(0, ge=0)
    lives: int = Field(3, ge=0)
    level: int = Field(1, ge=1)
    combo: ComboData = Field(default_factory=ComboData)
    upgrades: Upgrades = Field(default_factory=Upgrades)
    upgrade_points: int = Field(0, ge=0)
    mode: GameMode = GameMode.NORMAL
    meteors_destroyed: int = Field(0, ge=0)
    invader_speed: float = Field(1.0, gt=0)
    time_attack_frames: int = Field(0, ge=0)
    objectives_completed: bool = False
    boss_defeated: bool = False
    internal_state: InvadersInternalState = InvadersInternalState.START

    model_config = ConfigDict(validate_assignment=True)

    def add_score(self, points: int) -> int:
        """Add points and return the new score."""
        self.score += points
        return self.score

    def lose_life(self) -> int:
        """Remove one life (never below zero) and return lives left."""
        self.lives = max(0, self.lives - 1)
        return self.lives

    def spend_upgrade(self, kind: UpgradeKind) -> bool:
        """Spend one upgrade point on a track.

        Returns:
            False if no points are left or the track is maxed out
        """
        if self.upgrade_points <= 0:
            return False
        current = self.upgrades.level_of(kind)
        if current >= MAX_UPGRADE_LEVEL:
            return False
        setattr(self.upgrades, kind.value, current + 1)
        self.upgrade_points -= 1
        return True

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"SessionState({self.internal_state.value}, mode={self.mode.value}, "
                f"score={self.score}, lives={self.lives}, level={self.level}, {self.combo})")
