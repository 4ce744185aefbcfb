"""Configuration for the Invaders game.

Contains screen dimensions, entity constants, spawn timings, scoring rules,
color definitions and the YAML-loadable settings model.

Durations are given in seconds and converted to simulation frames with
seconds_to_frames(); the simulation runs at a fixed FPS.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models import Color, GameMode, InvaderType, PowerUpType, TimeAttackObjectives

# Screen dimensions (default, can be overridden)
SCREEN_WIDTH: int = 800
SCREEN_HEIGHT: int = 600

# Fixed simulation timestep
FPS: int = 60
FRAME_MS: float = 1000.0 / FPS
MAX_FRAME_TIME: float = 0.25  # seconds of wall-clock time simulated per update()


def seconds_to_frames(seconds: float) -> int:
    """Convert a duration to whole simulation frames."""
    return int(round(seconds * FPS))


# Player
PLAYER_WIDTH: float = 40.0
PLAYER_HEIGHT: float = 30.0
PLAYER_SPEED: float = 5.0           # pixels/frame
PLAYER_BOTTOM_OFFSET: float = 50.0  # player y = screen height - offset
PLAYER_SHOOT_COOLDOWN: int = 15     # frames
PLAYER_BULLET_SPEED: float = -5.0
SPEED_BOOST_FACTOR: float = 1.5
MULTI_SHOT_SPREAD: float = 5.0      # px between the three multi-shot bullets

# Power-ups
POWER_UP_DURATIONS: Dict[PowerUpType, float] = {   # seconds
    PowerUpType.MULTI_SHOT: 10.0,
    PowerUpType.SHIELD: 5.0,
    PowerUpType.SPEED_BOOST: 10.0,
}
POWER_UP_SIZE: float = 30.0
POWER_UP_FALL_SPEED: float = 2.0
POWER_UP_SPIN: float = 0.1          # radians/frame
POWER_UP_PICKUP_POINTS: int = 50

# Bullets
BULLET_WIDTH: float = 4.0
BULLET_HEIGHT: float = 10.0
INVADER_BULLET_SPEED: float = 3.0

# Invader wave
INVADER_WIDTH: float = 40.0
INVADER_HEIGHT: float = 30.0
WAVE_ROWS: int = 5
WAVE_COLS: int = 10
WAVE_SPACING: float = 60.0
WAVE_START_Y: float = 80.0
WAVE_DROP: float = 20.0
INVADER_START_SPEED: float = 1.0
INVADER_SPEED_STEP: float = 0.5     # added per level
INVADER_POINTS: Dict[InvaderType, int] = {
    InvaderType.FAST: 30,
    InvaderType.NORMAL: 20,
    InvaderType.HEAVY: 10,
}
INVADER_ANIM_SPEED: Dict[InvaderType, int] = {  # frames per sprite frame
    InvaderType.FAST: 8,
    InvaderType.NORMAL: 6,
    InvaderType.HEAVY: 4,
}

# Particles
EXPLOSION_PARTICLES: int = 10
PARTICLE_LIFE: int = 60             # frames
PARTICLE_GRAVITY: float = 0.2
PARTICLE_MAX_SPEED: float = 5.0
PARTICLE_SIZE: float = 3.0

# Meteors
METEOR_SIZE: float = 40.0
METEOR_HEALTH: int = 3
METEOR_MIN_SPEED: float = 2.0
METEOR_MAX_SPEED: float = 5.0
METEOR_MIN_SPIN: float = 0.05
METEOR_MAX_SPIN: float = 0.15
METEOR_SPAWN_Y: float = -40.0
METEOR_POINTS: int = 100

# Boss
BOSS_WIDTH: float = 120.0
BOSS_HEIGHT: float = 80.0
BOSS_SPAWN_Y: float = 50.0
BOSS_BASE_HEALTH: int = 50
BOSS_HEALTH_PER_LEVEL: int = 20
BOSS_SPEED: float = 1.0
BOSS_PATTERN_FRAMES: int = 180      # pattern changes after this many frames
BOSS_BASE_SHOOT_INTERVAL: int = 60
BOSS_SHOOT_INTERVAL_STEP: int = 5   # frames faster per level
BOSS_MIN_SHOOT_INTERVAL: int = 10
BOSS_SPREAD_LEVEL: int = 6
BOSS_BULLET_SPEED: float = 4.0
BOSS_SPREAD_BULLET_SPEED: float = 3.0
BOSS_LEVEL_INTERVAL: int = 3        # a boss guards every 3rd level
BOSS_HIT_POINTS: int = 50
BOSS_KILL_POINTS: int = 1000
BOSS_UPGRADE_POINTS: int = 3

# Spawner timings (milliseconds)
POWER_UP_SPAWN_BASE_MS: float = 15000.0
POWER_UP_SPAWN_LUCK_MS: float = 2000.0
POWER_UP_SPAWN_JITTER_MS: float = 10000.0
METEOR_SPAWN_BASE_MS: float = 8000.0
METEOR_SPAWN_JITTER_MS: float = 7000.0
BOSS_SPAWN_DELAY_MS: float = 2000.0
INVADER_SHOT_BASE_MS: float = 1000.0
INVADER_SHOT_JITTER_MS: float = 2000.0

# Combo and scoring
COMBO_WINDOW_MS: float = 3000.0
LEVEL_BONUS_PER_LEVEL: int = 100

# Session
STARTING_LIVES: int = 3
TIME_ATTACK_SECONDS: float = 120.0
TIME_ATTACK_COMPLETION_BONUS: int = 2000
TIME_ATTACK_OBJECTIVE_BONUS: int = 1000


# Organized Constants for Code Access
class Colors:
    """Color constants for easy access in code."""
    BACKGROUND = Color(r=0, g=0, b=0)
    STAR = Color(r=255, g=255, b=255)
    PLAYER = Color.from_hex('#00ff00')
    PLAYER_DETAIL = Color(r=255, g=255, b=255)
    SHIELD = Color.from_hex('#00ffff')
    PLAYER_BULLET = Color.from_hex('#00ff00')
    INVADER_BULLET = Color.from_hex('#ff0000')
    BOSS_BULLET = Color.from_hex('#ff0000')
    BOSS_SPREAD_BULLET = Color.from_hex('#ff4444')
    INVADERS = {
        InvaderType.FAST: Color.from_hex('#ff0000'),
        InvaderType.NORMAL: Color.from_hex('#ffff00'),
        InvaderType.HEAVY: Color.from_hex('#ff00ff'),
    }
    POWER_UPS = {
        PowerUpType.MULTI_SHOT: Color.from_hex('#ff6600'),
        PowerUpType.SHIELD: Color.from_hex('#00ffff'),
        PowerUpType.SPEED_BOOST: Color.from_hex('#ff00ff'),
    }
    BOSS = Color.from_hex('#800080')
    BOSS_DETAIL = Color.from_hex('#ff00ff')
    HUD_TEXT = Color(r=255, g=255, b=255)
    HUD_COMBO = Color.from_hex('#ffff00')
    HUD_GOOD = Color.from_hex('#00ff00')
    HUD_WARN = Color.from_hex('#ffff00')
    HUD_BAD = Color.from_hex('#ff0000')
    HUD_BAR_BACK = Color.from_hex('#333333')


class Fonts:
    """Font size constants for easy access in code."""
    SMALL = 14
    MEDIUM = 20
    LARGE = 24
    HUGE = 48


# Audio
AUDIO_ENABLED: bool = True
MASTER_VOLUME: float = 0.7
SFX_VOLUME: float = 0.8


# =============================================================================
# Settings (per-game tunables, loadable from YAML)
# =============================================================================

class SettingsError(Exception):
    """Raised when a settings file cannot be read or fails validation."""
    pass


class InvadersSettings(BaseModel):
    """Per-game tunables with validated ranges.

    Everything not listed here is a fixed rule of the game and lives in
    the module constants above.
    """
    width: int = Field(SCREEN_WIDTH, gt=0)
    height: int = Field(SCREEN_HEIGHT, gt=0)
    lives: int = Field(STARTING_LIVES, ge=1)
    mode: GameMode = GameMode.NORMAL
    time_attack_seconds: float = Field(TIME_ATTACK_SECONDS, gt=0)
    objectives: TimeAttackObjectives = Field(default_factory=TimeAttackObjectives)
    audio: bool = AUDIO_ENABLED
    seed: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra='forbid')

    @property
    def time_attack_frames(self) -> int:
        """Length of a time-attack run in frames."""
        return seconds_to_frames(self.time_attack_seconds)


def _load_data_file(path: Path) -> Dict[str, Any]:
    """Read a YAML mapping, raising SettingsError on any failure."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_settings(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> InvadersSettings:
    """Build settings from an optional YAML file plus keyword overrides.

    Overrides whose value is None are ignored so argparse defaults can be
    passed straight through.

    Args:
        path: YAML file with any InvadersSettings fields
        **overrides: Field values taking precedence over the file

    Returns:
        Validated InvadersSettings

    Raises:
        SettingsError: If the file is unreadable or a value is invalid
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_load_data_file(Path(path)))
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return InvadersSettings(**data)
    except ValidationError as e:
        source = f" in {path}" if path is not None else ""
        raise SettingsError(f"Invalid settings{source}: {e}") from e
