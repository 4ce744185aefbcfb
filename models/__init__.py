"""
Unified models library for Starfall games.

This package provides the Pydantic data models used across the project:
- Primitives: Basic value types (Color)
- Invaders: Enums and session models for the Invaders game

Usage:
    >>> from models import Color
    >>> from models.invaders import SessionState, ComboData
"""

from .primitives import Color

from .invaders import (
    InvaderType,
    PowerUpType,
    BulletOwner,
    GameMode,
    UpgradeKind,
    SoundEvent,
    InvadersInternalState,
    ComboData,
    Upgrades,
    TimeAttackObjectives,
    SessionState,
)

__all__ = [
    'Color',
    'InvaderType',
    'PowerUpType',
    'BulletOwner',
    'GameMode',
    'UpgradeKind',
    'SoundEvent',
    'InvadersInternalState',
    'ComboData',
    'Upgrades',
    'TimeAttackObjectives',
    'SessionState',
]
