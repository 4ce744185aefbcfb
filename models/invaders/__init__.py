"""
Invaders-specific models package.

This package contains the enums and session models of the Invaders game.
"""

from .enums import (
    InvaderType,
    PowerUpType,
    BulletOwner,
    GameMode,
    UpgradeKind,
    SoundEvent,
    InvadersInternalState,
)

from .models import (
    MAX_UPGRADE_LEVEL,
    ComboData,
    Upgrades,
    TimeAttackObjectives,
    SessionState,
)

__all__ = [
    'InvaderType',
    'PowerUpType',
    'BulletOwner',
    'GameMode',
    'UpgradeKind',
    'SoundEvent',
    'InvadersInternalState',
    'MAX_UPGRADE_LEVEL',
    'ComboData',
    'Upgrades',
    'TimeAttackObjectives',
    'SessionState',
]
