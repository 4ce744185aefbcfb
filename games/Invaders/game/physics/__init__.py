"""Invaders collision detection."""

from .collision import (
    overlaps,
    resolve_bullet_hits,
    resolve_touches,
)

__all__ = [
    'overlaps',
    'resolve_bullet_hits',
    'resolve_touches',
]
