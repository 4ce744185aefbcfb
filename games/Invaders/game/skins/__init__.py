"""Invaders skins for rendering."""

from .base import InvadersSkin
from .geometric import GeometricSkin

__all__ = [
    'InvadersSkin',
    'GeometricSkin',
]
