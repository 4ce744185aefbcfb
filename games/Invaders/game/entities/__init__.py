"""Game entities for Invaders."""

from .bullet import Bullet
from .player import Player
from .invader import Invader
from .particle import Particle, explosion
from .power_up import PowerUp
from .meteor import Meteor
from .boss import Boss, shoot_interval_for

__all__ = [
    'Bullet',
    'Player',
    'Invader',
    'Particle',
    'explosion',
    'PowerUp',
    'Meteor',
    'Boss',
    'shoot_interval_for',
]
