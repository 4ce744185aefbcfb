"""
Starfall Game Framework.

Provides:
- base_game: BaseGame class that all games should inherit from
- game_state: Standard GameState enum for runner compatibility
- input: Per-frame keyboard input sampling
"""

from starfall.games.game_state import GameState
from starfall.games.base_game import BaseGame

__all__ = [
    'GameState',
    'BaseGame',
]
