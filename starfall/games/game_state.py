"""Host-facing game state.

Games keep whatever internal states they like and map them onto these
through BaseGame.state.
"""
from enum import Enum


class GameState(Enum):
    """Coarse state a host reacts to.

    PLAYING also covers title screens shown by the game itself.
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"
