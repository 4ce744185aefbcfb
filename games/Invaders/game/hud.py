"""Status panel: score, lives, level and mode drawn along the top edge."""

from typing import Optional

import pygame

from models import InvadersInternalState

from ..config import Colors, Fonts
from .sinks import UISink
from starfall.logging import get_logger

log = get_logger('invaders.hud')


class HudPanel(UISink):
    """UISink that keeps the latest readouts and draws them on request.

    The game pushes values as they change; render() paints whatever was
    last received.
    """

    def __init__(self):
        self.score = 0
        self.lives = 0
        self.level = 1
        self.mode_label = ''
        self.state: Optional[InvadersInternalState] = None
        self.final_score: Optional[int] = None
        self._font: Optional[pygame.font.Font] = None

    def update_stats(self, score: int, lives: int, level: int) -> None:
        self.score = score
        self.lives = lives
        self.level = level

    def set_mode_label(self, label: str) -> None:
        self.mode_label = label

    def show_state(self, state: InvadersInternalState) -> None:
        self.state = state
        if state != InvadersInternalState.GAME_OVER:
            self.final_score = None

    def show_game_over(self, final_score: int) -> None:
        self.final_score = final_score
        log.info(f"GAME OVER! Final Score: {final_score}")

    def _ensure_font(self) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, Fonts.MEDIUM)

    def render(self, screen: pygame.Surface) -> None:
        """Right-aligned readouts in the top corner."""
        self._ensure_font()
        lines = [
            f"Score: {self.score}",
            f"Lives: {self.lives}",
            f"Level: {self.level}",
            f"Mode: {self.mode_label}",
        ]
        right = screen.get_width() - 10
        y = 10
        for line in lines:
            surface = self._font.render(line, True, Colors.HUD_TEXT.as_rgb_tuple)
            rect = surface.get_rect()
            rect.topright = (right, y)
            screen.blit(surface, rect)
            y += Fonts.MEDIUM
