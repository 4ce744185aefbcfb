"""Geometric skin - flat shapes in the classic arcade palette."""

from typing import Tuple

import pygame

from models import GameMode, InvadersInternalState

from ...config import Colors, Fonts
from ..descriptors import HudDescriptor, Renderable
from .base import InvadersSkin, faded, rotated_box

COMBO_BAR_WIDTH = 200
COMBO_BAR_HEIGHT = 8
LOW_TIME_SECONDS = 30


def _rect(r: Renderable) -> Tuple[int, int, int, int]:
    return (int(r.x), int(r.y), int(r.width), int(r.height))


class GeometricSkin(InvadersSkin):
    """Renders the game with rectangles and polygons.

    - Player: green block with white nose and thrusters, cyan ring when shielded
    - Invaders: two-frame blocks with black eyes, coloured by type
    - Meteors and power-ups: rotating squares
    - Boss: purple hull with a health bar
    """

    NAME = "geometric"
    DESCRIPTION = "Flat shapes in the classic arcade palette"

    def render_player(self, r: Renderable) -> None:
        if r.shielded:
            cx, cy = r.center
            pygame.draw.circle(self.screen, Colors.SHIELD.as_rgb_tuple, (int(cx), int(cy)), 25, 2)

        pygame.draw.rect(self.screen, r.color.as_rgb_tuple, _rect(r))
        detail = Colors.PLAYER_DETAIL.as_rgb_tuple
        x, y = int(r.x), int(r.y)
        pygame.draw.rect(self.screen, detail, (x + 18, y - 5, 4, 10))
        pygame.draw.rect(self.screen, detail, (x + 5, y + 25, 10, 5))
        pygame.draw.rect(self.screen, detail, (x + 25, y + 25, 10, 5))

    def render_invader(self, r: Renderable) -> None:
        x, y = int(r.x), int(r.y)
        eyes = Colors.BACKGROUND.as_rgb_tuple
        if r.frame == 0:
            pygame.draw.rect(self.screen, r.color.as_rgb_tuple, _rect(r))
            pygame.draw.rect(self.screen, eyes, (x + 10, y + 8, 8, 8))
            pygame.draw.rect(self.screen, eyes, (x + 22, y + 8, 8, 8))
        else:
            pygame.draw.rect(self.screen, r.color.as_rgb_tuple, (x + 2, y, int(r.width) - 4, int(r.height)))
            pygame.draw.rect(self.screen, eyes, (x + 12, y + 8, 8, 8))
            pygame.draw.rect(self.screen, eyes, (x + 20, y + 8, 8, 8))

    def render_bullet(self, r: Renderable) -> None:
        pygame.draw.rect(self.screen, r.color.as_rgb_tuple, _rect(r))

    def render_particle(self, r: Renderable) -> None:
        pygame.draw.rect(self.screen, faded(r.color, r.alpha), _rect(r))

    def render_power_up(self, r: Renderable) -> None:
        pygame.draw.polygon(self.screen, r.color.as_rgb_tuple, rotated_box(r))
        label = r.variant[:1].upper()
        self.text(label, r.center, Fonts.MEDIUM, Colors.BACKGROUND, center=True)

    def render_meteor(self, r: Renderable) -> None:
        pygame.draw.polygon(self.screen, r.color.as_rgb_tuple, rotated_box(r))
        pygame.draw.polygon(self.screen, faded(r.color, 0.5), rotated_box(r, 0.5))

    def render_boss(self, r: Renderable) -> None:
        x, y = int(r.x), int(r.y)
        pygame.draw.rect(self.screen, r.color.as_rgb_tuple, _rect(r))
        detail = Colors.BOSS_DETAIL.as_rgb_tuple
        pygame.draw.rect(self.screen, detail, (x + 20, y + 20, 20, 20))
        pygame.draw.rect(self.screen, detail, (x + 80, y + 20, 20, 20))
        pygame.draw.rect(self.screen, detail, (x + 50, y + 50, 20, 20))

        if r.health_ratio is not None:
            pygame.draw.rect(self.screen, Colors.HUD_BAD.as_rgb_tuple, (x, y - 10, int(r.width), 5))
            pygame.draw.rect(self.screen, Colors.HUD_GOOD.as_rgb_tuple,
                             (x, y - 10, int(r.width * r.health_ratio), 5))

    # =========================================================================
    # HUD
    # =========================================================================

    def draw_hud(self, hud: HudDescriptor) -> None:
        if hud.state == InvadersInternalState.START:
            self._render_start(hud)
            return

        if hud.show_combo:
            self._render_combo(hud)
        if hud.mode == GameMode.TIME_ATTACK and hud.time_left is not None:
            self._render_time_attack(hud)
        if hud.upgrade_points > 0:
            width = self.screen.get_width()
            self.text(f"Upgrades: {hud.upgrade_points}  [1] DMG [2] ROF [3] SPD [4] LCK",
                      (width / 2, self.screen.get_height() - 15), Fonts.SMALL, Colors.HUD_COMBO, center=True)

        if hud.state == InvadersInternalState.PAUSED:
            self._render_banner("PAUSED", "Press P to resume")
        elif hud.state == InvadersInternalState.GAME_OVER:
            self._render_banner("GAME OVER", f"Final score: {hud.score}   Press R to restart")

    def _render_start(self, hud: HudDescriptor) -> None:
        width, height = self.screen.get_size()
        self.text("STARFALL INVADERS", (width / 2, height / 2 - 60), Fonts.HUGE, Colors.PLAYER, center=True)
        self.text("Press ENTER to start", (width / 2, height / 2), Fonts.LARGE, center=True)
        self.text(f"Mode: {hud.mode.label}   (T to switch)", (width / 2, height / 2 + 35),
                  Fonts.MEDIUM, Colors.HUD_COMBO, center=True)
        self.text("Arrows/A-D move   SPACE shoot   P pause", (width / 2, height / 2 + 65),
                  Fonts.SMALL, center=True)

    def _render_combo(self, hud: HudDescriptor) -> None:
        cx = self.screen.get_width() / 2
        self.text(f"COMBO x{hud.combo}", (cx, 50), Fonts.LARGE, Colors.HUD_COMBO, center=True)
        self.text(f"{hud.multiplier:.1f}x MULTIPLIER", (cx, 72), Fonts.MEDIUM, Colors.HUD_COMBO, center=True)

        bar_x = int(cx - COMBO_BAR_WIDTH / 2)
        bar_y = 85
        pygame.draw.rect(self.screen, Colors.HUD_BAR_BACK.as_rgb_tuple,
                         (bar_x, bar_y, COMBO_BAR_WIDTH, COMBO_BAR_HEIGHT))
        fill = Colors.HUD_GOOD if hud.combo_progress > 0.3 else Colors.HUD_BAD
        pygame.draw.rect(self.screen, fill.as_rgb_tuple,
                         (bar_x, bar_y, int(COMBO_BAR_WIDTH * hud.combo_progress), COMBO_BAR_HEIGHT))

    def _render_time_attack(self, hud: HudDescriptor) -> None:
        minutes, seconds = divmod(hud.time_left, 60)
        color = Colors.HUD_BAD if hud.time_left < LOW_TIME_SECONDS else Colors.HUD_TEXT
        self.text(f"Time: {minutes}:{seconds:02d}", (20, 15), Fonts.LARGE, color)
        self.text("Objectives:", (20, 45), Fonts.SMALL, Colors.HUD_WARN)

        y = 62
        for objective in hud.objectives:
            color = Colors.HUD_GOOD if objective.done else Colors.HUD_TEXT
            self.text(f"{objective.label}: {objective.current}/{objective.target}", (20, y), Fonts.SMALL, color)
            y += 18

        if hud.objectives_completed:
            self.text("ALL OBJECTIVES COMPLETED!", (20, y + 4), Fonts.MEDIUM, Colors.HUD_GOOD)

    def _render_banner(self, title: str, subtitle: str) -> None:
        width, height = self.screen.get_size()
        self.text(title, (width / 2, height / 2 - 20), Fonts.HUGE, Colors.HUD_TEXT, center=True)
        self.text(subtitle, (width / 2, height / 2 + 25), Fonts.MEDIUM, Colors.HUD_TEXT, center=True)
