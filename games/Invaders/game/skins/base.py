"""Base class for Invaders skins.

Skins handle ALL drawing. The game hands them frozen descriptors through
the RenderSink interface and never touches pygame itself.
"""

from abc import abstractmethod
import math
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from ...config import Colors, Fonts
from ..descriptors import Renderable
from ..sinks import RenderSink

STAR_COUNT = 100


class InvadersSkin(RenderSink):
    """RenderSink drawing onto a pygame surface.

    Subclasses implement one render_* method per entity kind; draw()
    dispatches on Renderable.kind.
    """

    NAME: str = "base"
    DESCRIPTION: str = "Base skin"

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.frame_count = 0
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._renderers: Dict[str, Callable[[Renderable], None]] = {
            'player': self.render_player,
            'invader': self.render_invader,
            'bullet': self.render_bullet,
            'particle': self.render_particle,
            'power_up': self.render_power_up,
            'meteor': self.render_meteor,
            'boss': self.render_boss,
        }

    def font(self, size: int) -> pygame.font.Font:
        """Default font at a size, created on first use."""
        if size not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def text(
        self,
        message: str,
        pos: Tuple[float, float],
        size: int = Fonts.MEDIUM,
        color=Colors.HUD_TEXT,
        center: bool = False,
    ) -> None:
        """Blit one line of text. pos is the top-left, or the centre if center=True."""
        surface = self.font(size).render(message, True, color.as_rgb_tuple)
        rect = surface.get_rect()
        if center:
            rect.center = (int(pos[0]), int(pos[1]))
        else:
            rect.topleft = (int(pos[0]), int(pos[1]))
        self.screen.blit(surface, rect)

    # =========================================================================
    # RenderSink
    # =========================================================================

    def begin_frame(self) -> None:
        self.frame_count += 1
        self.screen.fill(Colors.BACKGROUND.as_rgb_tuple)
        self.render_background()

    def draw(self, renderable: Renderable) -> None:
        renderer = self._renderers.get(renderable.kind)
        if renderer is not None:
            renderer(renderable)

    def end_frame(self) -> None:
        pass

    def render_background(self) -> None:
        """Twinkling starfield in a fixed pattern."""
        width, height = self.screen.get_size()
        t = self.frame_count / 60.0
        for i in range(STAR_COUNT):
            size = max(1, int(round(math.sin(t + i) * 0.5 + 1)))
            x = (i * 37) % width
            y = (i * 73) % height
            pygame.draw.rect(self.screen, Colors.STAR.as_rgb_tuple, (x, y, size, size))

    # =========================================================================
    # Per-kind rendering
    # =========================================================================

    @abstractmethod
    def render_player(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_invader(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_bullet(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_particle(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_power_up(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_meteor(self, r: Renderable) -> None:
        pass

    @abstractmethod
    def render_boss(self, r: Renderable) -> None:
        pass


def rotated_box(r: Renderable, scale: float = 1.0) -> List[Tuple[float, float]]:
    """Corners of a renderable's box rotated about its centre."""
    cx, cy = r.center
    hw = r.width * scale / 2
    hh = r.height * scale / 2
    cos_a = math.cos(r.rotation)
    sin_a = math.sin(r.rotation)
    corners = [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
    return [(cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a) for dx, dy in corners]


def faded(color, alpha: float, background: Optional[Tuple[int, int, int]] = None) -> Tuple[int, int, int]:
    """Blend a Color toward the background by 1 - alpha."""
    bg = background or Colors.BACKGROUND.as_rgb_tuple
    alpha = max(0.0, min(1.0, alpha))
    return tuple(int(c * alpha + b * (1 - alpha)) for c, b in zip(color.as_rgb_tuple, bg))
