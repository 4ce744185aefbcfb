"""Renderable descriptors handed to the render sink.

The simulation never draws. Each entity describes itself with a frozen
Renderable; the game mode adds a HudDescriptor for overlays. Skins decide
how to present them.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from models import Color, GameMode, InvadersInternalState


@dataclass(frozen=True)
class Renderable:
    """What a skin needs to draw one entity.

    Attributes:
        kind: Entity kind ('player', 'invader', 'bullet', 'particle',
            'power_up', 'meteor', 'boss')
        x: Left edge
        y: Top edge
        width: Bounding box width
        height: Bounding box height
        color: Base color
        rotation: Rotation in radians around the box centre
        alpha: Opacity in [0, 1]
        frame: Animation frame index
        variant: Sub-type (invader type, power-up type, bullet owner)
        health_ratio: Remaining health in [0, 1] for damageable entities
        shielded: Player shield is up
    """
    kind: str
    x: float
    y: float
    width: float
    height: float
    color: Color
    rotation: float = 0.0
    alpha: float = 1.0
    frame: int = 0
    variant: str = ""
    health_ratio: Optional[float] = None
    shielded: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        """Centre of the bounding box."""
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class ObjectiveStatus:
    """One line of the time-attack objectives checklist."""
    label: str
    current: int
    target: int

    @property
    def done(self) -> bool:
        return self.current >= self.target


@dataclass(frozen=True)
class HudDescriptor:
    """Overlay state for the current frame."""
    state: InvadersInternalState
    mode: GameMode
    score: int
    lives: int
    level: int
    combo: int = 0
    multiplier: float = 1.0
    combo_progress: float = 0.0
    upgrade_points: int = 0
    time_left: Optional[int] = None
    objectives: Tuple[ObjectiveStatus, ...] = field(default_factory=tuple)
    objectives_completed: bool = False

    @property
    def show_combo(self) -> bool:
        """Combo banner is shown from a streak of 2 upward."""
        return self.combo > 1
