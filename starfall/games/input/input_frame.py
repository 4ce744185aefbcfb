"""
Input Frame - Snapshot of the controls for a single frame.

This is a shared module used by all games.
Uses a frozen dataclass so frames can be recorded and replayed in tests.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class InputFrame:
    """Immutable control state sampled once per frame.

    Held controls (left, right, shoot) report whether the key is down.
    Toggle controls (pause, toggle_mode, start, restart) are edge-triggered:
    they are True only on the frame the key was pressed.

    Attributes:
        left: Move left is held
        right: Move right is held
        shoot: Fire is held
        pause: Pause toggle was pressed this frame
        toggle_mode: Game-mode toggle was pressed this frame
        start: Start was pressed this frame
        restart: Restart was pressed this frame
        upgrade: Upgrade slot (1-4) pressed this frame, 0 if none
    """
    left: bool = False
    right: bool = False
    shoot: bool = False
    pause: bool = False
    toggle_mode: bool = False
    start: bool = False
    restart: bool = False
    upgrade: int = 0

    def __post_init__(self):
        """Validate the upgrade slot."""
        if not 0 <= self.upgrade <= 4:
            raise ValueError(f'Upgrade slot must be in range [0, 4], got {self.upgrade}')

    @property
    def is_idle(self) -> bool:
        """True when no control is active."""
        return self == InputFrame()
