"""
Combo tracking and point arithmetic for Invaders.

ComboTracker uses an immutable state pattern: every operation returns a
new tracker wrapping a new ComboData.

Points are computed in tenths so floored results are exact:
``base * multiplier_tenths * damage // 10``.

Examples:
    >>> tracker = ComboTracker().add_hit().add_hit()
    >>> tracker.combo.combo
    2
    >>> award(20, tracker.combo)
    24
"""

from typing import Optional

from models import ComboData

from ..config import COMBO_WINDOW_MS


def award(base_points: int, combo: ComboData, damage: int = 1) -> int:
    """Points for one scoring event under the current combo.

    Args:
        base_points: Points before multipliers
        combo: Combo state at the moment of the hit
        damage: Damage upgrade level, scales invader kills only

    Returns:
        floor(base_points * multiplier * damage)
    """
    return base_points * combo.multiplier_tenths * damage // 10


class ComboTracker:
    """Consecutive-hit counter with a decay window.

    Every hit extends the streak and refills the window to COMBO_WINDOW_MS.
    When the window runs out the streak drops to zero. A damaging hit on
    the player resets the streak immediately.

    Examples:
        >>> tracker = ComboTracker().add_hit()
        >>> tracker.tick(3000).combo.combo
        0
        >>> tracker.tick(1000).combo.combo
        1
    """

    def __init__(self, combo: Optional[ComboData] = None):
        self._combo = combo if combo is not None else ComboData()

    @property
    def combo(self) -> ComboData:
        return self._combo

    @property
    def multiplier(self) -> float:
        return self._combo.multiplier

    @property
    def progress(self) -> float:
        """Fraction of the decay window left, in [0, 1]."""
        return min(1.0, self._combo.timer_ms / COMBO_WINDOW_MS)

    def add_hit(self) -> 'ComboTracker':
        """Extend the streak and refill the window."""
        new_combo = self._combo.combo + 1
        return ComboTracker(ComboData(
            combo=new_combo,
            timer_ms=COMBO_WINDOW_MS,
            max_combo=max(new_combo, self._combo.max_combo),
        ))

    def tick(self, dt_ms: float) -> 'ComboTracker':
        """Run the decay window down by dt_ms.

        The streak ends on the tick that takes the window to zero or below.
        An already-empty window is left alone.
        """
        if self._combo.timer_ms <= 0:
            return self

        remaining = self._combo.timer_ms - dt_ms
        if remaining <= 0:
            return ComboTracker(ComboData(combo=0, timer_ms=0.0, max_combo=self._combo.max_combo))
        return ComboTracker(self._combo.model_copy(update={'timer_ms': remaining}))

    def reset(self) -> 'ComboTracker':
        """Drop the streak immediately. The best streak is kept."""
        return ComboTracker(ComboData(max_combo=self._combo.max_combo))

    def __repr__(self) -> str:
        return f"ComboTracker({self._combo!r})"

    def __str__(self) -> str:
        return str(self._combo)
