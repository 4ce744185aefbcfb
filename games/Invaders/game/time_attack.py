"""Time-attack countdown and objectives."""

from typing import Tuple

from models import SessionState, TimeAttackObjectives

from ..config import (
    FPS, TIME_ATTACK_SECONDS, TIME_ATTACK_COMPLETION_BONUS, TIME_ATTACK_OBJECTIVE_BONUS,
    seconds_to_frames,
)
from .descriptors import ObjectiveStatus
from starfall.logging import get_logger

log = get_logger('invaders.time_attack')


class TimeAttack:
    """Runs the countdown for a time-attack session.

    Two bonuses are paid: a completion bonus the first time every
    objective is met, and at expiry a bonus per objective met. The
    completion check runs before the expiry bonus on the final frame.

    Args:
        objectives: Thresholds the run is scored against
        duration_seconds: Length of the run
    """

    def __init__(
        self,
        objectives: TimeAttackObjectives = TimeAttackObjectives(),
        duration_seconds: float = TIME_ATTACK_SECONDS,
    ):
        self.objectives = objectives
        self.duration_seconds = duration_seconds
        self.duration_frames = seconds_to_frames(duration_seconds)

    def statuses(self, session: SessionState) -> Tuple[ObjectiveStatus, ...]:
        """Progress on each objective, for the HUD checklist."""
        return (
            ObjectiveStatus('Score', session.score, self.objectives.score),
            ObjectiveStatus('Max Combo', session.combo.max_combo, self.objectives.combo),
            ObjectiveStatus('Meteors', session.meteors_destroyed, self.objectives.meteors_destroyed),
        )

    def completed_count(self, session: SessionState) -> int:
        return sum(1 for status in self.statuses(session) if status.done)

    def all_met(self, session: SessionState) -> bool:
        return self.completed_count(session) == len(self.statuses(session))

    def time_left(self, session: SessionState) -> int:
        """Whole seconds remaining on the countdown."""
        return max(0, int(self.duration_seconds) - session.time_attack_frames // FPS)

    def expired(self, session: SessionState) -> bool:
        return session.time_attack_frames >= self.duration_frames

    def check_completion(self, session: SessionState) -> int:
        """Pay the completion bonus once, the first time all objectives hold.

        Returns:
            Points awarded (0 if already paid or not yet earned)
        """
        if session.objectives_completed or not self.all_met(session):
            return 0
        session.objectives_completed = True
        session.add_score(TIME_ATTACK_COMPLETION_BONUS)
        log.info(f"All time-attack objectives met: +{TIME_ATTACK_COMPLETION_BONUS}")
        return TIME_ATTACK_COMPLETION_BONUS

    def tick(self, session: SessionState) -> bool:
        """Advance the countdown one frame.

        Returns:
            True if time ran out this frame (the expiry bonus has been paid)
        """
        session.time_attack_frames += 1
        self.check_completion(session)

        if not self.expired(session):
            return False

        completed = self.completed_count(session)
        bonus = completed * TIME_ATTACK_OBJECTIVE_BONUS
        session.add_score(bonus)
        log.info(f"Time up: {completed} objective(s) met, +{bonus}")
        return True
