"""
Tests for combo tracking and point arithmetic.

Tests both the ComboData model and the ComboTracker, including the
multiplier curve, decay, punitive reset and immutability.
"""

import pytest
from pydantic import ValidationError

from models import ComboData
from games.Invaders.game.scoring import ComboTracker, award


# ============================================================================
# ComboData Model Tests
# ============================================================================


class TestComboData:
    """Test ComboData validation and the multiplier curve."""

    def test_defaults(self):
        combo = ComboData()
        assert combo.combo == 0
        assert combo.timer_ms == 0.0
        assert combo.multiplier == 1.0

    @pytest.mark.parametrize("streak,multiplier", [
        (0, 1.0), (1, 1.1), (5, 1.5), (19, 2.9), (20, 3.0), (25, 3.0), (1000, 3.0),
    ])
    def test_multiplier_curve(self, streak, multiplier):
        assert ComboData(combo=streak).multiplier == pytest.approx(multiplier)

    def test_multiplier_always_in_range(self):
        for streak in range(0, 60):
            assert 1.0 <= ComboData(combo=streak).multiplier <= 3.0

    def test_negative_combo_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ComboData(combo=-1)
        assert 'non-negative' in str(exc_info.value).lower()

    def test_timer_clamped(self):
        assert ComboData(timer_ms=-50.0).timer_ms == 0.0

    def test_frozen(self):
        combo = ComboData()
        with pytest.raises(ValidationError):
            combo.combo = 3


# ============================================================================
# ComboTracker Tests
# ============================================================================


class TestComboTracker:
    """Test ComboTracker state transitions."""

    def test_add_hit(self):
        tracker = ComboTracker().add_hit()
        assert tracker.combo.combo == 1
        assert tracker.combo.timer_ms == 3000.0
        assert tracker.combo.max_combo == 1

    def test_immutable(self):
        tracker = ComboTracker()
        tracker.add_hit()
        assert tracker.combo.combo == 0

    def test_tick_counts_down(self):
        tracker = ComboTracker().add_hit().tick(1000.0)
        assert tracker.combo.combo == 1
        assert tracker.combo.timer_ms == 2000.0
        assert tracker.progress == pytest.approx(2 / 3)

    def test_decays_when_window_runs_out(self):
        tracker = ComboTracker().add_hit().add_hit().tick(3000.0)
        assert tracker.combo.combo == 0
        assert tracker.multiplier == 1.0
        assert tracker.combo.max_combo == 2

    def test_decays_after_180_frames(self):
        """About three seconds of 60 Hz frames ends the streak."""
        tracker = ComboTracker().add_hit()
        for _ in range(179):
            tracker = tracker.tick(1000.0 / 60)
        assert tracker.combo.combo == 1
        tracker = tracker.tick(1000.0 / 60).tick(1000.0 / 60)
        assert tracker.combo.combo == 0

    def test_tick_with_empty_window_is_noop(self):
        tracker = ComboTracker()
        assert tracker.tick(500.0) is tracker

    def test_reset_keeps_best(self):
        tracker = ComboTracker().add_hit().add_hit().add_hit().reset()
        assert tracker.combo.combo == 0
        assert tracker.combo.timer_ms == 0.0
        assert tracker.combo.max_combo == 3


class TestAward:
    """Test floored point arithmetic."""

    def test_five_normal_kills(self):
        """Consecutive 20-point kills score 20, 22, 24, 26, 28."""
        tracker = ComboTracker()
        deltas = []
        for _ in range(5):
            deltas.append(award(20, tracker.combo))
            tracker = tracker.add_hit()
        assert deltas == [20, 22, 24, 26, 28]

    def test_damage_scales_points(self):
        assert award(30, ComboData(combo=2), damage=3) == 108

    def test_floor(self):
        """floor(50 * 1.3) == 65, floor(10 * 1.7) == 17, floor(30 * 1.1) == 33."""
        assert award(50, ComboData(combo=3)) == 65
        assert award(10, ComboData(combo=7)) == 17
        assert award(30, ComboData(combo=1)) == 33

    def test_capped_multiplier(self):
        assert award(1000, ComboData(combo=40)) == 3000
