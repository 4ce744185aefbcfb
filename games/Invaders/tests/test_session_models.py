"""
Tests for the shared models used by Invaders.

Covers Color parsing, the Invaders enums and SessionState validation.
"""

import pytest
from pydantic import ValidationError

from models import (
    Color, GameMode, InvadersInternalState, SessionState, TimeAttackObjectives,
    UpgradeKind, Upgrades,
)
from models.invaders.models import MAX_UPGRADE_LEVEL
from starfall.games import GameState


class TestColor:
    """Test Color validation and hex parsing."""

    def test_from_hex(self):
        assert Color.from_hex('#ff6600').as_rgb_tuple == (255, 102, 0)

    def test_from_hex_with_alpha(self):
        assert Color.from_hex('#00ff0080').as_tuple == (0, 255, 0, 128)

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex('#fff')

    def test_component_range(self):
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)


class TestEnums:
    """Test enum helpers."""

    def test_mode_toggle(self):
        assert GameMode.NORMAL.toggled() == GameMode.TIME_ATTACK
        assert GameMode.TIME_ATTACK.toggled() == GameMode.NORMAL

    def test_mode_labels(self):
        assert GameMode.NORMAL.label == 'Normal'
        assert GameMode.TIME_ATTACK.label == 'Time Attack'

    def test_upgrade_slots(self):
        assert [UpgradeKind.from_slot(i) for i in range(1, 5)] == [
            UpgradeKind.DAMAGE, UpgradeKind.FIRE_RATE, UpgradeKind.SPEED, UpgradeKind.LUCK,
        ]

    @pytest.mark.parametrize("slot", [0, 5])
    def test_bad_upgrade_slot(self, slot):
        with pytest.raises(ValueError):
            UpgradeKind.from_slot(slot)

    @pytest.mark.parametrize("internal,common", [
        (InvadersInternalState.START, GameState.PLAYING),
        (InvadersInternalState.PLAYING, GameState.PLAYING),
        (InvadersInternalState.PAUSED, GameState.PAUSED),
        (InvadersInternalState.GAME_OVER, GameState.GAME_OVER),
    ])
    def test_state_mapping(self, internal, common):
        assert internal.to_game_state() == common


class TestSessionState:
    """Test session counters and their invariants."""

    def test_defaults(self):
        session = SessionState()
        assert session.score == 0
        assert session.lives == 3
        assert session.level == 1
        assert session.invader_speed == 1.0
        assert session.upgrades == Upgrades()
        assert session.internal_state == InvadersInternalState.START

    def test_add_score(self):
        session = SessionState()
        assert session.add_score(150) == 150
        assert session.score == 150

    def test_lose_life_clamps_at_zero(self):
        session = SessionState(lives=1)
        assert session.lose_life() == 0
        assert session.lose_life() == 0

    def test_negative_score_rejected_on_assignment(self):
        session = SessionState()
        with pytest.raises(ValidationError):
            session.score = -1

    def test_level_starts_at_one(self):
        with pytest.raises(ValidationError):
            SessionState(level=0)

    def test_spend_upgrade(self):
        session = SessionState(upgrade_points=2)
        assert session.spend_upgrade(UpgradeKind.LUCK)
        assert session.upgrades.luck == 2
        assert session.upgrade_points == 1

    def test_spend_without_points(self):
        session = SessionState()
        assert not session.spend_upgrade(UpgradeKind.DAMAGE)
        assert session.upgrades.damage == 1

    def test_maxed_track_keeps_points(self):
        session = SessionState(upgrade_points=1, upgrades=Upgrades(speed=MAX_UPGRADE_LEVEL))
        assert not session.spend_upgrade(UpgradeKind.SPEED)
        assert session.upgrade_points == 1

    def test_upgrade_level_bounds(self):
        with pytest.raises(ValidationError):
            Upgrades(damage=MAX_UPGRADE_LEVEL + 1)


class TestTimeAttackObjectives:
    def test_defaults(self):
        objectives = TimeAttackObjectives()
        assert (objectives.score, objectives.combo, objectives.meteors_destroyed) == (5000, 10, 5)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            TimeAttackObjectives().score = 1
