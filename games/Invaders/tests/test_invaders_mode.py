"""
Scenario tests for InvadersMode: the per-frame simulation, collisions,
state machine, level progression and time attack.

All tests use recording sinks and a random source that never reaches a
spawn threshold in the few frames a test runs.
"""

from typing import Any, Dict, List

import pytest

from models import (
    BulletOwner, ComboData, GameMode, InvaderType, InvadersInternalState,
    PowerUpType, SoundEvent, UpgradeKind,
)
from starfall.games import GameState
from starfall.games.input import InputFrame
from starfall.logging import LogSink, register_sink, close_all_sinks
from games.Invaders.config import InvadersSettings
from games.Invaders.game.entities import Boss, Bullet, Invader, Meteor, PowerUp


def sentinel() -> Invader:
    """Invader parked in the top-left corner, out of every test's way."""
    return Invader(0.0, 0.0, InvaderType.HEAVY)


def bullet_into(target, owner=BulletOwner.PLAYER) -> Bullet:
    """Player bullet that still overlaps target after one frame of movement."""
    speed = -5.0 if owner == BulletOwner.PLAYER else 3.0
    return Bullet(target.x + 10, target.y + 12, speed, owner)


def enemy_bullet_at(player, owner=BulletOwner.INVADER) -> Bullet:
    return Bullet(player.x + 18, player.y + 2, 3.0, owner)


@pytest.fixture
def quiet_game(game):
    """Started game whose wave is a single parked invader."""
    game.wave.invaders = [sentinel()]
    return game


class RecordSink(LogSink):
    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


@pytest.fixture
def session_sink():
    sink = RecordSink()
    register_sink('session', sink)
    yield sink
    close_all_sinks()


# ============================================================================
# State machine
# ============================================================================


class TestStateMachine:
    """Test start, pause, mode toggle and restart."""

    def test_begins_on_start_screen(self, make_game, sinks):
        game = make_game(start=False)
        assert game.internal_state == InvadersInternalState.START
        assert game.state == GameState.PLAYING
        assert sinks['ui'].states == [InvadersInternalState.START]
        assert sinks['ui'].mode_label == 'Normal'

    def test_start_via_input(self, make_game, sinks):
        game = make_game(start=False)
        game.handle_input(InputFrame(start=True))
        assert game.internal_state == InvadersInternalState.PLAYING
        assert sinks['ui'].states[-1] == InvadersInternalState.PLAYING

    def test_no_simulation_before_start(self, make_game):
        game = make_game(start=False)
        before = [(inv.x, inv.y) for inv in game.wave]
        game.update(0.5)
        assert game.frames == 0
        assert [(inv.x, inv.y) for inv in game.wave] == before

    def test_pause_toggles(self, game):
        game.handle_input(InputFrame(pause=True))
        assert game.internal_state == InvadersInternalState.PAUSED
        assert game.state == GameState.PAUSED
        game.handle_input(InputFrame(pause=True))
        assert game.internal_state == InvadersInternalState.PLAYING

    def test_pause_twice_replays_no_time(self, game):
        """Time spent paused is dropped, not replayed after resume."""
        before = [(inv.x, inv.y) for inv in game.wave]
        game.toggle_pause()
        game.update(0.2)
        game.update(0.2)
        game.toggle_pause()
        game.update(0.0)
        assert game.frames == 0
        assert [(inv.x, inv.y) for inv in game.wave] == before

    def test_mode_toggle_on_start_screen(self, make_game, sinks):
        game = make_game(start=False)
        game.handle_input(InputFrame(toggle_mode=True))
        assert game.session.mode == GameMode.TIME_ATTACK
        assert sinks['ui'].mode_label == 'Time Attack'

    def test_mode_toggle_ignored_while_playing(self, game, sinks):
        game.handle_input(InputFrame(toggle_mode=True))
        assert game.session.mode == GameMode.NORMAL
        assert sinks['ui'].mode_label == 'Normal'

    def test_mode_toggle_while_paused(self, game):
        game.toggle_pause()
        game.handle_input(InputFrame(toggle_mode=True))
        assert game.session.mode == GameMode.TIME_ATTACK

    def test_restart_only_after_game_over(self, quiet_game):
        quiet_game.session.score = 500
        quiet_game.handle_input(InputFrame(restart=True))
        assert quiet_game.session.score == 500

    def test_restart_resets_everything(self, quiet_game, sinks):
        game = quiet_game
        game.session.score = 1234
        game.session.level = 4
        game.session.invader_speed = 2.5
        game.session.upgrade_points = 2
        game.apply_upgrade(UpgradeKind.DAMAGE)
        game.session.lives = 1
        game.enemy_bullets.append(enemy_bullet_at(game.player))
        game.step()
        assert game.internal_state == InvadersInternalState.GAME_OVER

        game.handle_input(InputFrame(restart=True))
        assert game.internal_state == InvadersInternalState.PLAYING
        assert game.session.score == 0
        assert game.session.lives == 3
        assert game.session.level == 1
        assert game.session.invader_speed == 1.0
        assert game.session.upgrades.damage == 1
        assert game.session.upgrade_points == 0
        assert len(game.wave) == 50
        assert game.enemy_bullets == []
        assert game.boss is None
        assert sinks['ui'].stats == (0, 3, 1)

    def test_reset_returns_to_start_screen(self, game):
        game.session.score = 99
        game.reset()
        assert game.internal_state == InvadersInternalState.START
        assert game.get_score() == 0


# ============================================================================
# Timestep and movement
# ============================================================================


class TestTimestep:
    """Test update() turning wall-clock time into fixed steps."""

    def test_one_frame(self, game):
        game.update(1 / 60)
        assert game.frames == 1

    def test_negative_dt_is_zero(self, game):
        game.update(-1.0)
        assert game.frames == 0

    def test_large_dt_is_capped(self, game):
        game.update(10.0)
        assert 14 <= game.frames <= 15

    def test_remainder_carries_over(self, game):
        game.update(0.01)
        assert game.frames == 0
        game.update(0.01)
        assert game.frames == 1

    def test_idle_input_keeps_player_still(self, quiet_game):
        x, y = quiet_game.player.x, quiet_game.player.y
        for _ in range(10):
            quiet_game.step()
        assert (quiet_game.player.x, quiet_game.player.y) == (x, y)

    def test_held_direction_moves_player(self, quiet_game):
        x = quiet_game.player.x
        quiet_game.handle_input(InputFrame(left=True))
        quiet_game.step()
        quiet_game.step()
        assert quiet_game.player.x == x - 10.0

    def test_wave_marches(self, game):
        first = game.wave.invaders[0].x
        game.step()
        assert game.wave.invaders[0].x == first + 1.0


class TestShooting:
    """Test the held fire control and cooldown."""

    def test_held_shoot_respects_cooldown(self, quiet_game, sinks):
        quiet_game.handle_input(InputFrame(shoot=True))
        for _ in range(15):
            quiet_game.step()
        assert len(quiet_game.bullets) == 1
        assert sinks['sound'].count(SoundEvent.SHOOT) == 1

        quiet_game.step()
        assert len(quiet_game.bullets) == 2
        assert sinks['sound'].count(SoundEvent.SHOOT) == 2

    def test_bullet_starts_at_ship_nose(self, quiet_game):
        player = quiet_game.player
        quiet_game.handle_input(InputFrame(shoot=True))
        quiet_game.step()
        bullet = quiet_game.bullets[0]
        assert bullet.x == player.x + 20
        assert bullet.y == player.y - 5

    def test_no_shoot_sound_while_cooling_down(self, quiet_game, sinks):
        quiet_game.player.shoot_cooldown = 5
        quiet_game.handle_input(InputFrame(shoot=True))
        quiet_game.step()
        assert quiet_game.bullets == []
        assert sinks['sound'].count(SoundEvent.SHOOT) == 0


# ============================================================================
# Collisions
# ============================================================================


class TestInvaderKills:
    """Test player bullets against invaders."""

    def test_five_normal_kills_score_with_combo(self, quiet_game, sinks):
        game = quiet_game
        deltas = []
        for i in range(5):
            target = Invader(200.0 + i * 50, 200.0, InvaderType.NORMAL)
            game.wave.invaders.append(target)
            game.bullets.append(bullet_into(target))
            before = game.session.score
            game.step()
            deltas.append(game.session.score - before)
        assert deltas == [20, 22, 24, 26, 28]
        assert game.session.combo.combo == 5
        assert sinks['sound'].count(SoundEvent.ENEMY_HIT) == 5
        assert len(game.particles) == 50

    def test_kill_removes_bullet_and_invader(self, quiet_game):
        target = Invader(300.0, 200.0, InvaderType.FAST)
        quiet_game.wave.invaders.append(target)
        quiet_game.bullets.append(bullet_into(target))
        quiet_game.step()
        assert target not in quiet_game.wave.invaders
        assert quiet_game.bullets == []
        assert quiet_game.session.score == 30

    def test_damage_upgrade_scales_kill_points(self, quiet_game):
        quiet_game.session.upgrades.damage = 2
        target = Invader(300.0, 200.0, InvaderType.HEAVY)
        quiet_game.wave.invaders.append(target)
        quiet_game.bullets.append(bullet_into(target))
        quiet_game.step()
        assert quiet_game.session.score == 20


class TestPlayerHits:
    """Test enemy bullets, meteors and boss bullets hitting the player."""

    def test_shield_absorbs_enemy_bullet(self, quiet_game, sinks):
        game = quiet_game
        game.player.apply_power_up(PowerUpType.SHIELD)
        game.enemy_bullets.append(enemy_bullet_at(game.player))
        game.step()
        assert game.session.lives == 3
        assert game.player.power_ups[PowerUpType.SHIELD] == 0
        assert game.enemy_bullets == []
        assert sinks['sound'].count(SoundEvent.EXPLOSION) == 0
        assert game.particles == []

    def test_enemy_bullet_costs_a_life(self, quiet_game, sinks):
        game = quiet_game
        game.session.combo = ComboData(combo=4, timer_ms=3000.0, max_combo=4)
        game.enemy_bullets.append(enemy_bullet_at(game.player))
        game.step()
        assert game.session.lives == 2
        assert game.enemy_bullets == []
        assert sinks['sound'].count(SoundEvent.EXPLOSION) == 1
        assert len(game.particles) == 10
        assert game.session.combo.combo == 4

    def test_meteor_collision_resets_combo(self, quiet_game):
        game = quiet_game
        game.session.combo = ComboData(combo=4, timer_ms=3000.0, max_combo=4)
        game.meteors.append(Meteor(game.player.x, game.player.y - 10, speed=2.0))
        game.step()
        assert game.session.lives == 2
        assert game.meteors == []
        assert game.session.combo.combo == 0
        assert game.session.combo.max_combo == 4

    def test_boss_bullet_resets_combo(self, quiet_game):
        game = quiet_game
        game.session.combo = ComboData(combo=4, timer_ms=3000.0, max_combo=4)
        game.boss = Boss(0.0, 50.0, level=3)
        game.boss.bullets.append(enemy_bullet_at(game.player, BulletOwner.BOSS))
        game.step()
        assert game.session.lives == 2
        assert game.session.combo.combo == 0

    def test_last_life_ends_game(self, quiet_game, sinks, session_sink):
        game = quiet_game
        game.session.lives = 1
        game.session.score = 700
        game.enemy_bullets.append(enemy_bullet_at(game.player))
        game.step()
        assert game.session.lives == 0
        assert game.internal_state == InvadersInternalState.GAME_OVER
        assert game.state == GameState.GAME_OVER
        assert sinks['ui'].game_over_scores == [700]
        assert session_sink.records[-1]['type'] == 'game_over'
        assert session_sink.records[-1]['reason'] == 'destroyed'
        assert session_sink.records[-1]['score'] == 700

    def test_game_over_stops_simulation(self, quiet_game):
        game = quiet_game
        game.session.lives = 1
        game.enemy_bullets.append(enemy_bullet_at(game.player))
        game.step()
        frames = game.frames
        game.update(0.1)
        assert game.frames == frames


class TestPickupsAndMeteors:
    """Test power-up pickups and shooting meteors."""

    def test_power_up_pickup(self, quiet_game, sinks):
        game = quiet_game
        game.power_ups.append(PowerUp(game.player.x, game.player.y - 10, PowerUpType.MULTI_SHOT))
        game.step()
        assert game.power_ups == []
        assert game.player.has_multi_shot
        assert game.session.score == 50
        assert sinks['sound'].count(SoundEvent.POWER_UP) == 1

    def test_meteor_survives_first_hit(self, quiet_game, sinks):
        game = quiet_game
        meteor = Meteor(300.0, 200.0, speed=2.0)
        game.meteors.append(meteor)
        game.bullets.append(bullet_into(meteor))
        game.step()
        assert meteor.health == 2
        assert game.meteors == [meteor]
        assert game.bullets == []
        assert game.session.score == 0
        assert sinks['sound'].count(SoundEvent.ENEMY_HIT) == 1

    def test_meteor_destroyed(self, quiet_game):
        game = quiet_game
        meteor = Meteor(300.0, 200.0, speed=2.0)
        meteor.health = 1
        game.meteors.append(meteor)
        game.bullets.append(bullet_into(meteor))
        game.step()
        assert game.meteors == []
        assert game.session.score == 100
        assert game.session.meteors_destroyed == 1
        assert game.session.combo.combo == 1
        assert len(game.particles) == 10


class TestBoss:
    """Test boss damage, defeat and spawning."""

    def test_bullet_damages_boss(self, quiet_game):
        game = quiet_game
        game.boss = Boss(340.0, 50.0, level=3)
        game.bullets.append(Bullet(400.0, 100.0, -5.0))
        game.step()
        assert game.boss.health == game.boss.max_health - 1
        assert game.session.score == 50
        assert game.bullets == []

    def test_boss_defeat(self, quiet_game, sinks):
        game = quiet_game
        game.session.level = 3
        game.boss = Boss(340.0, 50.0, level=3)
        game.boss.hit(1000)
        game.step()
        assert game.boss is None
        assert game.session.score == 1000
        assert game.session.upgrade_points == 3
        assert game.session.boss_defeated
        assert sinks['sound'].count(SoundEvent.EXPLOSION) == 1

    def test_boss_spawns_on_third_level_after_wave(self, game):
        game.session.level = 3
        game.wave.invaders = []
        for _ in range(130):
            game.step()
            if game.boss is not None:
                break
        assert game.boss is not None
        assert game.boss.level == 3
        assert game.session.level == 3

    def test_level_waits_for_boss(self, game):
        game.session.level = 3
        game.wave.invaders = []
        game.step()
        assert game.session.level == 3
        assert game.wave.empty

    def test_defeated_boss_advances_level(self, game):
        game.session.level = 3
        game.wave.invaders = []
        game.boss = Boss(340.0, 50.0, level=3)
        game.boss.hit(1000)
        game.step()
        assert game.session.level == 4
        assert not game.session.boss_defeated
        assert len(game.wave) == 50
        assert game.session.score == 1000 + 400


# ============================================================================
# Level progression
# ============================================================================


class TestProgression:
    """Test wave clears and invasion."""

    def test_clearing_wave_advances_level(self, game):
        game.wave.invaders = []
        game.step()
        assert game.session.level == 2
        assert game.session.invader_speed == 1.5
        assert len(game.wave) == 50
        assert game.session.score == 200

    def test_invaders_reaching_player_end_game(self, quiet_game, session_sink):
        game = quiet_game
        game.wave.invaders.append(Invader(300.0, game.player.y - 30.0))
        game.step()
        assert game.session.lives == 0
        assert game.internal_state == InvadersInternalState.GAME_OVER
        assert session_sink.records[-1]['reason'] == 'invaded'

    def test_ui_stats_updated_each_frame(self, quiet_game, sinks):
        quiet_game.step()
        assert sinks['ui'].stats == (0, 3, 1)


# ============================================================================
# Upgrades
# ============================================================================


class TestUpgrades:
    """Test spending upgrade points."""

    def test_spend_with_key(self, quiet_game):
        game = quiet_game
        game.session.upgrade_points = 2
        game.handle_input(InputFrame(upgrade=2))
        assert game.session.upgrades.fire_rate == 2
        assert game.player.fire_rate == 2
        assert game.session.upgrade_points == 1

    def test_speed_upgrade_reaches_player(self, quiet_game):
        quiet_game.session.upgrade_points = 1
        assert quiet_game.apply_upgrade(UpgradeKind.SPEED)
        assert quiet_game.player.speed_level == 2

    def test_no_points(self, quiet_game):
        assert quiet_game.apply_upgrade(UpgradeKind.LUCK) is False
        assert quiet_game.session.upgrades.luck == 1


# ============================================================================
# Time attack
# ============================================================================


class TestTimeAttackMode:
    """Test time attack inside the simulation loop."""

    def test_expiry_awards_both_bonuses_once(self, make_game, session_sink):
        game = make_game(mode=GameMode.TIME_ATTACK, time_attack_seconds=1)
        game.wave.invaders = [sentinel()]
        game.session.score = 5000
        game.session.combo = ComboData(max_combo=10)
        game.session.meteors_destroyed = 5
        game.session.time_attack_frames = 59
        game.step()
        assert game.internal_state == InvadersInternalState.GAME_OVER
        assert game.session.score == 10000
        assert session_sink.records[-1]['reason'] == 'time'

        game.update(1.0)
        assert game.session.score == 10000

    def test_countdown_runs_only_in_time_attack(self, quiet_game):
        quiet_game.step()
        assert quiet_game.session.time_attack_frames == 0

    def test_runs_to_expiry(self, make_game):
        game = make_game(mode=GameMode.TIME_ATTACK, time_attack_seconds=0.5)
        game.wave.invaders = [sentinel()]
        for _ in range(30):
            game.step()
        assert game.internal_state == InvadersInternalState.GAME_OVER


# ============================================================================
# Rendering
# ============================================================================


class TestRender:
    """Test descriptors sent to the render sink."""

    def test_start_screen_draws_only_hud(self, make_game, sinks):
        game = make_game(start=False)
        game.render()
        assert sinks['render'].drawn == []
        assert sinks['render'].hud.state == InvadersInternalState.START

    def test_playing_draws_entities(self, game, sinks):
        game.render()
        kinds = sinks['render'].kinds()
        assert kinds[0] == 'player'
        assert kinds.count('invader') == 50

    def test_boss_and_its_bullets_drawn(self, quiet_game, sinks):
        quiet_game.boss = Boss(340.0, 50.0, level=3)
        quiet_game.boss.bullets.append(Bullet(400.0, 200.0, 4.0, BulletOwner.BOSS))
        quiet_game.render()
        kinds = sinks['render'].kinds()
        assert 'boss' in kinds
        assert kinds.count('bullet') == 1

    def test_combo_hud(self, quiet_game, sinks):
        quiet_game.session.combo = ComboData(combo=3, timer_ms=1500.0, max_combo=3)
        quiet_game.render()
        hud = sinks['render'].hud
        assert hud.show_combo
        assert hud.multiplier == pytest.approx(1.3)
        assert hud.combo_progress == pytest.approx(0.5)

    def test_single_hit_shows_no_combo(self, quiet_game, sinks):
        quiet_game.session.combo = ComboData(combo=1, timer_ms=1500.0, max_combo=1)
        quiet_game.render()
        assert not sinks['render'].hud.show_combo

    def test_time_attack_hud(self, make_game, sinks):
        game = make_game(mode=GameMode.TIME_ATTACK)
        game.session.time_attack_frames = 60
        game.render()
        hud = sinks['render'].hud
        assert hud.time_left == 119
        assert len(hud.objectives) == 3

    def test_normal_hud_has_no_countdown(self, game, sinks):
        game.render()
        assert sinks['render'].hud.time_left is None
        assert sinks['render'].hud.objectives == ()


class TestMetadata:
    """Test the BaseGame metadata surface."""

    def test_arguments_include_base(self):
        from games.Invaders.game_mode import InvadersMode
        names = [arg['name'] for arg in InvadersMode.get_arguments()]
        assert names[:5] == ['--width', '--height', '--lives', '--mode', '--config']
        assert '--seed' in names
        assert '--no-audio' in names

    def test_game_info_factory(self):
        from games.Invaders.game_info import get_game_mode
        game = get_game_mode(settings=InvadersSettings(lives=5))
        assert game.session.lives == 5
        assert game.internal_state == InvadersInternalState.START
