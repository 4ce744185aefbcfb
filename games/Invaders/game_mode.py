"""Invaders - arcade shoot-'em-up with waves, bosses, meteors and combos.

Features:
- Fixed-timestep simulation (60 steps per second) driven by wall-clock dt
- Combo multiplier that decays after three seconds without a hit
- A boss guarding every third level
- Time-attack mode with scoring objectives
- Upgrade points from bosses, spent on damage, fire rate, speed and luck

The mode never draws or plays audio itself. It reports to three sinks
(render, sound and UI) so tests can run it headless.
"""

import random
from typing import Any, Callable, Dict, List, Optional

from starfall.games import BaseGame, GameState
from starfall.games.input import InputFrame
from starfall.logging import get_logger, emit_record

from models import (
    GameMode,
    InvadersInternalState,
    SessionState,
    SoundEvent,
    UpgradeKind,
)

from .config import (
    FPS, FRAME_MS, MAX_FRAME_TIME,
    PLAYER_WIDTH, PLAYER_BOTTOM_OFFSET,
    INVADER_SPEED_STEP, LEVEL_BONUS_PER_LEVEL,
    POWER_UP_PICKUP_POINTS, METEOR_POINTS,
    BOSS_HIT_POINTS, BOSS_KILL_POINTS, BOSS_UPGRADE_POINTS,
    InvadersSettings,
)
from .game.descriptors import HudDescriptor
from .game.entities import Boss, Bullet, Invader, Meteor, Particle, Player, PowerUp, explosion
from .game.physics import resolve_bullet_hits, resolve_touches
from .game.scoring import ComboTracker, award
from .game.sinks import (
    NullRenderSink, NullSoundSink, NullUISink,
    RenderSink, SoundSink, UISink,
)
from .game.spawner import Spawner, is_boss_level
from .game.time_attack import TimeAttack
from .game.wave import InvaderWave

log = get_logger('invaders')

STEP_SECONDS = 1.0 / FPS


class InvadersMode(BaseGame):
    """Invaders game mode.

    Owns the session state and every entity collection. Input arrives as
    one InputFrame per rendered frame; update() turns wall-clock time into
    fixed simulation steps.

    Attributes:
        session: Score, lives, level, combo and the other session counters
        player: The player's ship
        wave: Live invaders
        bullets: Player bullets
        enemy_bullets: Invader bullets (boss bullets live on the boss)
        particles: Explosion particles
        power_ups: Falling pickups
        meteors: Falling meteors
        boss: Active boss, or None
    """

    # Game metadata
    NAME = "Starfall Invaders"
    DESCRIPTION = "Hold off invader waves, bosses and meteors while building combos."
    VERSION = "1.0.0"
    AUTHOR = "Starfall Team"

    # CLI arguments
    ARGUMENTS = [
        {
            'name': '--width',
            'type': int,
            'default': None,
            'help': 'Screen width in pixels'
        },
        {
            'name': '--height',
            'type': int,
            'default': None,
            'help': 'Screen height in pixels'
        },
        {
            'name': '--lives',
            'type': int,
            'default': None,
            'help': 'Starting lives'
        },
        {
            'name': '--mode',
            'type': str,
            'default': None,
            'choices': [mode.value for mode in GameMode],
            'help': 'Rule set (normal or timeAttack)'
        },
        {
            'name': '--config',
            'type': str,
            'default': None,
            'help': 'YAML settings file'
        },
    ]

    def __init__(
        self,
        settings: Optional[InvadersSettings] = None,
        render_sink: Optional[RenderSink] = None,
        sound_sink: Optional[SoundSink] = None,
        ui_sink: Optional[UISink] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the game in the start state.

        Args:
            settings: Per-game tunables (defaults when None)
            render_sink: Receives descriptors from render()
            sound_sink: Receives sound events
            ui_sink: Receives score/lives/level, mode and state changes
            rng: Random source for spawns and particles (seeded from settings when None)
        """
        self.settings = settings or InvadersSettings()
        self.width = self.settings.width
        self.height = self.settings.height

        self.render_sink = render_sink or NullRenderSink()
        self.sound_sink = sound_sink or NullSoundSink()
        self.ui_sink = ui_sink or NullUISink()

        self._rng = rng or random.Random(self.settings.seed)
        self.spawner = Spawner(self.width, self.height, self._rng)
        self.time_attack = TimeAttack(self.settings.objectives, self.settings.time_attack_seconds)

        self._input = InputFrame()
        self._accumulator = 0.0
        self.frames = 0

        self._new_session(self.settings.mode)
        self.ui_sink.set_mode_label(self.session.mode.label)
        self._notify_state()

    def _new_session(self, mode: GameMode) -> None:
        """Fresh session counters and entities. State is left at START."""
        self.session = SessionState(lives=self.settings.lives, mode=mode)
        self.player = Player(self.width / 2 - PLAYER_WIDTH / 2, self.height - PLAYER_BOTTOM_OFFSET)
        self.wave = InvaderWave(self.width)
        self.wave.create_grid()
        self.bullets: List[Bullet] = []
        self.enemy_bullets: List[Bullet] = []
        self.particles: List[Particle] = []
        self.power_ups: List[PowerUp] = []
        self.meteors: List[Meteor] = []
        self.boss: Optional[Boss] = None
        self.spawner.reset()
        self._accumulator = 0.0
        self.frames = 0

    # =========================================================================
    # BaseGame interface
    # =========================================================================

    @property
    def internal_state(self) -> InvadersInternalState:
        return self.session.internal_state

    def _get_internal_state(self) -> GameState:
        return self.session.internal_state.to_game_state()

    def get_score(self) -> int:
        return self.session.score

    def handle_input(self, frame: InputFrame) -> None:
        """Apply edge-triggered controls now; keep held controls for step().

        Args:
            frame: Controls sampled this frame
        """
        self._input = frame
        state = self.internal_state

        if frame.start and state == InvadersInternalState.START:
            self.start()
        if frame.pause:
            self.toggle_pause()
        if frame.toggle_mode and self.internal_state != InvadersInternalState.PLAYING:
            self.toggle_mode()
        if frame.restart and self.internal_state == InvadersInternalState.GAME_OVER:
            self.restart()
        if frame.upgrade and self.internal_state == InvadersInternalState.PLAYING:
            self.apply_upgrade(UpgradeKind.from_slot(frame.upgrade))

    def update(self, dt: float) -> None:
        """Advance the simulation by wall-clock time.

        Negative dt counts as zero and dt is capped at MAX_FRAME_TIME. Whole
        steps are run from the accumulated time; the remainder carries over.
        Nothing advances unless the game is playing.

        Args:
            dt: Seconds since the last call
        """
        if self.internal_state != InvadersInternalState.PLAYING:
            self._accumulator = 0.0
            return

        self._accumulator += min(max(0.0, dt), MAX_FRAME_TIME)
        while self._accumulator >= STEP_SECONDS and self.internal_state == InvadersInternalState.PLAYING:
            self.step()
            self._accumulator -= STEP_SECONDS

    def render(self) -> None:
        """Send every live entity and the HUD to the render sink."""
        sink = self.render_sink
        sink.begin_frame()

        if self.internal_state != InvadersInternalState.START:
            sink.draw(self.player.describe())
            for entity in self.bullets + self.enemy_bullets:
                sink.draw(entity.describe())
            for invader in self.wave:
                sink.draw(invader.describe())
            for meteor in self.meteors:
                sink.draw(meteor.describe())
            if self.boss is not None:
                sink.draw(self.boss.describe())
                for bullet in self.boss.bullets:
                    sink.draw(bullet.describe())
            for entity in self.particles + self.power_ups:
                sink.draw(entity.describe())

        sink.draw_hud(self.hud())
        sink.end_frame()

    def reset(self) -> None:
        """Back to the start screen with a fresh session."""
        super().reset()
        self._new_session(self.session.mode)
        self._notify_state()

    # =========================================================================
    # State machine
    # =========================================================================

    def _set_state(self, state: InvadersInternalState) -> None:
        previous = self.session.internal_state
        self.session.internal_state = state
        log.info(f"State: {previous.value} -> {state.value}")
        self._notify_state()

    def _notify_state(self) -> None:
        self.ui_sink.show_state(self.session.internal_state)
        self._update_ui()

    def _update_ui(self) -> None:
        self.ui_sink.update_stats(self.session.score, self.session.lives, self.session.level)

    def start(self) -> None:
        """Leave the start screen."""
        if self.internal_state != InvadersInternalState.START:
            return
        self._accumulator = 0.0
        self._set_state(InvadersInternalState.PLAYING)

    def toggle_pause(self) -> None:
        """Flip between playing and paused. Other states are unaffected."""
        if self.internal_state == InvadersInternalState.PLAYING:
            self._set_state(InvadersInternalState.PAUSED)
        elif self.internal_state == InvadersInternalState.PAUSED:
            self._set_state(InvadersInternalState.PLAYING)
        self._accumulator = 0.0

    def toggle_mode(self) -> None:
        """Switch between normal and time attack (not while playing)."""
        if self.internal_state == InvadersInternalState.PLAYING:
            return
        self.session.mode = self.session.mode.toggled()
        log.info(f"Mode: {self.session.mode.label}")
        self.ui_sink.set_mode_label(self.session.mode.label)

    def restart(self) -> None:
        """Start over in the current mode; score, upgrades and speed reset too."""
        self._new_session(self.session.mode)
        self._set_state(InvadersInternalState.PLAYING)

    def apply_upgrade(self, kind: UpgradeKind) -> bool:
        """Spend one upgrade point on a track.

        Returns:
            False if no points are left or the track is maxed out
        """
        if not self.session.spend_upgrade(kind):
            return False
        upgrades = self.session.upgrades
        self.player.fire_rate = upgrades.fire_rate
        self.player.speed_level = upgrades.speed
        log.info(f"Upgraded {kind.value} to {upgrades.level_of(kind)}")
        self._update_ui()
        return True

    def _game_over(self, reason: str) -> None:
        if self.internal_state == InvadersInternalState.GAME_OVER:
            return
        self._set_state(InvadersInternalState.GAME_OVER)
        log.info(f"Game over ({reason}) at level {self.session.level}, score {self.session.score}")
        self.ui_sink.show_game_over(self.session.score)
        emit_record('session', self._session_record(reason))

    def _session_record(self, reason: str) -> Dict[str, Any]:
        session = self.session
        return {
            'type': 'game_over',
            'reason': reason,
            'mode': session.mode.value,
            'score': session.score,
            'level': session.level,
            'lives': session.lives,
            'max_combo': session.combo.max_combo,
            'meteors_destroyed': session.meteors_destroyed,
            'objectives_completed': session.objectives_completed,
            'upgrades': session.upgrades.model_dump(),
            'frames': self.frames,
        }

    # =========================================================================
    # Simulation step
    # =========================================================================

    def step(self) -> None:
        """Advance the simulation by exactly one frame."""
        self.frames += 1
        controls = self._input

        if controls.shoot:
            fired = self.player.shoot()
            if fired:
                self.bullets.extend(fired)
                self.sound_sink.play(SoundEvent.SHOOT)

        self.player.advance(controls.left, controls.right, self.width)
        self.bullets = self._advance_all(self.bullets, lambda b: b.is_on_screen(self.height))
        self.enemy_bullets = self._advance_all(self.enemy_bullets, lambda b: b.is_on_screen(self.height))

        self.wave.advance(self.session.invader_speed)
        shot = self.spawner.invader_shot(FRAME_MS, self.wave)
        if shot is not None:
            self.enemy_bullets.append(shot)

        self.particles = self._advance_all(self.particles, lambda p: p.alive)
        self.power_ups = self._advance_all(self.power_ups, lambda p: p.is_on_screen(self.height))
        self.meteors = self._advance_all(self.meteors, lambda m: m.is_on_screen(self.height) and not m.destroyed)

        if self.boss is not None:
            self.boss.advance(self.player.center_x)
            if self.boss.destroyed:
                self._defeat_boss()

        self.session.combo = ComboTracker(self.session.combo).tick(FRAME_MS).combo

        if self.session.mode == GameMode.TIME_ATTACK and self.time_attack.tick(self.session):
            self._game_over('time')
            return

        self._check_collisions()
        if self.internal_state != InvadersInternalState.PLAYING:
            return

        self._spawn()
        self._check_progress()
        self._update_ui()

    @staticmethod
    def _advance_all(entities: list, keep: Callable[[Any], bool]) -> list:
        for entity in entities:
            entity.advance()
        return [e for e in entities if keep(e)]

    def _spawn(self) -> None:
        power_up = self.spawner.spawn_power_up(FRAME_MS, self.session.upgrades.luck)
        if power_up is not None:
            self.power_ups.append(power_up)

        meteor = self.spawner.spawn_meteor(FRAME_MS)
        if meteor is not None:
            self.meteors.append(meteor)

        boss = self.spawner.spawn_boss(
            FRAME_MS,
            self.session.level,
            boss_alive=self.boss is not None,
            boss_defeated=self.session.boss_defeated,
            wave_empty=self.wave.empty,
        )
        if boss is not None:
            self.boss = boss

    def _check_progress(self) -> None:
        """Advance the level when the wave (and any boss) is cleared; lose if invaders land."""
        session = self.session
        if self.wave.empty and (not is_boss_level(session.level) or session.boss_defeated):
            session.level += 1
            session.invader_speed += INVADER_SPEED_STEP
            session.boss_defeated = False
            self.wave.create_grid()
            session.add_score(LEVEL_BONUS_PER_LEVEL * session.level)
            log.info(f"Level {session.level} (invader speed {session.invader_speed:.1f})")

        if self.wave.reached(self.player.y):
            session.lives = 0
            self._game_over('invaded')

    # =========================================================================
    # Scoring helpers
    # =========================================================================

    def _add_combo(self) -> None:
        self.session.combo = ComboTracker(self.session.combo).add_hit().combo

    def _explode(self, x: float, y: float) -> None:
        self.particles.extend(explosion(x, y, self._rng))

    def _player_hit(self, reset_combo: bool) -> None:
        """Apply one hit to the player. A shield absorbs it entirely."""
        if not self.player.hit():
            return
        lives = self.session.lose_life()
        cx, cy = self.player.center_x, self.player.y + self.player.height / 2
        self._explode(cx, cy)
        self.sound_sink.play(SoundEvent.EXPLOSION)
        if reset_combo:
            self.session.combo = ComboTracker(self.session.combo).reset().combo
        if lives <= 0:
            self._game_over('destroyed')

    def _defeat_boss(self) -> None:
        boss = self.boss
        self._explode(*boss.center)
        self.session.add_score(award(BOSS_KILL_POINTS, self.session.combo))
        self._add_combo()
        self.session.upgrade_points += BOSS_UPGRADE_POINTS
        self.session.boss_defeated = True
        self.sound_sink.play(SoundEvent.EXPLOSION)
        self.boss = None
        log.info(f"Boss defeated on level {self.session.level}")

    # =========================================================================
    # Collisions
    # =========================================================================

    def _check_collisions(self) -> None:
        resolve_bullet_hits(self.bullets, self.wave.invaders, self._on_invader_hit)
        resolve_touches(self.player, self.enemy_bullets, lambda bullet: self._player_hit(reset_combo=False))
        resolve_touches(self.player, self.power_ups, self._on_power_up)
        resolve_bullet_hits(self.bullets, self.meteors, self._on_meteor_hit)
        resolve_touches(self.player, self.meteors, lambda meteor: self._player_hit(reset_combo=True))

        if self.boss is not None:
            if not self.boss.destroyed:
                resolve_bullet_hits(self.bullets, [self.boss], self._on_boss_hit)
            resolve_touches(self.player, self.boss.bullets, lambda bullet: self._player_hit(reset_combo=True))

    def _on_invader_hit(self, bullet: Bullet, invader: Invader) -> bool:
        self._explode(invader.x + invader.width / 2, invader.y + invader.height / 2)
        self.session.add_score(award(invader.points, self.session.combo, self.session.upgrades.damage))
        self._add_combo()
        self.sound_sink.play(SoundEvent.ENEMY_HIT)
        return True

    def _on_power_up(self, power_up: PowerUp) -> None:
        self.player.apply_power_up(power_up.type)
        self.session.add_score(POWER_UP_PICKUP_POINTS)
        self.sound_sink.play(SoundEvent.POWER_UP)

    def _on_meteor_hit(self, bullet: Bullet, meteor: Meteor) -> bool:
        meteor.hit()
        destroyed = meteor.destroyed
        if destroyed:
            self._explode(meteor.x + meteor.width / 2, meteor.y + meteor.height / 2)
            self.session.add_score(award(METEOR_POINTS, self.session.combo))
            self._add_combo()
            self.session.meteors_destroyed += 1
        self.sound_sink.play(SoundEvent.ENEMY_HIT)
        return destroyed

    def _on_boss_hit(self, bullet: Bullet, boss: Boss) -> bool:
        boss.hit(self.session.upgrades.damage)
        self._explode(bullet.x, bullet.y)
        self.session.add_score(award(BOSS_HIT_POINTS, self.session.combo))
        self._add_combo()
        self.sound_sink.play(SoundEvent.ENEMY_HIT)
        return False

    # =========================================================================
    # HUD
    # =========================================================================

    def hud(self) -> HudDescriptor:
        """Overlay state for the current frame."""
        session = self.session
        combo = ComboTracker(session.combo)
        time_attack = session.mode == GameMode.TIME_ATTACK
        return HudDescriptor(
            state=session.internal_state,
            mode=session.mode,
            score=session.score,
            lives=session.lives,
            level=session.level,
            combo=session.combo.combo,
            multiplier=combo.multiplier,
            combo_progress=combo.progress,
            upgrade_points=session.upgrade_points,
            time_left=self.time_attack.time_left(session) if time_attack else None,
            objectives=self.time_attack.statuses(session) if time_attack else (),
            objectives_completed=session.objectives_completed,
        )

    def __repr__(self) -> str:
        return f"InvadersMode({self.session})"
