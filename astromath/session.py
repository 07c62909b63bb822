"""The round state machine.

A GameSession owns everything that changes while a game is played: the
score, the falling answer blocks, the projectile, and the timers for the
countdown, level-up pause, hit flash and wrong-answer lock. The host calls
``update()`` once per rendered frame and uses the control methods for input;
nothing else mutates session state.

States::

    MENU -> COUNTDOWN -> PLAYING <-> PAUSED
                         PLAYING -> LEVEL_UP -> PLAYING
                         PLAYING -> GAME_OVER

``start_game()`` re-enters COUNTDOWN from any state.
"""
import dataclasses
import logging
import math
import numbers
import random

from . import config
from .clock import MonotonicClock
from .generators import generate_answer_blocks, generate_problem
from .levels import fall_speed, level_config, tier_description
from .models import GameScore, GameState, Projectile
from .sinks import FeedbackSink, StatsSink
from .timers import TimerQueue

logger = logging.getLogger(__name__)

COUNTDOWN_TIMER = 'countdown'
LEVEL_UP_TIMER = 'level_up'
HIT_FLASH_TIMER = 'hit_flash'
WRONG_LOCK_TIMER = 'wrong_lock'


class GameSession:
    def __init__(self, settings=None, stats_sink=None, feedback_sink=None, clock=None, rng=None):
        self.settings = settings or config.GameSettings()
        self._stats = stats_sink or StatsSink()
        self._feedback = feedback_sink or FeedbackSink()
        self._clock = clock or MonotonicClock()
        self._rng = rng or random.Random()
        self._timers = TimerQueue()

        self._state = GameState.MENU
        self._score = GameScore(lives=self.settings.initial_lives)
        self._level_config = level_config(1)
        self._fall_speed = self._speed_for(self._level_config)
        self._problem = None
        self._blocks = []
        self._projectile = None
        self._player_x = self.settings.board_width / 2
        self._countdown = 0
        self._time_remaining = 1.0
        self._round_started_at = None
        self._paused_at = None
        self._last_hit_result = None
        self._wrong_locked = False
        self._game_over_reported = False

    # ------------------------
    # Read surface
    # ------------------------
    @property
    def state(self):
        return self._state

    @property
    def score(self):
        return dataclasses.replace(self._score)

    @property
    def current_problem(self):
        return self._problem

    @property
    def answer_blocks(self):
        return tuple(self._blocks)

    @property
    def projectile(self):
        return self._projectile

    @property
    def player_x(self):
        return self._player_x

    @property
    def countdown_number(self):
        return self._countdown

    @property
    def time_remaining(self):
        """Fraction (0..1) of the current round's time budget still left."""
        return self._time_remaining

    @property
    def level_config(self):
        return self._level_config

    @property
    def fall_speed(self):
        return self._fall_speed

    @property
    def last_hit_result(self):
        return self._last_hit_result

    @property
    def timers(self):
        return self._timers

    def snapshot(self):
        """Plain-dict view of the session for the host HUD and test automation."""
        projectile = None
        if self._projectile is not None:
            projectile = {'x': self._projectile.x, 'y': self._projectile.y}
        return {
            'state': self._state.value,
            'score': self._score.score,
            'level': self._score.level,
            'lives': self._score.lives,
            'correct_in_level': self._score.correct_in_level,
            'tier': self._level_config.tier,
            'time_available': self._level_config.time_available,
            'time_remaining': self._time_remaining,
            'countdown': self._countdown,
            'problem': self._problem.display_string if self._problem else None,
            'blocks': [
                {'id': b.id, 'display': b.display_value, 'x': b.x, 'y': b.y, 'correct': b.is_correct}
                for b in self._blocks
            ],
            'projectile': projectile,
            'player_x': self._player_x,
            'last_hit_result': self._last_hit_result,
        }

    # ------------------------
    # Control surface
    # ------------------------
    def start_game(self):
        self._timers.cancel_all()
        self._score = GameScore(lives=self.settings.initial_lives)
        self._apply_level(1)
        self._clear_board()
        self._projectile = None
        self._player_x = self.settings.board_width / 2
        self._time_remaining = 1.0
        self._paused_at = None
        self._last_hit_result = None
        self._wrong_locked = False
        self._game_over_reported = False

        self._countdown = self.settings.countdown_start
        self._set_state(GameState.COUNTDOWN)
        self._schedule(COUNTDOWN_TIMER, self.settings.countdown_tick_seconds, self._countdown_tick)
        self._notify(self._feedback, 'on_game_start')

    def pause(self):
        if self._state != GameState.PLAYING:
            logger.debug('[ignored] action=pause state=%s', self._state.value)
            return False
        self._paused_at = self._clock.now()
        self._set_state(GameState.PAUSED)
        self._notify(self._feedback, 'on_pause', self._score.level, self._score.score)
        return True

    def resume(self):
        if self._state != GameState.PAUSED:
            logger.debug('[ignored] action=resume state=%s', self._state.value)
            return False
        if self._round_started_at is not None and self._paused_at is not None:
            self._round_started_at += self._clock.now() - self._paused_at
        self._paused_at = None
        self._set_state(GameState.PLAYING)
        self._notify(self._feedback, 'on_resume', self._score.level, self._score.score)
        return True

    def skip_level_up(self):
        if self._state != GameState.LEVEL_UP:
            return False
        self._timers.cancel(LEVEL_UP_TIMER)
        self._end_level_up()
        return True

    def quit_to_menu(self):
        self._timers.cancel_all()
        self._clear_board()
        self._projectile = None
        self._paused_at = None
        self._last_hit_result = None
        self._set_state(GameState.MENU)

    def move_player(self, direction):
        """Step the ship ``direction`` speed units sideways (-1 left, 1 right)."""
        if isinstance(direction, bool) or not isinstance(direction, numbers.Real) or math.isnan(direction):
            raise ValueError(f'direction must be a number, got {direction!r}')
        if self._state != GameState.PLAYING:
            return
        half = config.SHIP_WIDTH / 2
        x = self._player_x + direction * config.PLAYER_SPEED
        self._player_x = max(half, min(self.settings.board_width - half, x))

    def fire_projectile(self):
        if self._state != GameState.PLAYING:
            return False
        if self._projectile is not None and self._projectile.active:
            return False
        spawn_y = self.settings.board_height - config.PROJECTILE_SPAWN_OFFSET
        self._projectile = Projectile(self._player_x, spawn_y)
        return True

    # ------------------------
    # Frame callback
    # ------------------------
    def update(self):
        now = self._clock.now()
        self._timers.run_due(now)
        if self._state != GameState.PLAYING:
            return

        self._update_time_remaining(now)
        self._move_blocks()
        self._move_projectile()
        self._check_collisions()
        if self._state == GameState.PLAYING and not self._blocks and self._score.lives > 0:
            self._start_round(now)

    def _update_time_remaining(self, now):
        if self._round_started_at is None:
            self._time_remaining = 1.0
            return
        elapsed = now - self._round_started_at
        self._time_remaining = max(0.0, 1.0 - elapsed / self._level_config.time_available)

    def _move_blocks(self):
        if not self._blocks:
            return
        impact = self.settings.impact_line
        for block in self._blocks:
            block.y += self._fall_speed
        if any(block.y >= impact for block in self._blocks):
            self._on_miss()

    def _move_projectile(self):
        p = self._projectile
        if p is None:
            return
        p.y -= config.PROJECTILE_SPEED
        if p.y < 0:
            p.active = False
            self._projectile = None

    def _check_collisions(self):
        p = self._projectile
        if p is None or not p.active:
            return
        reach_x = self.settings.block_width / 2 + config.HIT_PADDING
        reach_y = self.settings.block_height / 2 + config.HIT_PADDING
        for block in self._blocks:
            if abs(p.x - block.x) < reach_x and abs(p.y - block.y) < reach_y:
                if block.is_correct:
                    self._on_correct_hit()
                elif self._wrong_locked:
                    logger.debug('[ignored] wrong hit during cooldown block=%s', block.id)
                    return
                else:
                    self._on_wrong_hit()
                p.active = False
                self._projectile = None
                return

    # ------------------------
    # Transitions
    # ------------------------
    def _start_round(self, now):
        level = self._score.level
        self._problem = generate_problem(level, self._rng)
        self._blocks = generate_answer_blocks(
            self._problem,
            self.settings.board_width,
            self.settings.block_width,
            self.settings.block_start_y,
            self._rng,
            self.settings.answer_choices,
        )
        self._round_started_at = now
        self._time_remaining = 1.0
        logger.debug('[round] level=%s problem=%r', level, self._problem.display_string)
        self._notify(self._feedback, 'on_round_start', level, self._problem.operation.value)

    def _on_correct_hit(self):
        operation = self._problem.operation.value
        self._score.score += 1
        self._score.correct_in_level += 1
        self._flash('correct')
        self._clear_board()
        self._notify(self._feedback, 'on_correct_hit', self._score.level, operation, self._score.score)
        if self._score.correct_in_level >= self.settings.answers_per_level:
            self._level_up()

    def _on_wrong_hit(self):
        operation = self._problem.operation.value
        self._score.lives -= 1
        self._flash('wrong')
        self._wrong_locked = True
        self._schedule(WRONG_LOCK_TIMER, self.settings.wrong_answer_cooldown_seconds, self._unlock_wrong)
        self._clear_board()
        self._notify(self._feedback, 'on_wrong_hit', self._score.level, operation, self._score.lives)
        if self._score.lives <= 0:
            self._game_over()

    def _on_miss(self):
        operation = self._problem.operation.value if self._problem else None
        self._score.lives -= 1
        self._clear_board()
        self._notify(self._feedback, 'on_missed', self._score.level, operation, self._score.lives)
        if self._score.lives <= 0:
            self._game_over()

    def _level_up(self):
        old_tier = self._level_config.tier
        self._score.level += 1
        self._score.correct_in_level = 0
        self._apply_level(self._score.level)
        self._set_state(GameState.LEVEL_UP)
        self._schedule(LEVEL_UP_TIMER, self.settings.level_up_seconds, self._end_level_up)

        cfg = self._level_config
        self._notify(self._feedback, 'on_level_up', cfg.level, cfg.tier, self._score.score)
        if cfg.tier != old_tier:
            self._notify(self._feedback, 'on_tier_changed', cfg.tier, tier_description(cfg.level))

    def _end_level_up(self):
        if self._state == GameState.LEVEL_UP:
            self._set_state(GameState.PLAYING)

    def _game_over(self):
        self._timers.cancel_all()
        self._clear_board()
        self._projectile = None
        self._last_hit_result = None
        self._wrong_locked = False
        self._set_state(GameState.GAME_OVER)
        if self._game_over_reported:
            return
        self._game_over_reported = True
        s = self._score
        self._notify(self._stats, 'report_game_over', s.score, s.level, s.score)

    def _countdown_tick(self):
        self._countdown -= 1
        if self._countdown <= 0:
            self._countdown = 0
            self._set_state(GameState.PLAYING)
        else:
            self._schedule(COUNTDOWN_TIMER, self.settings.countdown_tick_seconds, self._countdown_tick)

    def _flash(self, result):
        self._last_hit_result = result
        self._schedule(HIT_FLASH_TIMER, self.settings.hit_flash_seconds, self._clear_flash)

    def _clear_flash(self):
        self._last_hit_result = None

    def _unlock_wrong(self):
        self._wrong_locked = False

    # ------------------------
    # Helpers
    # ------------------------
    def _apply_level(self, level):
        self._level_config = level_config(level)
        self._fall_speed = self._speed_for(self._level_config)

    def _speed_for(self, cfg):
        s = self.settings
        return fall_speed(s.board_height, cfg.time_available, s.fps, s.hud_margins)

    def _clear_board(self):
        self._blocks = []
        self._round_started_at = None

    def _schedule(self, name, delay, callback):
        self._timers.schedule(name, delay, callback, self._clock.now())

    def _set_state(self, state):
        if state != self._state:
            logger.info('[state] from=%s to=%s level=%s', self._state.value, state.value, self._score.level)
        self._state = state

    def _notify(self, sink, method, *args):
        # Collaborator failures are logged and dropped; they never touch game state.
        try:
            getattr(sink, method)(*args)
        except Exception:
            logger.exception('[sink-error] sink=%s method=%s', type(sink).__name__, method)
