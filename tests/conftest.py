import os
import random
import sys

import pytest

# Make the repo root (holding `astromath` and `game.py`) importable without an install
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from astromath import config
from astromath.clock import FakeClock
from astromath.config import GameSettings
from astromath.models import GameState
from astromath.session import GameSession
from astromath.sinks import FeedbackSink, StatsSink


class RecordingStats(StatsSink):
    def __init__(self):
        self.reports = []

    def report_game_over(self, final_score, final_level, correct_count):
        self.reports.append((final_score, final_level, correct_count))


class RecordingFeedback(FeedbackSink):
    def __init__(self):
        self.events = []

    def _record(self, name, *args):
        self.events.append((name, args))

    def on_game_start(self):
        self._record('on_game_start')

    def on_round_start(self, level, operation):
        self._record('on_round_start', level, operation)

    def on_correct_hit(self, level, operation, new_score):
        self._record('on_correct_hit', level, operation, new_score)

    def on_wrong_hit(self, level, operation, lives_remaining):
        self._record('on_wrong_hit', level, operation, lives_remaining)

    def on_missed(self, level, operation, lives_remaining):
        self._record('on_missed', level, operation, lives_remaining)

    def on_level_up(self, new_level, tier, score):
        self._record('on_level_up', new_level, tier, score)

    def on_tier_changed(self, tier, description):
        self._record('on_tier_changed', tier, description)

    def on_pause(self, level, score):
        self._record('on_pause', level, score)

    def on_resume(self, level, score):
        self._record('on_resume', level, score)

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [args for event, args in self.events if event == name]


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def stats():
    return RecordingStats()


@pytest.fixture()
def feedback():
    return RecordingFeedback()


@pytest.fixture()
def make_session(rng, clock, stats, feedback):
    def _make(**overrides):
        settings = GameSettings(**overrides)
        return GameSession(settings=settings, stats_sink=stats, feedback_sink=feedback, clock=clock, rng=rng)
    return _make


@pytest.fixture()
def session(make_session):
    return make_session()


def frame(session, clock, frames=1):
    """Advance the fake clock one frame at a time, updating after each."""
    for _ in range(frames):
        clock.advance(1.0 / session.settings.fps)
        session.update()


def play(session, clock):
    """Start a game and run the countdown until the first round is on the board."""
    session.start_game()
    while session.state == GameState.COUNTDOWN:
        frame(session, clock)
    assert session.state == GameState.PLAYING
    assert session.answer_blocks


def shoot(session, clock, correct=True):
    """Line the ship up under a correct (or wrong) block, fire, and fly the shot out."""
    target = next(b for b in session.answer_blocks if b.is_correct == correct)
    while abs(session.player_x - target.x) >= config.PLAYER_SPEED:
        session.move_player(1 if target.x > session.player_x else -1)
    assert session.fire_projectile()
    while session.projectile is not None:
        frame(session, clock)
