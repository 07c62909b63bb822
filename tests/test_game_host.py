import os
import random

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pygame
import pytest

import game
from astromath import config
from astromath.clock import FakeClock
from astromath.models import GameState


class Held(dict):
    """Stand-in for pygame.key.get_pressed(): unlisted keys read as released."""

    def __missing__(self, key):
        return False


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.fixture()
def host():
    clock = FakeClock()
    app = game.AstroMathGame(clock=clock, rng=random.Random(3))
    app.fake_clock = clock
    yield app
    pygame.quit()


def tick(app, frames=1, pressed=None):
    for _ in range(frames):
        app.fake_clock.advance(1.0 / app.settings.fps)
        app.step(pressed)
        app.draw()


def start(app):
    app.handle_event(key(pygame.K_SPACE))
    while app.session.state == GameState.COUNTDOWN:
        tick(app)
    assert app.session.state == GameState.PLAYING


def test_menu_draws_and_starts_on_space(host):
    assert host.session.state == GameState.MENU
    host.draw()
    host.handle_event(key(pygame.K_SPACE))
    assert host.session.state == GameState.COUNTDOWN
    host.draw()


def test_start_button_click(host):
    btn = host.menu_buttons[0]
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=btn.rect.center)
    host.handle_event(click)
    assert host.session.state == GameState.COUNTDOWN


def test_held_keys_move_the_ship(host):
    start(host)
    x = host.session.player_x
    tick(host, 3, pressed=Held({pygame.K_LEFT: True}))
    assert host.session.player_x == x - 3 * config.PLAYER_SPEED
    tick(host, 1, pressed=Held({pygame.K_d: True}))
    assert host.session.player_x == x - 2 * config.PLAYER_SPEED


def test_space_fires_and_pause_keys(host):
    start(host)
    host.handle_event(key(pygame.K_SPACE))
    assert host.session.projectile is not None

    host.handle_event(key(pygame.K_p))
    assert host.session.state == GameState.PAUSED
    host.draw()
    host.handle_event(key(pygame.K_ESCAPE))
    assert host.session.state == GameState.PLAYING

    host.handle_event(key(pygame.K_p))
    host.handle_event(key(pygame.K_r))
    assert host.session.state == GameState.COUNTDOWN


def test_pause_menu_returns_to_menu(host):
    start(host)
    host.handle_event(key(pygame.K_ESCAPE))
    host.handle_event(key(pygame.K_m))
    assert host.session.state == GameState.MENU


def test_plays_through_to_game_over(host):
    start(host)
    for _ in range(3000):
        tick(host)
        if host.session.state == GameState.GAME_OVER:
            break
    assert host.session.state == GameState.GAME_OVER
    host.draw()
    host.handle_event(key(pygame.K_RETURN))
    assert host.session.state == GameState.COUNTDOWN


def test_quit_event_stops_the_loop(host):
    host.handle_event(pygame.event.Event(pygame.QUIT))
    assert not host.running


def test_missing_sound_files_are_skipped(tmp_path):
    assert game.load_sounds(['correct', 'wrong'], sfx_dir=str(tmp_path)) == {}
