from astromath import config
from astromath.config import GameSettings


def test_defaults_follow_module_constants():
    s = GameSettings()
    assert (s.board_width, s.board_height, s.fps) == (config.BOARD_WIDTH, config.BOARD_HEIGHT, config.FPS)
    assert s.initial_lives == config.INITIAL_LIVES
    assert s.impact_line == config.BLOCK_START_Y + config.BOARD_HEIGHT - config.HUD_MARGINS


def test_from_env(monkeypatch):
    monkeypatch.setenv('ASTROMATH_INITIAL_LIVES', '5')
    monkeypatch.setenv('ASTROMATH_FPS', '30')
    monkeypatch.setenv('ASTROMATH_LEVEL_UP_SECONDS', '0.5')
    monkeypatch.setenv('ASTROMATH_BOARD_WIDTH', '')
    s = GameSettings.from_env()
    assert s.initial_lives == 5
    assert s.fps == 30
    assert s.level_up_seconds == 0.5
    assert s.board_width == config.BOARD_WIDTH


def test_tier_table_shape():
    assert len(config.TIERS) == 19
    assert config.TIERS[-1].level_range == (91, 100)
    assert all(t.level_range[1] - t.level_range[0] + 1 == config.LEVELS_PER_TIER for t in config.TIERS[:-1])


def test_hud_margins_add_up():
    assert config.HUD_MARGINS == config.HUD_HEIGHT + config.PROBLEM_AREA_HEIGHT + config.SHIP_ZONE_HEIGHT
