"""Level resolution: which tier a level belongs to and what it asks of the player.

Level numbers are produced by the session, never typed in by a player, so
anything below 1 quietly resolves to the first tier instead of raising.
"""
import random

from . import config
from .models import LevelConfig, OperationCategory


def _tier_index(level):
    if level is None or level < 1:
        return 0
    for idx, tier in enumerate(config.TIERS):
        if tier.contains(level):
            return idx
    # Past the table: keep the last tier's rules
    return len(config.TIERS) - 1


def tier_for_level(level):
    return config.TIERS[_tier_index(level)]


def _decay_run_start(idx):
    # A tier without reset_time carries on its predecessor's decay.
    while idx > 0 and not config.TIERS[idx].reset_time:
        idx -= 1
    return config.TIERS[idx].level_range[0]


def time_for_level(level) -> float:
    """Seconds a block takes to reach the impact line on ``level``.

    Decays by TIME_DECAY per level inside a tier, snaps back to BASE_TIME on
    the first level of each tier, and never drops below MIN_TIME. Beyond the
    last tier the exponent simply keeps growing from that tier's first level.
    """
    if level is None or level < 1:
        return config.BASE_TIME
    steps = level - _decay_run_start(_tier_index(level))
    return max(config.MIN_TIME, config.BASE_TIME * config.TIME_DECAY ** steps)


def tier_number(level) -> int:
    return tier_for_level(level).tier


def operations_for_level(level):
    return tier_for_level(level).operations


def digit_magnitude_for_level(level):
    return tier_for_level(level).digit_magnitude


def digit_range_for_level(level):
    return config.DIGIT_RANGES[digit_magnitude_for_level(level)]


def level_config(level) -> LevelConfig:
    tier = tier_for_level(level)
    return LevelConfig(
        level=level if level and level >= 1 else 1,
        tier=tier.tier,
        time_available=time_for_level(level),
        operations=tier.operations,
        digit_magnitude=tier.digit_magnitude,
        digit_range=config.DIGIT_RANGES[tier.digit_magnitude],
    )


def fall_speed(board_height, time_available, fps=config.FPS, hud_margins=config.HUD_MARGINS) -> float:
    """Pixels per frame so a block covers the play area in ``time_available`` seconds."""
    frames = time_available * fps
    return (board_height - hud_margins) / frames


def select_operation(operations, rng=random):
    """Weighted pick from ``operations`` using the static OPERATION_WEIGHTS."""
    if not operations:
        return OperationCategory.ADDITION
    weights = [config.OPERATION_WEIGHTS.get(op, config.DEFAULT_OPERATION_WEIGHT) for op in operations]
    roll = rng.random() * sum(weights)
    for op, weight in zip(operations, weights):
        roll -= weight
        if roll <= 0:
            return op
    return operations[-1]


def tier_description(level):
    return tier_for_level(level).description


def is_new_tier(level):
    if level is None or level <= 1:
        return True
    return tier_number(level) != tier_number(level - 1)


def next_tier_start_level(level):
    """First level of the tier after ``level``'s; None once past the table."""
    idx = _tier_index(level)
    if idx + 1 >= len(config.TIERS):
        return None
    return config.TIERS[idx + 1].level_range[0]
