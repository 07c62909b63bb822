import os
from dataclasses import dataclass

from .models import DigitMagnitude, DigitRange, OperationCategory, TierDefinition

ADD = OperationCategory.ADDITION
SUB = OperationCategory.SUBTRACTION
MUL = OperationCategory.MULTIPLICATION
DIV = OperationCategory.DIVISION
FRAC = OperationCategory.FRACTION
IMPROPER = OperationCategory.IMPROPER_FRACTION
PERCENT = OperationCategory.PERCENTAGE
METRIC = OperationCategory.METRIC_CONVERSION

# ------------------------
# Time budget
# ------------------------
BASE_TIME = 10.0        # seconds at the start of every tier
TIME_DECAY = 0.9        # multiplier applied once per level inside a tier
MIN_TIME = 2.0
LEVELS_PER_TIER = 5

ANSWERS_PER_LEVEL = 10  # correct hits needed to level up
ANSWER_CHOICES = 3      # blocks per round: 1 correct + 2 distractors

MAX_GENERATION_ATTEMPTS = 50

# ------------------------
# Tier table
# ------------------------
# Six themes repeat at each digit magnitude; the final tier mixes everything.
_THEMES = [
    ((ADD, SUB), 'Basic addition and subtraction'),
    ((ADD, SUB, MUL, DIV), 'All basic operations'),
    ((MUL, DIV, FRAC), 'Adding proper fractions'),
    ((DIV, FRAC, IMPROPER), 'Adding improper fractions and mixed numbers'),
    ((FRAC, IMPROPER, PERCENT), 'Adding percentages'),
    ((IMPROPER, PERCENT, METRIC), 'Adding metric conversions'),
]


def _build_tiers():
    tiers = []
    for magnitude in (DigitMagnitude.SINGLE, DigitMagnitude.DOUBLE, DigitMagnitude.TRIPLE):
        for operations, text in _THEMES:
            number = len(tiers) + 1
            first = (number - 1) * LEVELS_PER_TIER + 1
            tiers.append(TierDefinition(
                tier=number,
                level_range=(first, first + LEVELS_PER_TIER - 1),
                operations=operations,
                digit_magnitude=magnitude,
                reset_time=True,
                description=f'{text} with {magnitude.value} digits',
            ))
    first = len(tiers) * LEVELS_PER_TIER + 1
    tiers.append(TierDefinition(
        tier=len(tiers) + 1,
        level_range=(first, first + 2 * LEVELS_PER_TIER - 1),
        operations=tuple(OperationCategory),
        digit_magnitude=DigitMagnitude.TRIPLE,
        reset_time=True,
        description='Mixed review of every operation',
    ))
    return tuple(tiers)


TIERS = _build_tiers()

# ------------------------
# Number ranges
# ------------------------
DIGIT_RANGES = {
    DigitMagnitude.SINGLE: DigitRange(1, 9),
    DigitMagnitude.DOUBLE: DigitRange(10, 99),
    DigitMagnitude.TRIPLE: DigitRange(100, 999),
}

# (largest small factor, largest other factor)
MULTIPLICATION_LIMITS = {
    DigitMagnitude.SINGLE: (9, 9),
    DigitMagnitude.DOUBLE: (12, 99),
    DigitMagnitude.TRIPLE: (12, 999),
}

# (largest divisor, largest quotient)
DIVISION_LIMITS = {
    DigitMagnitude.SINGLE: (9, 9),
    DigitMagnitude.DOUBLE: (12, 99),
    DigitMagnitude.TRIPLE: (12, 999),
}

# ------------------------
# Domain tables
# ------------------------
FRACTION_DENOMINATORS = (2, 3, 4, 5, 6, 8, 10, 12)
FRACTION_TYPE_WEIGHTS = {
    'arithmetic': 40,       # a/b + c/d, a/b - c/d
    'simplification': 30,   # Simplify 6/8
    'of_number': 30,        # 1/2 of 16
}
IMPROPER_TYPE_WEIGHTS = {
    'arithmetic': 40,
    'mixed_to_improper': 30,
    'improper_to_mixed': 30,
}

COMMON_PERCENTAGES = (5, 10, 15, 20, 25, 30, 40, 50, 60, 75, 80, 90, 100)
PERCENTAGE_TYPE_WEIGHTS = {
    'percentage_of': 50,    # What is 25% of 80?
    'what_percent': 50,     # 20 is what % of 80?
}


@dataclass(frozen=True)
class MetricConversion:
    factor: int
    from_unit: str
    to_unit: str


METRIC_CONVERSIONS = {
    # Length
    'km_m': MetricConversion(1000, 'km', 'm'),
    'm_cm': MetricConversion(100, 'm', 'cm'),
    'cm_mm': MetricConversion(10, 'cm', 'mm'),
    'm_mm': MetricConversion(1000, 'm', 'mm'),
    # Weight
    'kg_g': MetricConversion(1000, 'kg', 'g'),
    'g_mg': MetricConversion(1000, 'g', 'mg'),
    # Volume
    'L_mL': MetricConversion(1000, 'L', 'mL'),
    # Area
    'km2_m2': MetricConversion(1000000, 'km²', 'm²'),
    'm2_cm2': MetricConversion(10000, 'm²', 'cm²'),
}
ENABLED_CONVERSIONS = ('km_m', 'm_cm', 'cm_mm', 'kg_g', 'g_mg', 'L_mL', 'm2_cm2')

# Static selection weights; higher means more likely.
OPERATION_WEIGHTS = {
    ADD: 20,
    SUB: 20,
    MUL: 15,
    DIV: 15,
    FRAC: 10,
    IMPROPER: 8,
    PERCENT: 7,
    METRIC: 5,
}
DEFAULT_OPERATION_WEIGHT = 10

# ------------------------
# Board & session
# ------------------------
BOARD_WIDTH = 500
BOARD_HEIGHT = 700
FPS = 60

HUD_HEIGHT = 50
PROBLEM_AREA_HEIGHT = 60
SHIP_ZONE_HEIGHT = 100
HUD_MARGINS = HUD_HEIGHT + PROBLEM_AREA_HEIGHT + SHIP_ZONE_HEIGHT

BLOCK_START_Y = 80
BLOCK_WIDTH = 100
BLOCK_HEIGHT = 50
BLOCK_PADDING = 30      # left/right board padding for the answer row
HIT_PADDING = 5

SHIP_WIDTH = 60
SHIP_OFFSET = 100       # ship sits this far above the bottom edge
PLAYER_SPEED = 8
PROJECTILE_SPEED = 10
PROJECTILE_SPAWN_OFFSET = 120

INITIAL_LIVES = 3
COUNTDOWN_START = 3
COUNTDOWN_TICK_SECONDS = 0.8
LEVEL_UP_SECONDS = 2.0
HIT_FLASH_SECONDS = 0.3
WRONG_ANSWER_COOLDOWN_SECONDS = 0.1


def _env(name, default, cast):
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    return cast(raw)


@dataclass
class GameSettings:
    """Per-session geometry and timing. Defaults mirror the module constants."""
    board_width: int = BOARD_WIDTH
    board_height: int = BOARD_HEIGHT
    fps: int = FPS
    block_width: int = BLOCK_WIDTH
    block_height: int = BLOCK_HEIGHT
    block_start_y: int = BLOCK_START_Y
    hud_margins: int = HUD_MARGINS
    initial_lives: int = INITIAL_LIVES
    answers_per_level: int = ANSWERS_PER_LEVEL
    answer_choices: int = ANSWER_CHOICES
    countdown_start: int = COUNTDOWN_START
    countdown_tick_seconds: float = COUNTDOWN_TICK_SECONDS
    level_up_seconds: float = LEVEL_UP_SECONDS
    hit_flash_seconds: float = HIT_FLASH_SECONDS
    wrong_answer_cooldown_seconds: float = WRONG_ANSWER_COOLDOWN_SECONDS

    @property
    def impact_line(self):
        # A block starting at block_start_y covers exactly the fall distance.
        return self.block_start_y + (self.board_height - self.hud_margins)

    @classmethod
    def from_env(cls):
        return cls(
            board_width=_env('ASTROMATH_BOARD_WIDTH', BOARD_WIDTH, int),
            board_height=_env('ASTROMATH_BOARD_HEIGHT', BOARD_HEIGHT, int),
            fps=_env('ASTROMATH_FPS', FPS, int),
            initial_lives=_env('ASTROMATH_INITIAL_LIVES', INITIAL_LIVES, int),
            level_up_seconds=_env('ASTROMATH_LEVEL_UP_SECONDS', LEVEL_UP_SECONDS, float),
            countdown_tick_seconds=_env('ASTROMATH_COUNTDOWN_TICK_SECONDS', COUNTDOWN_TICK_SECONDS, float),
        )
