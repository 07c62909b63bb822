from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class OperationCategory(str, Enum):
    ADDITION = 'addition'
    SUBTRACTION = 'subtraction'
    MULTIPLICATION = 'multiplication'
    DIVISION = 'division'
    FRACTION = 'fraction'
    IMPROPER_FRACTION = 'improper_fraction'
    PERCENTAGE = 'percentage'
    METRIC_CONVERSION = 'metric_conversion'


BASIC_OPERATIONS = (
    OperationCategory.ADDITION,
    OperationCategory.SUBTRACTION,
    OperationCategory.MULTIPLICATION,
    OperationCategory.DIVISION,
)


class DigitMagnitude(str, Enum):
    SINGLE = 'single'
    DOUBLE = 'double'
    TRIPLE = 'triple'


class AnswerFormat(str, Enum):
    NUMBER = 'number'
    FRACTION = 'fraction'
    MIXED = 'mixed'
    PERCENTAGE = 'percentage'
    UNIT = 'unit'


class GameState(str, Enum):
    MENU = 'MENU'
    COUNTDOWN = 'COUNTDOWN'
    PLAYING = 'PLAYING'
    PAUSED = 'PAUSED'
    LEVEL_UP = 'LEVEL_UP'
    GAME_OVER = 'GAME_OVER'


# ------------------------
# Difficulty records
# ------------------------
@dataclass(frozen=True)
class DigitRange:
    min: int
    max: int


@dataclass(frozen=True)
class TierDefinition:
    tier: int
    level_range: Tuple[int, int]
    operations: Tuple[OperationCategory, ...]
    digit_magnitude: DigitMagnitude
    reset_time: bool
    description: str

    def contains(self, level):
        return self.level_range[0] <= level <= self.level_range[1]


@dataclass(frozen=True)
class LevelConfig:
    """Everything the generators and the session need to know about one level."""
    level: int
    tier: int
    time_available: float
    operations: Tuple[OperationCategory, ...]
    digit_magnitude: DigitMagnitude
    digit_range: DigitRange


# ------------------------
# Problems & answers
# ------------------------
@dataclass(frozen=True)
class Answer:
    """One answer choice: how it is shown and the value it stands for.

    Equality checks between answers only ever look at ``numeric_value``.
    """
    format: AnswerFormat
    numeric_value: float
    display: str


Operand = Union[int, str]


@dataclass(frozen=True)
class MathProblem:
    operand1: Operand
    operand2: Optional[Operand]
    operation: OperationCategory
    correct_answer: Union[int, str]
    numeric_answer: float
    display_string: str
    answer_format: AnswerFormat

    @property
    def answer(self):
        return Answer(self.answer_format, self.numeric_answer, format_answer_value(self.correct_answer, self.answer_format))


def format_answer_value(value, answer_format):
    if answer_format == AnswerFormat.PERCENTAGE:
        return f'{value}%'
    return str(value)


@dataclass
class AnswerBlock:
    id: str
    display_value: str
    numeric_value: float
    is_correct: bool
    x: float
    y: float
    answer_format: AnswerFormat


# ------------------------
# Session records
# ------------------------
@dataclass
class Projectile:
    x: float
    y: float
    active: bool = True


@dataclass
class GameScore:
    score: int = 0
    level: int = 1
    lives: int = 3
    correct_in_level: int = 0
