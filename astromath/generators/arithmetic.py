"""Addition, subtraction, multiplication and division with level-sized operands."""
import logging
import math
import random

from .. import config
from ..models import AnswerFormat, DigitMagnitude, MathProblem, OperationCategory
from .common import DistractorPicker

logger = logging.getLogger(__name__)

SYMBOLS = {
    OperationCategory.ADDITION: '+',
    OperationCategory.SUBTRACTION: '-',
    OperationCategory.MULTIPLICATION: '×',
    OperationCategory.DIVISION: '÷',
}


def _problem(operand1, operand2, operation, answer):
    return MathProblem(
        operand1=operand1,
        operand2=operand2,
        operation=operation,
        correct_answer=answer,
        numeric_answer=answer,
        display_string=f'{operand1} {SYMBOLS[operation]} {operand2} = ?',
        answer_format=AnswerFormat.NUMBER,
    )


def generate_addition(magnitude, rng=random):
    r = config.DIGIT_RANGES[magnitude]
    a = rng.randint(r.min, r.max)
    b = rng.randint(r.min, r.max)
    return _problem(a, b, OperationCategory.ADDITION, a + b)


def generate_subtraction(magnitude, rng=random):
    """Larger operand first; equal draws (a zero result) are redrawn."""
    r = config.DIGIT_RANGES[magnitude]
    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        a = rng.randint(r.min, r.max)
        b = rng.randint(r.min, r.max)
        if a != b:
            big, small = max(a, b), min(a, b)
            return _problem(big, small, OperationCategory.SUBTRACTION, big - small)
    logger.debug('[retry-exhausted] operation=subtraction magnitude=%s', magnitude.value)
    small = rng.randint(r.min, r.max - 1)
    return _problem(small + 1, small, OperationCategory.SUBTRACTION, 1)


def generate_multiplication(magnitude, rng=random):
    small_max, other_max = config.MULTIPLICATION_LIMITS[magnitude]
    a = rng.randint(2, small_max)
    if magnitude == DigitMagnitude.SINGLE:
        b = rng.randint(2, other_max)
    else:
        # one small factor keeps the product mentally reachable
        r = config.DIGIT_RANGES[magnitude]
        b = rng.randint(r.min, min(r.max, other_max))
    return _problem(a, b, OperationCategory.MULTIPLICATION, a * b)


def generate_division(magnitude, rng=random):
    """Dividend is built as divisor * quotient so the answer is always whole."""
    divisor_max, quotient_max = config.DIVISION_LIMITS[magnitude]
    divisor = rng.randint(2, divisor_max)
    if magnitude == DigitMagnitude.SINGLE:
        quotient = rng.randint(2, quotient_max)
    else:
        r = config.DIGIT_RANGES[magnitude]
        quotient = rng.randint(2, min(r.max, quotient_max))
    return _problem(divisor * quotient, divisor, OperationCategory.DIVISION, quotient)


_GENERATORS = {
    OperationCategory.ADDITION: generate_addition,
    OperationCategory.SUBTRACTION: generate_subtraction,
    OperationCategory.MULTIPLICATION: generate_multiplication,
    OperationCategory.DIVISION: generate_division,
}


def generate_arithmetic_problem(operation, magnitude, rng=random):
    generator = _GENERATORS.get(operation, generate_addition)
    return generator(magnitude, rng)


def generate_arithmetic_distractors(answer, operation, count=2, rng=random):
    """Plausible wrong integers near ``answer``.

    Operation-specific slips go first, then random offsets whose range widens
    with every unproductive batch, then answer+1, answer+2, ... as a backstop.
    """
    answer = int(answer)
    picker = DistractorPicker(answer, count)

    if operation == OperationCategory.MULTIPLICATION:
        step = math.ceil(answer * 0.1)
        for value in (answer + step, answer - step):
            picker.offer_number(value)
    elif operation == OperationCategory.DIVISION:
        for value in (answer + 1, answer - 1, answer * 2):
            picker.offer_number(value)

    max_offset = max(5, int(abs(answer) * 0.3)) + 3
    for attempt in range(config.MAX_GENERATION_ATTEMPTS):
        if picker.full:
            break
        if attempt and attempt % 10 == 0:
            max_offset *= 2
        offset = rng.randint(-max_offset, max_offset)
        if offset == 0:
            offset = rng.randint(1, 3)
        picker.offer_number(answer + offset)

    step = 1
    while not picker.full:
        picker.offer_number(answer + step)
        step += 1
    return picker.answers
