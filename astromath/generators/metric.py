"""Metric unit conversions (length, weight, volume, area)."""
import random

from .. import config
from ..models import Answer, AnswerFormat, MathProblem, OperationCategory
from .common import DistractorPicker


def format_metric_answer(value, unit):
    if float(value).is_integer():
        return f'{int(value):,} {unit}'
    return f'{value:,} {unit}'


def parse_metric_answer(text):
    """Numeric part of a "5,000 m" style string."""
    number = text.strip().split()[0]
    return float(number.replace(',', ''))


def _unit_of(text):
    return text.strip().split(None, 1)[1]


def random_conversion(rng=random):
    key = rng.choice(config.ENABLED_CONVERSIONS)
    return config.METRIC_CONVERSIONS[key]


def generate_metric_conversion_problem(rng=random):
    conversion = random_conversion(rng)
    # The larger-unit amount is drawn first, so dividing back is always exact.
    amount = rng.randint(1, 20)
    converted = amount * conversion.factor
    if rng.random() < 0.5:
        value, source, answer, target = amount, conversion.from_unit, converted, conversion.to_unit
    else:
        value, source, answer, target = converted, conversion.to_unit, amount, conversion.from_unit

    shown = format_metric_answer(value, source)
    return MathProblem(
        operand1=shown,
        operand2=None,
        operation=OperationCategory.METRIC_CONVERSION,
        correct_answer=format_metric_answer(answer, target),
        numeric_answer=answer,
        display_string=f'Convert {shown} to {target} = ?',
        answer_format=AnswerFormat.UNIT,
    )


def generate_metric_distractors(problem, count=2, rng=random):
    """Wrong power of ten first, then near misses."""
    answer = problem.numeric_answer
    unit = _unit_of(problem.correct_answer)
    picker = DistractorPicker(answer, count)

    def offer(value):
        return picker.offer(Answer(AnswerFormat.UNIT, value, format_metric_answer(value, unit)))

    mistakes = [
        answer * 10, answer / 10,
        answer * 100, answer / 100,
        answer * 1000, answer / 1000,
        answer * 1.1, answer * 0.9,
    ]
    rng.shuffle(mistakes)
    for mistake in mistakes:
        offer(round(mistake))

    offset = 1
    while not picker.full and offset <= 100:
        offer(answer + offset)
        offer(answer - offset)
        offset += 1

    step = offset
    while not picker.full:
        offer(answer + step)
        step += 1
    return picker.answers
