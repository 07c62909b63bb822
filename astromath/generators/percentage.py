import logging
import math
import random

from .. import config
from ..models import AnswerFormat, MathProblem, OperationCategory
from .common import DistractorPicker, weighted_choice

logger = logging.getLogger(__name__)


def generate_percentage_of(rng=random):
    """What is X% of Y? Y is a multiple of 100/gcd(X, 100), so the answer is whole."""
    percentage = rng.choice(config.COMMON_PERCENTAGES)
    step = 100 // math.gcd(percentage, 100)
    base = step * rng.randint(1, 20)
    answer = percentage * base // 100
    return MathProblem(
        operand1=percentage,
        operand2=base,
        operation=OperationCategory.PERCENTAGE,
        correct_answer=answer,
        numeric_answer=answer,
        display_string=f'What is {percentage}% of {base}?',
        answer_format=AnswerFormat.NUMBER,
    )


def generate_what_percent(rng=random):
    """A is what % of B? A is a clean percentage of a round B."""
    percentage = rng.choice(config.COMMON_PERCENTAGES)
    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        base = rng.randint(2, 20) * 10
        if (percentage * base) % 100 == 0:
            break
    else:
        logger.debug('[retry-exhausted] operation=what_percent percentage=%s', percentage)
        base = 100 * rng.randint(1, 5)
    part = percentage * base // 100
    return MathProblem(
        operand1=part,
        operand2=base,
        operation=OperationCategory.PERCENTAGE,
        correct_answer=percentage,
        numeric_answer=percentage,
        display_string=f'{part} is what % of {base}?',
        answer_format=AnswerFormat.PERCENTAGE,
    )


def generate_percentage_problem(rng=random):
    if weighted_choice(config.PERCENTAGE_TYPE_WEIGHTS, rng) == 'what_percent':
        return generate_what_percent(rng)
    return generate_percentage_of(rng)


def generate_percentage_distractors(problem, count=2, rng=random):
    answer = int(problem.numeric_answer)
    if problem.answer_format == AnswerFormat.PERCENTAGE:
        suffix = '%'
        mistakes = [p for p in config.COMMON_PERCENTAGES if p != answer and abs(p - answer) <= 25]
        mistakes += [answer * 2, answer // 2]
    else:
        suffix = ''
        mistakes = [
            answer * 2,
            answer // 2,
            answer * 10,                       # factor-of-10 slip
            answer // 10,
            answer + 5, answer - 5,
            answer + 10, answer - 10,
        ]
        if isinstance(problem.operand1, int) and isinstance(problem.operand2, int):
            mistakes.append(problem.operand1 * problem.operand2)   # forgot to divide by 100
    rng.shuffle(mistakes)

    picker = DistractorPicker(answer, count)
    for value in mistakes:
        picker.offer_number(value, problem.answer_format, suffix)

    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        if picker.full:
            break
        offset = rng.randint(-20, 20)
        if offset:
            picker.offer_number(answer + offset, problem.answer_format, suffix)

    step = 1
    while not picker.full:
        picker.offer_number(answer + step, problem.answer_format, suffix)
        step += 1
    return picker.answers
