"""Proper and improper fraction problems.

Sub-types: fraction arithmetic (a/b + c/d, a/b - c/d), simplification,
"fraction of a whole number" and, for improper mode, mixed number <->
improper fraction conversion. Every surfaced answer is in lowest terms.
"""
import logging
import random

from .. import config
from .. import fraction_math as fm
from ..fraction_math import Fraction
from ..models import Answer, AnswerFormat, MathProblem, OperationCategory
from .common import DistractorPicker, weighted_choice

logger = logging.getLogger(__name__)


def _fraction_answer(result, operation, operand1, operand2, display):
    result = fm.simplify(result)
    if result.denominator == 1:
        correct, answer_format = result.numerator, AnswerFormat.NUMBER
    else:
        correct, answer_format = fm.format_fraction(result), AnswerFormat.FRACTION
    return MathProblem(
        operand1=operand1,
        operand2=operand2,
        operation=operation,
        correct_answer=correct,
        numeric_answer=fm.to_decimal(result),
        display_string=display,
        answer_format=answer_format,
    )


def _compatible_denominator(denominator, rng):
    options = [d for d in config.FRACTION_DENOMINATORS if d % denominator == 0 or denominator % d == 0]
    return rng.choice(options)


def generate_fraction_arithmetic(proper=True, rng=random):
    operation = OperationCategory.FRACTION if proper else OperationCategory.IMPROPER_FRACTION
    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        d1 = rng.choice(config.FRACTION_DENOMINATORS)
        d2 = _compatible_denominator(d1, rng)
        if proper:
            first = fm.random_proper_fraction([d1], rng)
            second = fm.random_proper_fraction([d2], rng)
        else:
            first = fm.random_improper_fraction([d1], 3, rng)
            second = fm.random_proper_fraction([d2], rng)

        if rng.random() < 0.5:
            result, symbol = fm.add(first, second), '+'
        else:
            if fm.to_decimal(first) < fm.to_decimal(second):
                first, second = second, first
            result, symbol = fm.subtract(first, second), '-'
        if result.numerator <= 0:
            continue

        a, b = fm.format_fraction(first), fm.format_fraction(second)
        return _fraction_answer(result, operation, a, b, f'{a} {symbol} {b} = ?')

    logger.debug('[retry-exhausted] operation=%s', operation.value)
    first, second = Fraction(1, 2), Fraction(1, 4)
    return _fraction_answer(fm.add(first, second), operation, '1/2', '1/4', '1/2 + 1/4 = ?')


def generate_simplification(rng=random):
    target = fm.random_proper_fraction(config.FRACTION_DENOMINATORS, rng)
    factor = rng.randint(2, 4)
    unsimplified = Fraction(target.numerator * factor, target.denominator * factor)
    text = fm.format_fraction(unsimplified)
    return _fraction_answer(unsimplified, OperationCategory.FRACTION, text, None, f'Simplify {text} = ?')


def generate_of_number(rng=random):
    """Fraction of a whole number; the whole is a multiple of the denominator."""
    fraction = fm.random_proper_fraction(config.FRACTION_DENOMINATORS, rng)
    whole = fraction.denominator * rng.randint(2, 10)
    answer = fraction.numerator * whole // fraction.denominator
    text = fm.format_fraction(fraction)
    return MathProblem(
        operand1=text,
        operand2=whole,
        operation=OperationCategory.FRACTION,
        correct_answer=answer,
        numeric_answer=answer,
        display_string=f'{text} of {whole} = ?',
        answer_format=AnswerFormat.NUMBER,
    )


def generate_mixed_to_improper(rng=random):
    part = fm.simplify(fm.random_proper_fraction(config.FRACTION_DENOMINATORS, rng))
    whole = rng.randint(1, 5)
    improper = fm.to_improper_fraction(whole, part)
    mixed = fm.format_mixed_number(whole, part)
    return MathProblem(
        operand1=mixed,
        operand2=None,
        operation=OperationCategory.IMPROPER_FRACTION,
        correct_answer=fm.format_fraction(improper),
        numeric_answer=fm.to_decimal(improper),
        display_string=f'Convert {mixed} to improper = ?',
        answer_format=AnswerFormat.FRACTION,
    )


def generate_improper_to_mixed(rng=random):
    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        denominator = rng.choice(config.FRACTION_DENOMINATORS)
        whole = rng.randint(1, 5)
        remainder = rng.randint(1, denominator - 1)
        improper = fm.simplify(Fraction(whole * denominator + remainder, denominator))
        mixed = fm.to_mixed_number(improper)
        if mixed is None or mixed.fraction.numerator == 0:
            continue
        text = fm.format_fraction(improper)
        return MathProblem(
            operand1=text,
            operand2=None,
            operation=OperationCategory.IMPROPER_FRACTION,
            correct_answer=fm.format_mixed_number(mixed.whole, mixed.fraction),
            numeric_answer=fm.to_decimal(improper),
            display_string=f'Convert {text} to mixed = ?',
            answer_format=AnswerFormat.MIXED,
        )
    logger.debug('[retry-exhausted] operation=improper_to_mixed')
    return generate_fraction_arithmetic(proper=False, rng=rng)


def generate_proper_fraction_problem(rng=random):
    kind = weighted_choice(config.FRACTION_TYPE_WEIGHTS, rng)
    if kind == 'simplification':
        return generate_simplification(rng)
    if kind == 'of_number':
        return generate_of_number(rng)
    return generate_fraction_arithmetic(proper=True, rng=rng)


def generate_improper_fraction_problem(rng=random):
    kind = weighted_choice(config.IMPROPER_TYPE_WEIGHTS, rng)
    if kind == 'mixed_to_improper':
        return generate_mixed_to_improper(rng)
    if kind == 'improper_to_mixed':
        return generate_improper_to_mixed(rng)
    return generate_fraction_arithmetic(proper=False, rng=rng)


# ------------------------
# Distractors
# ------------------------
def _fraction_choice(fraction):
    return Answer(AnswerFormat.FRACTION, fm.to_decimal(fraction), fm.format_fraction(fraction))


def _mixed_choice(fraction):
    mixed = fm.to_mixed_number(fraction)
    if mixed is None:
        return None
    return Answer(AnswerFormat.MIXED, fm.to_decimal(fraction), fm.format_mixed_number(mixed.whole, mixed.fraction))


def _whole_number_distractors(answer, count, rng):
    answer = int(answer)
    picker = DistractorPicker(answer, count)
    max_offset = max(3, int(answer * 0.2)) + 1
    for _ in range(config.MAX_GENERATION_ATTEMPTS):
        if picker.full:
            break
        offset = rng.randint(-max_offset, max_offset) or rng.randint(1, 2)
        picker.offer_number(answer + offset)
    step = 1
    while not picker.full:
        picker.offer_number(answer + step)
        step += 1
    return picker.answers


def _fraction_distractors(correct, count):
    n, d = correct.numerator, correct.denominator
    picker = DistractorPicker(fm.to_decimal(correct), count)
    # wrong numerator, wrong denominator, doubled form
    candidates = [(n + 1, d), (n - 1, d), (n, d + 1), (n, d - 1), (n * 2, d * 2)]
    for num, den in candidates:
        if num > 0 and den > 1:
            picker.offer(_fraction_choice(Fraction(num, den)))
    step = 1
    while not picker.full:
        picker.offer(_fraction_choice(Fraction(n + step, d)))
        step += 1
    return picker.answers


def _mixed_distractors(correct, count):
    mixed = fm.to_mixed_number(correct)
    whole, part = mixed.whole, mixed.fraction
    picker = DistractorPicker(fm.to_decimal(correct), count)
    candidates = [
        fm.to_improper_fraction(whole + 1, part),
        fm.to_improper_fraction(whole - 1, part),
        fm.to_improper_fraction(whole, Fraction(part.numerator + 1, part.denominator)),
        fm.to_improper_fraction(whole, Fraction(part.numerator - 1, part.denominator)),
    ]
    for candidate in candidates:
        choice = _mixed_choice(candidate)
        if choice is not None and 0 < candidate.numerator % candidate.denominator:
            picker.offer(choice)
    step = 2
    while not picker.full:
        picker.offer(_mixed_choice(fm.to_improper_fraction(whole + step, part)))
        step += 1
    return picker.answers


def generate_fraction_distractors(problem, count=2, rng=random):
    if problem.answer_format == AnswerFormat.FRACTION:
        return _fraction_distractors(fm.parse_fraction(problem.correct_answer), count)
    if problem.answer_format == AnswerFormat.MIXED:
        return _mixed_distractors(fm.parse_mixed_number(problem.correct_answer), count)
    return _whole_number_distractors(problem.numeric_answer, count, rng)
