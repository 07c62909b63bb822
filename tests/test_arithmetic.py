import random

import pytest

from astromath.generators import arithmetic
from astromath.models import AnswerFormat, DigitMagnitude, OperationCategory

ADD = OperationCategory.ADDITION
SUB = OperationCategory.SUBTRACTION
MUL = OperationCategory.MULTIPLICATION
DIV = OperationCategory.DIVISION


def recompute(problem):
    a, b = problem.operand1, problem.operand2
    return {
        ADD: lambda: a + b,
        SUB: lambda: a - b,
        MUL: lambda: a * b,
        DIV: lambda: a / b,
    }[problem.operation]()


def test_single_digit_addition_bounds():
    rng = random.Random(42)
    for _ in range(1000):
        p = arithmetic.generate_addition(DigitMagnitude.SINGLE, rng)
        assert 1 <= p.operand1 <= 9
        assert 1 <= p.operand2 <= 9
        assert 2 <= p.correct_answer <= 18
        assert p.numeric_answer == p.operand1 + p.operand2


@pytest.mark.parametrize('magnitude', list(DigitMagnitude))
def test_subtraction_result_is_positive(magnitude):
    rng = random.Random(9)
    for _ in range(500):
        p = arithmetic.generate_subtraction(magnitude, rng)
        assert p.operand1 > p.operand2
        assert p.correct_answer == p.operand1 - p.operand2 > 0


@pytest.mark.parametrize('operation', [ADD, SUB, MUL, DIV])
@pytest.mark.parametrize('magnitude', list(DigitMagnitude))
def test_numeric_answer_matches_expression(operation, magnitude):
    rng = random.Random(21)
    for _ in range(200):
        p = arithmetic.generate_arithmetic_problem(operation, magnitude, rng)
        assert p.numeric_answer == recompute(p)
        assert p.answer_format == AnswerFormat.NUMBER
        assert p.display_string == f'{p.operand1} {arithmetic.SYMBOLS[operation]} {p.operand2} = ?'


def test_division_is_exact():
    rng = random.Random(2)
    for magnitude in DigitMagnitude:
        for _ in range(200):
            p = arithmetic.generate_division(magnitude, rng)
            assert p.operand1 % p.operand2 == 0
            assert p.correct_answer >= 2


def test_multiplication_keeps_a_small_factor():
    rng = random.Random(4)
    for _ in range(200):
        p = arithmetic.generate_multiplication(DigitMagnitude.TRIPLE, rng)
        assert 2 <= p.operand1 <= 12


def test_unknown_operation_falls_back_to_addition():
    p = arithmetic.generate_arithmetic_problem(OperationCategory.PERCENTAGE, DigitMagnitude.SINGLE, random.Random(1))
    assert p.operation == ADD


@pytest.mark.parametrize('answer', [1, 2, 7, 45, 100, 998])
@pytest.mark.parametrize('operation', [ADD, SUB, MUL, DIV])
def test_distractors_are_valid(answer, operation):
    rng = random.Random(answer)
    wrong = arithmetic.generate_arithmetic_distractors(answer, operation, count=2, rng=rng)
    values = [w.numeric_value for w in wrong]
    assert len(values) == 2
    assert len(set(values)) == 2
    assert answer not in values
    assert all(v > 0 for v in values)
    assert all(w.format == AnswerFormat.NUMBER for w in wrong)
    assert all(w.display == str(w.numeric_value) for w in wrong)


def test_distractors_can_fill_larger_sets():
    wrong = arithmetic.generate_arithmetic_distractors(3, ADD, count=6, rng=random.Random(0))
    assert len({w.numeric_value for w in wrong}) == 6


def test_division_distractors_prefer_off_by_one():
    wrong = arithmetic.generate_arithmetic_distractors(6, DIV, count=2, rng=random.Random(0))
    assert [w.numeric_value for w in wrong] == [7, 5]
