import random

import pytest

from astromath import config
from astromath.generators import metric
from astromath.models import AnswerFormat


@pytest.mark.parametrize('value,unit,text', [
    (5000, 'm', '5,000 m'),
    (12, 'kg', '12 kg'),
    (20000.0, 'mL', '20,000 mL'),
    (0.5, 'km', '0.5 km'),
    (1000000, 'm²', '1,000,000 m²'),
])
def test_format_metric_answer(value, unit, text):
    assert metric.format_metric_answer(value, unit) == text
    assert metric.parse_metric_answer(text) == value


def test_format_parse_round_trip():
    rng = random.Random(2)
    for _ in range(300):
        value = rng.randint(1, 20) * rng.choice((1, 10, 100, 1000, 10000))
        assert metric.parse_metric_answer(metric.format_metric_answer(value, 'cm')) == value


def expected_value(problem):
    # "Convert 5,000 m to km = ?"
    tokens = problem.display_string.split()
    amount, source, target = metric.parse_metric_answer(tokens[1]), tokens[2], tokens[4]
    for conversion in config.METRIC_CONVERSIONS.values():
        if (conversion.from_unit, conversion.to_unit) == (source, target):
            return amount * conversion.factor
        if (conversion.from_unit, conversion.to_unit) == (target, source):
            return amount / conversion.factor
    raise AssertionError(f'no conversion for {source} -> {target}')


def test_conversion_problems_are_exact():
    rng = random.Random(12)
    for _ in range(500):
        p = metric.generate_metric_conversion_problem(rng)
        assert p.answer_format == AnswerFormat.UNIT
        assert p.numeric_answer == expected_value(p)
        assert float(p.numeric_answer).is_integer()
        assert metric.parse_metric_answer(p.correct_answer) == p.numeric_answer


def test_only_enabled_conversions_are_used():
    rng = random.Random(13)
    enabled = {config.METRIC_CONVERSIONS[key] for key in config.ENABLED_CONVERSIONS}
    for _ in range(200):
        assert metric.random_conversion(rng) in enabled


@pytest.mark.parametrize('seed', range(50))
def test_distractors_share_the_unit(seed):
    rng = random.Random(seed)
    p = metric.generate_metric_conversion_problem(rng)
    unit = p.correct_answer.split(None, 1)[1]
    wrong = metric.generate_metric_distractors(p, count=2, rng=rng)
    values = [w.numeric_value for w in wrong]
    assert len(set(values)) == 2
    assert p.numeric_answer not in values
    assert all(v > 0 for v in values)
    for w in wrong:
        assert w.format == AnswerFormat.UNIT
        assert w.display.endswith(' ' + unit)
        assert metric.parse_metric_answer(w.display) == w.numeric_value
