import random

import pytest

from astromath import config, levels
from astromath.generators import generate_answer_blocks, generate_distractors, generate_problem
from astromath.generators.orchestrator import block_positions, generate_problem_for_operation, shuffle
from astromath.models import OperationCategory


def test_problem_operation_belongs_to_level():
    rng = random.Random(99)
    for level in range(1, 121, 3):
        for _ in range(10):
            p = generate_problem(level, rng)
            assert p.operation in levels.operations_for_level(level)


@pytest.mark.parametrize('operation', list(OperationCategory))
def test_every_operation_dispatches(operation):
    rng = random.Random(4)
    cfg = levels.level_config(91)
    p = generate_problem_for_operation(operation, cfg, rng)
    assert p.operation == operation
    wrong = generate_distractors(p, 2, rng)
    assert len(wrong) == 2


def test_block_positions():
    assert block_positions(3, 500, 100) == [80, 250, 420]
    assert block_positions(1, 500, 100) == [250]
    xs = block_positions(4, 600, 100)
    assert xs[0] == pytest.approx(config.BLOCK_PADDING + 50)
    assert xs[-1] == pytest.approx(600 - config.BLOCK_PADDING - 50)


def test_answer_blocks_have_exactly_one_correct():
    rng = random.Random(8)
    for level in (1, 13, 28, 50, 95):
        for _ in range(30):
            p = generate_problem(level, rng)
            blocks = generate_answer_blocks(p, 500, 100, 80, rng)
            assert len(blocks) == config.ANSWER_CHOICES
            correct = [b for b in blocks if b.is_correct]
            assert len(correct) == 1
            assert correct[0].numeric_value == p.numeric_answer
            assert correct[0].display_value == p.answer.display
            values = [b.numeric_value for b in blocks]
            assert len(set(values)) == len(values)
            assert all(b.y == 80 for b in blocks)
            assert all(b.answer_format == p.answer_format for b in blocks)


def test_block_ids_are_unique():
    rng = random.Random(1)
    ids = set()
    for _ in range(50):
        blocks = generate_answer_blocks(generate_problem(1, rng), 500, 100, 80, rng)
        ids.update(b.id for b in blocks)
    assert len(ids) == 150


def test_correct_block_position_varies():
    rng = random.Random(6)
    slots = set()
    for _ in range(60):
        blocks = generate_answer_blocks(generate_problem(1, rng), 500, 100, 80, rng)
        slots.add(next(i for i, b in enumerate(blocks) if b.is_correct))
    assert slots == {0, 1, 2}


def test_custom_choice_count():
    rng = random.Random(2)
    blocks = generate_answer_blocks(generate_problem(3, rng), 500, 100, 80, rng, choices=4)
    assert len(blocks) == 4
    assert sum(b.is_correct for b in blocks) == 1


def test_single_choice_is_centred():
    rng = random.Random(2)
    blocks = generate_answer_blocks(generate_problem(1, rng), 500, 100, 80, rng, choices=1)
    assert len(blocks) == 1
    assert blocks[0].is_correct
    assert blocks[0].x == 250


def test_shuffle_keeps_items():
    items = list(range(10))
    shuffle(items, random.Random(0))
    assert sorted(items) == list(range(10))
