import itertools
import logging
import random

from .. import config
from ..levels import level_config, select_operation
from ..models import AnswerBlock, BASIC_OPERATIONS, OperationCategory
from .arithmetic import generate_arithmetic_distractors, generate_arithmetic_problem
from .fraction import (
    generate_fraction_distractors,
    generate_improper_fraction_problem,
    generate_proper_fraction_problem,
)
from .metric import generate_metric_conversion_problem, generate_metric_distractors
from .percentage import generate_percentage_distractors, generate_percentage_problem

logger = logging.getLogger(__name__)

_block_ids = itertools.count(1)


def generate_problem(level, rng=random):
    """Pick an operation the level allows and build one problem for it."""
    cfg = level_config(level)
    operation = select_operation(cfg.operations, rng)
    problem = generate_problem_for_operation(operation, cfg, rng)
    logger.debug('[problem] level=%s operation=%s display=%r', cfg.level, operation.value, problem.display_string)
    return problem


def generate_problem_for_operation(operation, cfg, rng=random):
    if operation in BASIC_OPERATIONS:
        return generate_arithmetic_problem(operation, cfg.digit_magnitude, rng)
    if operation == OperationCategory.FRACTION:
        return generate_proper_fraction_problem(rng)
    if operation == OperationCategory.IMPROPER_FRACTION:
        return generate_improper_fraction_problem(rng)
    if operation == OperationCategory.PERCENTAGE:
        return generate_percentage_problem(rng)
    if operation == OperationCategory.METRIC_CONVERSION:
        return generate_metric_conversion_problem(rng)
    return generate_arithmetic_problem(OperationCategory.ADDITION, cfg.digit_magnitude, rng)


def generate_distractors(problem, count=config.ANSWER_CHOICES - 1, rng=random):
    operation = problem.operation
    if operation in BASIC_OPERATIONS:
        return generate_arithmetic_distractors(problem.numeric_answer, operation, count, rng)
    if operation in (OperationCategory.FRACTION, OperationCategory.IMPROPER_FRACTION):
        return generate_fraction_distractors(problem, count, rng)
    if operation == OperationCategory.PERCENTAGE:
        return generate_percentage_distractors(problem, count, rng)
    if operation == OperationCategory.METRIC_CONVERSION:
        return generate_metric_distractors(problem, count, rng)
    return generate_arithmetic_distractors(problem.numeric_answer, OperationCategory.ADDITION, count, rng)


def shuffle(items, rng=random):
    """Fisher-Yates, in place."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def block_positions(count, board_width, block_width, padding=config.BLOCK_PADDING):
    """Centre x of ``count`` blocks spread evenly between the side paddings."""
    if count == 1:
        return [board_width / 2]
    spacing = (board_width - padding * 2 - block_width * count) / (count - 1)
    return [padding + i * (block_width + spacing) + block_width / 2 for i in range(count)]


def generate_answer_blocks(problem, board_width, block_width, start_y, rng=random, choices=config.ANSWER_CHOICES):
    answers = [(problem.answer, True)]
    answers += [(wrong, False) for wrong in generate_distractors(problem, choices - 1, rng)]
    shuffle(answers, rng)

    xs = block_positions(len(answers), board_width, block_width)
    return [
        AnswerBlock(
            id=f'answer-{next(_block_ids)}',
            display_value=answer.display,
            numeric_value=answer.numeric_value,
            is_correct=is_correct,
            x=x,
            y=start_y,
            answer_format=answer.format,
        )
        for (answer, is_correct), x in zip(answers, xs)
    ]
