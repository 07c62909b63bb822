"""Problem generators for every operation category, plus the round orchestrator."""
from .metric import format_metric_answer, parse_metric_answer
from .orchestrator import (
    generate_answer_blocks,
    generate_distractors,
    generate_problem,
    generate_problem_for_operation,
)

__all__ = [
    'format_metric_answer',
    'generate_answer_blocks',
    'generate_distractors',
    'generate_problem',
    'generate_problem_for_operation',
    'parse_metric_answer',
]
