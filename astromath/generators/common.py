import math
import random

from ..models import Answer, AnswerFormat


def weighted_choice(weights, rng=random):
    """Pick a key of ``weights`` with probability proportional to its value."""
    items = list(weights.items())
    roll = rng.random() * sum(w for _, w in items)
    for key, weight in items:
        roll -= weight
        if roll <= 0:
            return key
    return items[0][0]


def same_value(a, b):
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-9)


class DistractorPicker:
    """Collects wrong answers that differ from the correct one and from each other."""

    def __init__(self, correct_value, count):
        self.correct_value = correct_value
        self.count = count
        self.answers = []

    @property
    def full(self):
        return len(self.answers) >= self.count

    def offer(self, answer):
        if self.full:
            return False
        value = answer.numeric_value
        if value <= 0 or same_value(value, self.correct_value):
            return False
        if any(same_value(value, a.numeric_value) for a in self.answers):
            return False
        self.answers.append(answer)
        return True

    def offer_number(self, value, answer_format=AnswerFormat.NUMBER, suffix=''):
        return self.offer(Answer(answer_format, value, f'{value}{suffix}'))
