import math
import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Fraction:
    numerator: int
    denominator: int

    def __str__(self):
        return format_fraction(self)


@dataclass(frozen=True)
class MixedNumber:
    whole: int
    fraction: Fraction


def lcm(a, b):
    return abs(a * b) // math.gcd(a, b)


def simplify(fraction: Fraction) -> Fraction:
    divisor = math.gcd(fraction.numerator, fraction.denominator) or 1
    numerator = fraction.numerator // divisor
    denominator = fraction.denominator // divisor
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return Fraction(numerator, denominator)


def to_decimal(fraction: Fraction) -> float:
    return fraction.numerator / fraction.denominator


def decimal_to_fraction(value, max_denominator=100) -> Fraction:
    """Closest fraction to ``value`` with a denominator up to ``max_denominator``."""
    if float(value).is_integer():
        return Fraction(int(value), 1)
    best = Fraction(1, 1)
    best_error = abs(value - 1)
    for d in range(1, max_denominator + 1):
        n = round(value * d)
        error = abs(value - n / d)
        if error < best_error:
            best, best_error = Fraction(n, d), error
        if error == 0:
            break
    return simplify(best)


# ------------------------
# Arithmetic
# ------------------------
def add(a: Fraction, b: Fraction) -> Fraction:
    common = lcm(a.denominator, b.denominator)
    numerator = a.numerator * (common // a.denominator) + b.numerator * (common // b.denominator)
    return simplify(Fraction(numerator, common))


def subtract(a: Fraction, b: Fraction) -> Fraction:
    common = lcm(a.denominator, b.denominator)
    numerator = a.numerator * (common // a.denominator) - b.numerator * (common // b.denominator)
    return simplify(Fraction(numerator, common))


def multiply(a: Fraction, b: Fraction) -> Fraction:
    return simplify(Fraction(a.numerator * b.numerator, a.denominator * b.denominator))


def divide(a: Fraction, b: Fraction) -> Fraction:
    if b.numerator == 0:
        raise ZeroDivisionError('cannot divide by a zero fraction')
    return simplify(Fraction(a.numerator * b.denominator, a.denominator * b.numerator))


def equal(a: Fraction, b: Fraction) -> bool:
    return simplify(a) == simplify(b)


def is_proper(fraction: Fraction) -> bool:
    return abs(fraction.numerator) < fraction.denominator


def is_improper(fraction: Fraction) -> bool:
    return abs(fraction.numerator) >= fraction.denominator


# ------------------------
# Mixed numbers
# ------------------------
def to_mixed_number(fraction: Fraction) -> Optional[MixedNumber]:
    """Split an improper fraction into whole + reduced remainder; None if proper."""
    if is_proper(fraction):
        return None
    whole, remainder = divmod(fraction.numerator, fraction.denominator)
    if remainder == 0:
        return MixedNumber(whole, Fraction(0, 1))
    return MixedNumber(whole, simplify(Fraction(remainder, fraction.denominator)))


def to_improper_fraction(whole, fraction: Fraction) -> Fraction:
    return Fraction(whole * fraction.denominator + fraction.numerator, fraction.denominator)


# ------------------------
# Formatting & parsing
# ------------------------
def format_fraction(fraction: Fraction) -> str:
    if fraction.denominator == 1:
        return str(fraction.numerator)
    return f'{fraction.numerator}/{fraction.denominator}'


def format_mixed_number(whole, fraction: Fraction) -> str:
    if fraction.numerator == 0:
        return str(whole)
    if whole == 0:
        return format_fraction(fraction)
    return f'{whole} {format_fraction(fraction)}'


def parse_fraction(text) -> Optional[Fraction]:
    parts = text.strip().split('/')
    if len(parts) != 2:
        return None
    try:
        numerator, denominator = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if denominator == 0:
        return None
    return Fraction(numerator, denominator)


def parse_mixed_number(text) -> Optional[Fraction]:
    """Parse "2 1/3" (or a plain "7/3" / "4") into an improper fraction."""
    parts = text.split()
    try:
        if len(parts) == 1:
            if '/' in parts[0]:
                return parse_fraction(parts[0])
            return Fraction(int(parts[0]), 1)
        if len(parts) == 2:
            fraction = parse_fraction(parts[1])
            if fraction is None:
                return None
            return to_improper_fraction(int(parts[0]), fraction)
    except ValueError:
        return None
    return None


# ------------------------
# Random construction
# ------------------------
def random_proper_fraction(denominators, rng=random) -> Fraction:
    denominator = rng.choice(denominators)
    return Fraction(rng.randint(1, denominator - 1), denominator)


def random_improper_fraction(denominators, max_whole=5, rng=random) -> Fraction:
    denominator = rng.choice(denominators)
    whole = rng.randint(1, max_whole)
    remainder = rng.randint(1, denominator - 1)
    return Fraction(whole * denominator + remainder, denominator)
