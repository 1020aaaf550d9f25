"""Arithmetic tasks driven by total digit capacity.

Level maps to the total number of digits across both operands, minus one:
level 1 = 1+1 digits, level 2 = 2+1, level 3 = 2+2 or 3+1, and so on.
"""

from __future__ import annotations

import math
import random

from flowscroll.engine.task_types import TaskType
from flowscroll.engine.tasks import ArithmeticContent, GeneratedContent


def number_with_digits(digits: int, rng: random.Random) -> int:
    if digits <= 0:
        return 0
    return rng.randint(10 ** (digits - 1), 10 ** digits - 1)


def split_digits(total_digits: int, rng: random.Random) -> tuple[int, int]:
    """Balanced split of the capacity; the larger half lands on either side from 4 digits up."""
    digits_a = math.ceil(total_digits / 2)
    digits_b = total_digits // 2
    if total_digits >= 4 and rng.random() > 0.5:
        digits_a, digits_b = digits_b, digits_a
    return digits_a, digits_b


def _multiplication_split(total_digits: int, digits_a: int, digits_b: int,
                          rng: random.Random) -> tuple[int, int]:
    # 2x2 is much harder than 2+2, so keep the multiplier short.
    if total_digits == 4:
        return (3, 1) if rng.random() > 0.5 else (2, 2)
    if total_digits >= 5:
        digits_b = min(2, digits_b)
        return total_digits - digits_b, digits_b
    return digits_a, digits_b


def generate_arithmetic(task_type: TaskType, level: float, rng: random.Random) -> GeneratedContent:
    total_digits = math.floor(level) + 1
    digits_a, digits_b = split_digits(total_digits, rng)
    a = number_with_digits(digits_a, rng)
    b = number_with_digits(digits_b, rng)

    if task_type == TaskType.MATH_ADDITION:
        return GeneratedContent(
            question=f"{a} + {b}",
            content=ArithmeticContent(a=a, b=b, operator=task_type),
            solution=a + b,
        )

    if task_type == TaskType.MATH_SUBTRACTION:
        if a < b:
            a, b = b, a
        return GeneratedContent(
            question=f"{a} - {b}",
            content=ArithmeticContent(a=a, b=b, operator=task_type),
            solution=a - b,
        )

    if task_type == TaskType.MATH_MULTIPLICATION:
        digits_a, digits_b = _multiplication_split(total_digits, digits_a, digits_b, rng)
        a = number_with_digits(digits_a, rng)
        b = number_with_digits(digits_b, rng)
        if level > 1 and digits_b == 1:
            b = rng.randint(2, 9)
        return GeneratedContent(
            question=f"{a} × {b}",
            content=ArithmeticContent(a=a, b=b, operator=task_type),
            solution=a * b,
        )

    raise ValueError(f"Not an arithmetic task type: {task_type}")
