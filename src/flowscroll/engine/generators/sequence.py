"""Number-sequence continuation tasks."""

from __future__ import annotations

import random

from flowscroll.engine.tasks import GeneratedContent, SequenceContent

LINEAR = "linear"
PROGRESSIVE = "progressive"
GEOMETRIC = "geometric"
FIBONACCI = "fibonacci"
ALTERNATING = "alternating"

SEQUENCE_LENGTH = 5
NUM_OPTIONS = 4


def choose_pattern(level: float, rng: random.Random) -> str:
    """Harder families unlock at level 4 and again at level 8."""
    if level >= 8:
        r = rng.random()
        if r > 0.6:
            return FIBONACCI
        if r > 0.3:
            return GEOMETRIC
        return ALTERNATING
    if level >= 4:
        return PROGRESSIVE if rng.random() > 0.5 else ALTERNATING
    return LINEAR


def build_sequence(pattern: str, level: float, rng: random.Random) -> list[int]:
    current = rng.randint(5, 24) if level > 5 else rng.randint(1, 10)
    terms = [current]

    if pattern == LINEAR:
        step = rng.randint(1, 5) + int(level // 3)
        descending = rng.random() > 0.8 and current > 20
        for _ in range(SEQUENCE_LENGTH - 1):
            current = current - step if descending else current + step
            terms.append(current)

    elif pattern == PROGRESSIVE:
        start_step = rng.randint(1, 2)
        increment = rng.randint(1, 2)
        for i in range(SEQUENCE_LENGTH - 1):
            current += start_step + i * increment
            terms.append(current)

    elif pattern == GEOMETRIC:
        factor = 3 if rng.random() > 0.7 else 2
        current = rng.randint(1, 3)
        terms = [current]
        for _ in range(SEQUENCE_LENGTH - 1):
            current *= factor
            terms.append(current)

    elif pattern == FIBONACCI:
        a, b = rng.randint(1, 5), rng.randint(1, 5)
        terms = [a, b]
        while len(terms) < SEQUENCE_LENGTH:
            a, b = b, a + b
            terms.append(b)

    elif pattern == ALTERNATING:
        up = rng.randint(2, 4)
        down = rng.randint(1, 2)
        for i in range(SEQUENCE_LENGTH - 1):
            current = current + up if i % 2 == 0 else current - down
            terms.append(current)

    else:
        raise ValueError(f"Unknown sequence pattern: {pattern}")

    return terms


def distractors_for(solution: int, rng: random.Random) -> set[int]:
    """Wrong answers clustered near the solution: +-1..5 or +-10."""
    fakes: set[int] = set()
    while len(fakes) < NUM_OPTIONS - 1:
        offset = rng.randint(1, 5)
        r = rng.random()
        if r < 0.3:
            fake = solution + offset
        elif r < 0.6:
            fake = solution - offset
        elif r < 0.8:
            fake = solution + 10
        else:
            fake = solution - 10
        fakes.add(fake)
    return fakes


def generate_sequence(level: float, rng: random.Random) -> GeneratedContent:
    pattern = choose_pattern(level, rng)
    terms = build_sequence(pattern, level, rng)
    solution = terms.pop()

    options = [solution, *sorted(distractors_for(solution, rng))]
    rng.shuffle(options)

    return GeneratedContent(
        question="Setze die Reihe fort",
        content=SequenceContent(
            sequence=tuple(terms),
            options=tuple(options),
            correct_value=solution,
            pattern=pattern,
        ),
        solution=solution,
    )
