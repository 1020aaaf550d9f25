"""Vocabulary tasks: odd-one-out and synonym/antonym connect."""

from __future__ import annotations

import logging
import random

from flowscroll.engine.lexicon import Lexicon
from flowscroll.engine.task_types import TaskType
from flowscroll.engine.tasks import (
    ConnectContent,
    GeneratedContent,
    OddOneOutContent,
    SentenceContent,
    WordListContent,
)

logger = logging.getLogger(__name__)

ODD_ONE_OUT_QUESTION = "Was passt nicht?"
CONNECT_QUESTION = "Verbinde Wörter"


def category_tier(level: float) -> int:
    if level > 7:
        return 3
    if level > 3:
        return 2
    return 1


def word_tier(level: float) -> int:
    if level > 8:
        return 3
    if level > 3:
        return 2
    return 1


def generate_odd_one_out(level: float, lexicon: Lexicon, rng: random.Random) -> GeneratedContent:
    base = rng.choice(lexicon.categories_at(category_tier(level)))
    odd = rng.choice([c for c in lexicon.categories if c.name != base.name])

    # Categories overlap (Gold is a colour and a metal), so the odd word must not fit the base.
    odd_pool = [w for w in odd.words if w not in base.words] or list(odd.words)
    odd_word = rng.choice(odd_pool)

    num_options = 4 if level > 2 else 3
    base_words = rng.sample(base.words, min(num_options - 1, len(base.words)))

    options = [*base_words, odd_word]
    rng.shuffle(options)
    odd_index = options.index(odd_word)

    return GeneratedContent(
        question=ODD_ONE_OUT_QUESTION,
        content=OddOneOutContent(
            options=tuple(options),
            odd_index=odd_index,
            hint=f"Eines ist {odd.name}, die anderen sind {base.name}.",
        ),
        solution=odd_index,
    )


def generate_connect(level: float, lexicon: Lexicon, rng: random.Random) -> GeneratedContent:
    mode = "antonym" if level <= 2 or rng.random() > 0.5 else "synonym"
    tier = word_tier(level)

    of_mode = lexicon.relations_of_type(mode)
    near_tier = [r for r in of_mode if abs(lexicon.word(r.target_id).level - tier) <= 1]
    if not near_tier:
        logger.info("No %s relations near tier %d, using the full pool", mode, tier)
    relation = rng.choice(near_tier or of_mode)

    target = lexicon.word(relation.target_id)
    answer = lexicon.word(relation.partner_id)

    # Other partners of the target would make a second correct option.
    excluded = {target.id, answer.id} | lexicon.related_ids(target.id, mode)
    candidates = [w for w in lexicon.words if w.id not in excluded and w.pos == answer.pos]

    num_options = 4 if level > 4 else 3
    distractors = rng.sample(candidates, min(num_options - 1, len(candidates)))

    options = [answer.text, *(d.text for d in distractors)]
    rng.shuffle(options)
    correct_index = options.index(answer.text)

    return GeneratedContent(
        question=CONNECT_QUESTION,
        content=ConnectContent(
            mode=mode,
            target=target.text,
            options=tuple(options),
            correct_index=correct_index,
            answer=answer.text,
        ),
        solution=correct_index,
    )


# Static payloads: served for the legacy word types, and in place of any
# language task whose generation failed.

LEGACY_SYNONYM = WordListContent(
    word="Groß",
    related=("Riesig", "Gigantisch", "Hoch", "Mächtig"),
    hint="Das Gegenteil von klein",
)
LEGACY_RHYME = WordListContent(
    word="Haus",
    related=("Maus", "Laus", "raus", "Klaus"),
    hint="Ein Tier",
)
LEGACY_SENTENCE = SentenceContent(
    word1="Sonne",
    word2="Eis",
    example_sentence="Die Sonne schmolz das Eis.",
)

FALLBACK_CONTENT: dict[TaskType, GeneratedContent] = {
    TaskType.LANG_ODD_ONE_OUT: GeneratedContent(
        question=ODD_ONE_OUT_QUESTION,
        content=OddOneOutContent(
            options=("Katze", "Hund", "Apfel", "Maus"),
            odd_index=2,
            hint="Eines ist FRUITS, die anderen sind ANIMALS.",
        ),
        solution=2,
    ),
    TaskType.LANG_CONNECT: GeneratedContent(
        question=CONNECT_QUESTION,
        content=ConnectContent(
            mode="antonym",
            target="gut",
            options=("schnell", "schlecht", "neu"),
            correct_index=1,
            answer="schlecht",
        ),
        solution=1,
    ),
    TaskType.LANG_SYNONYM: GeneratedContent(question="Finde ein Synonym", content=LEGACY_SYNONYM),
    TaskType.LANG_RHYME: GeneratedContent(question="Finde einen Reim", content=LEGACY_RHYME),
    TaskType.LANG_SENTENCE: GeneratedContent(question="Bilde einen Satz", content=LEGACY_SENTENCE),
}


def fallback_language_content(task_type: TaskType) -> GeneratedContent:
    try:
        return FALLBACK_CONTENT[task_type]
    except KeyError:
        raise ValueError(f"Not a language task type: {task_type}") from None


def generate_language(task_type: TaskType, level: float, lexicon: Lexicon,
                      rng: random.Random) -> GeneratedContent:
    if task_type == TaskType.LANG_ODD_ONE_OUT:
        return generate_odd_one_out(level, lexicon, rng)
    if task_type == TaskType.LANG_CONNECT:
        return generate_connect(level, lexicon, rng)
    return fallback_language_content(task_type)


def validate_sentence(word1: str, word2: str, sentence: str) -> bool:
    """Loose check for the sentence task: both words present, not a bare fragment."""
    lowered = sentence.lower()
    return word1.lower() in lowered and word2.lower() in lowered and len(sentence) > 8
