"""Word and relation tables for the language tasks.

The compact YAML data is expanded once, at startup, into an immutable
``Lexicon`` that is passed explicitly to the language generators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_PATH = Path(__file__).parent.parent / "data" / "lexicon.yaml"

RELATION_TYPES = ("synonym", "antonym")
CATEGORY_TIERS = (1, 2, 3)


class LexiconError(ValueError):
    """Raised when lexicon data cannot guarantee non-empty generation pools."""


@dataclass(frozen=True)
class WordCategory:
    name: str
    level: int
    words: tuple[str, ...]


@dataclass(frozen=True)
class WordEntry:
    id: str
    text: str
    level: int
    pos: str  # "adj", "verb" or "noun"


@dataclass(frozen=True)
class Relation:
    type: str  # "synonym" or "antonym"
    target_id: str
    partner_id: str


@dataclass(frozen=True)
class Lexicon:
    categories: tuple[WordCategory, ...]
    words: tuple[WordEntry, ...]
    relations: tuple[Relation, ...]
    _by_id: dict[str, WordEntry] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        if not self._by_id:
            object.__setattr__(self, "_by_id", {w.id: w for w in self.words})

    def word(self, word_id: str) -> WordEntry:
        return self._by_id[word_id]

    def categories_at(self, level: int) -> list[WordCategory]:
        return [c for c in self.categories if c.level == level]

    def relations_of_type(self, relation_type: str) -> list[Relation]:
        return [r for r in self.relations if r.type == relation_type]

    def related_ids(self, word_id: str, relation_type: str) -> set[str]:
        """Ids linked to ``word_id`` by ``relation_type``, in either direction."""
        related = set()
        for r in self.relations:
            if r.type != relation_type:
                continue
            if r.target_id == word_id:
                related.add(r.partner_id)
            elif r.partner_id == word_id:
                related.add(r.target_id)
        return related


def _parse_categories(raw: dict) -> tuple[WordCategory, ...]:
    categories = []
    for name, entry in (raw or {}).items():
        words = tuple(str(w) for w in entry.get("words", []))
        if not words:
            continue
        categories.append(WordCategory(name=name, level=int(entry.get("level", 1)), words=words))
    return tuple(categories)


def build_lexicon(data: dict) -> Lexicon:
    """Expand compact word data into word and relation tables.

    Word ids are assigned in document order (``w_1``, ``w_2``, ...).
    Synonyms/antonyms that are not themselves words in the table are
    dropped rather than turned into one-sided entries.
    """
    categories = _parse_categories(data.get("categories"))
    compact = data.get("words") or {}

    words: list[WordEntry] = []
    ids: dict[str, str] = {}
    for index, (text, entry) in enumerate(compact.items(), start=1):
        word_id = f"w_{index}"
        ids[text] = word_id
        words.append(WordEntry(
            id=word_id,
            text=text,
            level=int(entry.get("level", 1)),
            pos=entry.get("pos", "noun"),
        ))

    relations: list[Relation] = []
    for text, entry in compact.items():
        target_id = ids[text]
        for relation_type, key in (("synonym", "synonyms"), ("antonym", "antonyms")):
            for partner in entry.get(key) or []:
                partner_id = ids.get(partner)
                if partner_id is not None:
                    relations.append(Relation(relation_type, target_id, partner_id))

    lexicon = Lexicon(categories=categories, words=tuple(words), relations=tuple(relations))
    _validate(lexicon)
    logger.info(
        "Lexicon ready: %d words, %d relations, %d categories",
        len(lexicon.words), len(lexicon.relations), len(lexicon.categories),
    )
    return lexicon


def _validate(lexicon: Lexicon) -> None:
    for tier in CATEGORY_TIERS:
        if not lexicon.categories_at(tier):
            raise LexiconError(f"No word categories at tier {tier}")
    if len(lexicon.categories) < 2:
        raise LexiconError("Odd-one-out needs at least two categories")
    for relation_type in RELATION_TYPES:
        if not lexicon.relations_of_type(relation_type):
            raise LexiconError(f"No {relation_type} relations in lexicon")


def load_lexicon(path: Optional[Path] = None) -> Lexicon:
    """Load and expand a lexicon YAML file (the packaged one by default)."""
    lexicon_file = path or DEFAULT_LEXICON_PATH
    with open(lexicon_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise LexiconError(f"Lexicon file {lexicon_file} is not a mapping")
    return build_lexicon(data)
