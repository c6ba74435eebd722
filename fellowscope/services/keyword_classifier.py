from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from .field_resolver import cell_text

"""Keyword classification of observation narratives.

Each vocabulary is an ordered list of (phrase, tag) pairs. Matching is
case-insensitive substring containment; every matched phrase yields its tag,
and the first match in vocabulary order is the dominant tag. Text that is
blank or matches nothing is tagged ``Blank``.
"""

__all__ = [
    "BLANK",
    "KeywordVocabulary",
    "Classification",
    "HOLISTIC_OUTCOMES",
    "LEADERSHIP_MINDSETS",
    "classify",
    "new_counter",
    "tally",
]

BLANK = "Blank"


@dataclass(frozen=True)
class KeywordVocabulary:
    dimension: str
    phrases: tuple[tuple[str, str], ...]  # (lowercase phrase, tag) in priority order

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(tag for _, tag in self.phrases)


@dataclass(frozen=True)
class Classification:
    tags: tuple[str, ...]
    dominant: str | None = None

    @property
    def is_blank(self) -> bool:
        return self.dominant is None


HOLISTIC_OUTCOMES = KeywordVocabulary(
    dimension="holistic_outcomes",
    phrases=(
        ("growth mindset", "Growth Mindset"),
        ("self awareness", "Self Awareness"),
        ("collaboration", "Collaboration"),
        ("communication", "Communication"),
        ("academic", "Academic Proficiency"),
    ),
)

LEADERSHIP_MINDSETS = KeywordVocabulary(
    dimension="leadership_mindsets",
    phrases=(
        ("students as leaders", "Students as Leaders"),
        ("teachers as learners", "Teachers as Learners"),
        ("community as power", "Community as Power"),
        ("systemic", "Our Work as Systemic"),
    ),
)


def classify(text: object, vocabulary: KeywordVocabulary) -> Classification:
    lowered = cell_text(text).lower()
    if not lowered:
        return Classification(tags=(BLANK,))
    matched = tuple(tag for phrase, tag in vocabulary.phrases if phrase in lowered)
    if not matched:
        return Classification(tags=(BLANK,))
    return Classification(tags=matched, dominant=matched[0])


def new_counter(vocabulary: KeywordVocabulary) -> Counter[str]:
    """Counter seeded with every tag of the vocabulary plus ``Blank`` at zero."""
    counter: Counter[str] = Counter({BLANK: 0})
    for tag in vocabulary.tags:
        counter[tag] = 0
    return counter


def tally(counter: Counter[str], classification: Classification) -> None:
    counter.update(classification.tags)
