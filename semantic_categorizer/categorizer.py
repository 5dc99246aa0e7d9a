"""
Category aggregation.

categorize() joins a FrequencyList against a HarvardDictionary. It is a
pure function: no I/O, no shared state, and the result does not depend on
the order in which lemmas are visited.

A lemma carrying N categories adds its full occurrence count to each of
the N categories. Category counts therefore overlap, and the category
percentages derived from them do not sum to 100.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from semantic_categorizer.dictionaries import HarvardDictionary
from semantic_categorizer.frequency import FrequencyList

logger = logging.getLogger(__name__)


def format_record(lemma: str, categories: Optional[Tuple[str, ...]]) -> str:
    """
    One line of the category-by-word listing.

    Example:
        >>> format_record("happy", ("Positiv", "Emot"))
        'happy is categorized as: [Positiv, Emot]'
        >>> format_record("the", None)
        'the cannot be categorized'
    """
    if categories is None:
        return f"{lemma} cannot be categorized"
    return f"{lemma} is categorized as: [{', '.join(categories)}]"


@dataclass(frozen=True)
class CategorizationResult:
    """
    Outcome of categorizing one frequency list.

    assignments maps every distinct lemma (in frequency-list order) to its
    categories in dictionary order, or to None when the lemma is not in the
    dictionary.
    """
    categories: Tuple[str, ...]
    frequencies: FrequencyList
    category_frequencies: Mapping[str, int]
    uncategorizable: FrozenSet[str]
    uncategorizable_tokens: int
    assignments: Mapping[str, Optional[Tuple[str, ...]]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "category_frequencies", MappingProxyType(dict(self.category_frequencies)))
        object.__setattr__(self, "assignments", MappingProxyType(dict(self.assignments)))

    @property
    def total_tokens(self) -> int:
        return self.frequencies.total_tokens

    @property
    def categorizable_tokens(self) -> int:
        return self.total_tokens - self.uncategorizable_tokens

    @property
    def total_lemmas(self) -> int:
        return len(self.frequencies)

    @property
    def categorizable(self) -> FrozenSet[str]:
        return frozenset(lemma for lemma in self.frequencies if lemma not in self.uncategorizable)

    @property
    def categorizable_lemmas(self) -> int:
        return self.total_lemmas - len(self.uncategorizable)

    def records(self) -> Iterator[str]:
        """Yield the human-readable categorization line of every lemma."""
        for lemma, categories in self.assignments.items():
            yield format_record(lemma, categories)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "categories": list(self.categories),
            "category_frequencies": dict(self.category_frequencies),
            "total_tokens": self.total_tokens,
            "uncategorizable_tokens": self.uncategorizable_tokens,
            "categorizable_tokens": self.categorizable_tokens,
            "total_lemmas": self.total_lemmas,
            "uncategorizable_lemmas": sorted(self.uncategorizable),
            "categorizable_lemmas": self.categorizable_lemmas,
        }


def categorize(frequencies: FrequencyList, dictionary: HarvardDictionary) -> CategorizationResult:
    """
    Aggregate lemma counts into category counts.

    Args:
        frequencies: Finalized frequency list
        dictionary: Loaded dictionary

    Returns:
        CategorizationResult with per-category token counts, the
        uncategorizable lemmas and their token total, and per-lemma
        assignments
    """
    known = dictionary.categories
    category_frequencies = {cat: 0 for cat in known}
    uncategorizable = set()
    uncategorizable_tokens = 0
    assignments: Dict[str, Optional[Tuple[str, ...]]] = {}

    for lemma, count in frequencies.items():
        if lemma not in dictionary.words:
            uncategorizable.add(lemma)
            uncategorizable_tokens += count
            assignments[lemma] = None
            continue

        cats = dictionary.words[lemma]
        for category in cats:
            # Re-check against the declared list; entries should never hold others
            if category in category_frequencies:
                category_frequencies[category] += count
            else:
                logger.warning(f"Ignoring unknown category {category!r} on {lemma!r}")
        assignments[lemma] = tuple(dictionary.ordered_categories(cats))

    logger.info(
        f"Categorized {len(frequencies) - len(uncategorizable)} of {len(frequencies)} lemmas; "
        f"{uncategorizable_tokens} of {frequencies.total_tokens} tokens uncategorizable"
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Category frequencies: {category_frequencies}")

    return CategorizationResult(
        categories=tuple(known),
        frequencies=frequencies,
        category_frequencies=category_frequencies,
        uncategorizable=frozenset(uncategorizable),
        uncategorizable_tokens=uncategorizable_tokens,
        assignments=assignments,
    )
