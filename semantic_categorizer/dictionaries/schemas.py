"""
Data structures for the Harvard Inquirer dictionary.

This module defines the shape of data using Pydantic models.
These schemas enforce type safety and validation throughout the pipeline.
"""

from datetime import datetime
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .constants import HARVARD_DICTIONARY_NAME


class DictionaryMetadata(BaseModel):
    """
    Metadata about the loaded dictionary.

    Tracks the category order, loading statistics and the raw category
    counts row for auditability and debugging.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(default=HARVARD_DICTIONARY_NAME)
    categories: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Category names in table (declared) order"
    )
    category_counts: Dict[str, str] = Field(
        default_factory=dict,
        description="Raw cells of the counts row, keyed by category"
    )
    total_words: int = Field(..., ge=0, description="Distinct headwords after merging")
    rows_read: int = Field(..., ge=0, description="Headword rows read from the table")
    merged_rows: int = Field(default=0, ge=0, description="Sense rows folded into an earlier entry")
    merge_strategy: str = Field(default="adjacent")
    load_time_seconds: float = Field(default=0.0, ge=0)
    source_file: str = Field(default="<memory>", description="Path to source file")
    loaded_at: datetime = Field(default_factory=datetime.now)

    @field_validator('category_counts')
    @classmethod
    def validate_category_counts(cls, v: Dict[str, str], info) -> Dict[str, str]:
        """Ensure category counts match known categories."""
        categories = info.data.get('categories')
        if categories is not None:
            unknown = set(v) - set(categories)
            if unknown:
                raise ValueError(f"Unknown categories in counts: {unknown}")
        return v

    def get_summary(self) -> str:
        """Return human-readable summary of dictionary."""
        return (
            f"{self.name} dictionary\n"
            f"Total words: {self.total_words:,} ({self.rows_read:,} rows, "
            f"{self.merged_rows:,} merged senses)\n"
            f"Categories: {len(self.categories)}\n"
            f"Loaded from: {self.source_file}\n"
            f"Load time: {self.load_time_seconds:.3f}s"
        )


class HarvardDictionary(BaseModel):
    """
    Complete headword -> categories mapping with metadata.

    This is the main data structure returned by the dictionary loader.
    Headwords are lowercase with sense suffixes removed. The model is frozen
    and the category sets are frozensets, so a loaded dictionary is read-only.
    """
    model_config = ConfigDict(frozen=True)

    words: Mapping[str, FrozenSet[str]] = Field(
        ...,
        description="Mapping of headwords to their categories (read-only view)"
    )
    metadata: DictionaryMetadata = Field(
        ...,
        description="Dictionary metadata and statistics"
    )

    @field_validator('words')
    @classmethod
    def freeze_words(cls, v: Mapping[str, FrozenSet[str]]) -> Mapping[str, FrozenSet[str]]:
        """Wrap the mapping so entries cannot be added or replaced after loading."""
        return MappingProxyType({word: frozenset(cats) for word, cats in v.items()})

    @field_serializer('words')
    def serialize_words(self, words: Mapping[str, FrozenSet[str]]) -> Dict[str, list]:
        return {word: self.ordered_categories(cats) for word, cats in words.items()}

    @model_validator(mode='after')
    def categories_must_be_known(self) -> 'HarvardDictionary':
        known = set(self.metadata.categories)
        for word, cats in self.words.items():
            unknown = cats - known
            if unknown:
                raise ValueError(f"Headword {word!r} has unknown categories: {sorted(unknown)}")
        return self

    @property
    def categories(self) -> Tuple[str, ...]:
        """Category names in declared order."""
        return self.metadata.categories

    def get_word_categories(self, word: str) -> FrozenSet[str]:
        """
        Get categories for a word.

        Args:
            word: The word to lookup (case-insensitive)

        Returns:
            Set of category names, empty set if word not found
        """
        return self.words.get(word.lower(), frozenset())

    def is_in_category(self, word: str, category: str) -> bool:
        """
        Check if a word belongs to a specific category.

        Raises:
            ValueError: If category is not one of the dictionary's categories
        """
        if category not in self.metadata.categories:
            raise ValueError(f"Invalid category: {category}")
        return category in self.get_word_categories(word)

    def get_category_words(self, category: str) -> FrozenSet[str]:
        """Get all headwords in a specific category."""
        if category not in self.metadata.categories:
            raise ValueError(f"Invalid category: {category}")
        return frozenset(word for word, cats in self.words.items() if category in cats)

    def ordered_categories(self, categories) -> list:
        """Sort a collection of categories into declared order."""
        return [cat for cat in self.metadata.categories if cat in categories]

    def iter_entries(self) -> Iterator[Tuple[str, list]]:
        """Yield (headword, categories in declared order) pairs."""
        for word, cats in self.words.items():
            yield word, self.ordered_categories(cats)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self.words

    def __len__(self) -> int:
        """Return number of headwords in dictionary."""
        return len(self.words)
