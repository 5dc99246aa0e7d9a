"""
Harvard Inquirer Dictionary Management

This package handles loading and accessing the Harvard General Inquirer
category table.

Key components:
- constants: Immutable table layout and metadata
- schemas: Pydantic models for the loaded dictionary
- harvard_dictionary: Table parser and headword normalization

Usage:
    from semantic_categorizer.dictionaries import load_harvard_dictionary

    dictionary = load_harvard_dictionary(Path("data/dictionary/harvard.csv"))
    categories = dictionary.get_word_categories("happy")
"""

from .constants import (
    HARVARD_DICTIONARY_NAME,
    HARVARD_LEADING_COLUMNS,
    HARVARD_TRAILING_COLUMNS,
    HARVARD_SOURCE_CSV_FILENAME,
    MERGE_STRATEGIES,
    SENSE_SUFFIX_PATTERN,
)

from .schemas import (
    DictionaryMetadata,
    HarvardDictionary,
)

from .harvard_dictionary import (
    build_dictionary,
    load_harvard_dictionary,
    normalize_headword,
    parse_categories,
    row_categories,
)

__all__ = [
    # Constants
    "HARVARD_DICTIONARY_NAME",
    "HARVARD_LEADING_COLUMNS",
    "HARVARD_TRAILING_COLUMNS",
    "HARVARD_SOURCE_CSV_FILENAME",
    "MERGE_STRATEGIES",
    "SENSE_SUFFIX_PATTERN",
    # Schemas
    "DictionaryMetadata",
    "HarvardDictionary",
    # Loader
    "build_dictionary",
    "load_harvard_dictionary",
    "normalize_headword",
    "parse_categories",
    "row_categories",
]
