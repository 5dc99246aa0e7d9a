"""
Semantic Categorizer

Assigns the lemmas of a text to Harvard General Inquirer categories and
reports per-category token counts and coverage percentages.

Usage:
    from semantic_categorizer import CategorizationPipeline

    outcome = CategorizationPipeline().run(Path("data/corpus.txt"), label="corpus")

Lower-level pieces can be used without any file I/O:

    from semantic_categorizer import FrequencyList, build_dictionary, categorize

    dictionary = build_dictionary(rows)
    result = categorize(FrequencyList.from_lemmas(["happy", "happy"]), dictionary)
"""

__version__ = "0.1.0"

from semantic_categorizer.errors import (
    CategorizerError,
    EmptyCorpusError,
    LemmatizerError,
    MalformedDictionaryRowError,
    ResourceUnreadableError,
)
from semantic_categorizer.dictionaries import (
    HarvardDictionary,
    build_dictionary,
    load_harvard_dictionary,
    normalize_headword,
)
from semantic_categorizer.frequency import FrequencyBuilder, FrequencyList
from semantic_categorizer.categorizer import CategorizationResult, categorize
from semantic_categorizer.reporting import ReportGenerator
from semantic_categorizer.pipeline import CategorizationPipeline, PipelineResult

__all__ = [
    # Errors
    "CategorizerError",
    "EmptyCorpusError",
    "LemmatizerError",
    "MalformedDictionaryRowError",
    "ResourceUnreadableError",
    # Dictionary
    "HarvardDictionary",
    "build_dictionary",
    "load_harvard_dictionary",
    "normalize_headword",
    # Frequencies
    "FrequencyBuilder",
    "FrequencyList",
    # Categorization and reports
    "CategorizationResult",
    "categorize",
    "ReportGenerator",
    "CategorizationPipeline",
    "PipelineResult",
]
