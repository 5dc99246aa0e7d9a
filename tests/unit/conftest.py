"""
Lightweight fixtures for unit tests - NO file or model dependencies.
All fixtures use synthetic data that runs in <1 second.
"""

import pytest

from semantic_categorizer.dictionaries import build_dictionary
from semantic_categorizer.frequency import FrequencyList


@pytest.fixture
def happy_dictionary(happy_rows):
    """Dictionary built from happy_rows, in memory."""
    return build_dictionary(happy_rows, source="happy.csv")


@pytest.fixture
def happy_frequencies() -> FrequencyList:
    """Frequencies of the 'I am happy' / 'happy happy' corpus."""
    return FrequencyList.from_lemmas(["i", "be", "happy", "happy", "happy"])
