"""
Shared pytest fixtures for the semantic categorizer test suite.

This module provides common fixtures used across test modules:
- Synthetic Harvard category tables (rows and CSV files)
- A stub lemmatizer standing in for spaCy
- Corpus files

Usage:
    Fixtures are automatically discovered by pytest.
    Import them directly in test files - no explicit import needed.
"""

import csv
import sys
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))


class StubLemmatizer:
    """
    Lemmatizer returning canned lemmas per line.

    Lines not in the mapping are split on whitespace and lowercased.
    Lines listed in fail_on raise RuntimeError.
    """

    def __init__(self, mapping: Dict[str, Sequence[str]] = None, fail_on: Sequence[str] = ()):
        self.mapping = dict(mapping or {})
        self.fail_on = set(fail_on)
        self.calls: List[str] = []

    def lemmatize(self, line: str) -> List[str]:
        self.calls.append(line)
        if line in self.fail_on:
            raise RuntimeError(f"cannot lemmatize {line!r}")
        if line in self.mapping:
            return list(self.mapping[line])
        return [word.lower() for word in line.split()]


def write_table(path: Path, rows: Sequence[Sequence[str]]) -> Path:
    """Write rows as a CSV category table."""
    with open(path, 'w', encoding='utf-8', newline='') as f:
        csv.writer(f).writerows(rows)
    return path


# ===========================
# Dictionary Fixtures
# ===========================

@pytest.fixture
def happy_rows() -> List[List[str]]:
    """
    Minimal table: happy#1 is Positiv, happy#2 is Emot, sad is Ngtv.

    The Othtags/Defined columns carry free text that must never be read
    as categories.
    """
    return [
        ["Entry", "Source", "Positiv", "Emot", "Ngtv", "Othtags", "Defined"],
        ["", "", "1915", "311", "2291", "", ""],
        ["HAPPY#1", "H4Lvd", "Positiv", "", "", "Modif", "| 1: adj: glad"],
        ["HAPPY#2", "H4", "", "Emot", "", "Modif", "| 2: adj: lucky"],
        ["SAD", "H4Lvd", "", "Emot", "Ngtv", "Modif", "| adj: unhappy"],
    ]


@pytest.fixture
def happy_csv(tmp_path: Path, happy_rows) -> Path:
    """happy_rows written to a CSV file."""
    return write_table(tmp_path / "harvard.csv", happy_rows)


@pytest.fixture
def stub_lemmatizer() -> StubLemmatizer:
    """Lemmatizer for the 'I am happy' / 'happy happy' corpus."""
    return StubLemmatizer({
        "I am happy": ["i", "be", "happy"],
        "happy happy": ["happy", "happy"],
    })


@pytest.fixture
def happy_corpus(tmp_path: Path) -> Path:
    """Two-line corpus file."""
    path = tmp_path / "corpus.txt"
    path.write_text("I am happy\nhappy happy\n", encoding='utf-8')
    return path


@pytest.fixture
def reports_dir(tmp_path: Path) -> Path:
    """Base directory for run reports."""
    return tmp_path / "reports"
