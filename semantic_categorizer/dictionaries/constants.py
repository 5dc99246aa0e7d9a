"""
Immutable constants for the Harvard General Inquirer category table.

This module contains metadata that defines the table structure.
These values should NEVER change at runtime - they define WHAT the table IS.

The category names themselves are NOT listed here: they are read from the
header row of the table, so any Inquirer release (or a trimmed copy of one)
loads without code changes.

For runtime configuration (HOW to read the table), see configs/config.yaml
"""

import re
from typing import Final

# ===========================
# Dictionary Metadata
# ===========================

HARVARD_DICTIONARY_NAME: Final[str] = "Harvard General Inquirer"
"""Human-readable name of the category dictionary."""

# ===========================
# Table Layout
# ===========================

HARVARD_LEADING_COLUMNS: Final[int] = 2
"""Columns before the first category: headword ("Entry") and source ("Source")."""

HARVARD_TRAILING_COLUMNS: Final[tuple[str, ...]] = ("Othtags", "Defined")
"""
Last two header columns ("Other tags" and "Defined"). They carry free text,
not categories, and are never treated as category markers.
"""

HARVARD_HEADER_ROW: Final[int] = 1
"""Line number of the column header row."""

HARVARD_COUNTS_ROW: Final[int] = 2
"""Line number of the per-category occurrence counts row."""

SENSE_SUFFIX_PATTERN: Final[re.Pattern] = re.compile(r"#\d+$")
"""Trailing numbered-sense marker on a headword, e.g. the "#2" in "ABOUT#2"."""

# ===========================
# File Naming
# ===========================

HARVARD_SOURCE_CSV_FILENAME: Final[str] = "harvard.csv"
"""Default filename of the category table."""

MERGE_STRATEGIES: Final[tuple[str, ...]] = ("adjacent", "grouped")
"""Supported ways of merging rows that share a headword."""
