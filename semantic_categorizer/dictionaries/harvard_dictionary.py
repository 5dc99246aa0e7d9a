"""
Harvard Inquirer Dictionary Loader

This module parses the Harvard General Inquirer category table into a
headword -> category set mapping.

Table layout (comma-separated, quoted fields allowed):
    row 1      Entry, Source, <category>..., Othtags, Defined
    row 2      per-category occurrence counts (kept in metadata only)
    rows 3+    headword, source, then one cell per category; a non-empty
               cell marks the headword as carrying that category

Headwords may carry a numbered sense suffix ("ABOUT#1", "ABOUT#2"). The
suffix is stripped and the senses are unioned into a single entry.

Merging relies on the table being sorted so that the senses of a headword
sit on consecutive rows. With the default "adjacent" strategy a headword
that reappears after other headwords replaces its earlier entry (and a
warning is logged); the "grouped" strategy unions every row of a headword
wherever it appears.
"""

import csv
import time
import logging
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Set

from .constants import (
    HARVARD_LEADING_COLUMNS,
    HARVARD_TRAILING_COLUMNS,
    HARVARD_COUNTS_ROW,
    HARVARD_HEADER_ROW,
    MERGE_STRATEGIES,
    SENSE_SUFFIX_PATTERN,
)
from .schemas import DictionaryMetadata, HarvardDictionary
from ..errors import MalformedDictionaryRowError, ResourceUnreadableError

logger = logging.getLogger(__name__)


def normalize_headword(raw: str) -> str:
    """
    Turn a table headword into a dictionary key.

    Strips surrounding whitespace, lowercases, and removes one trailing
    "#" + digits sense suffix. Nothing else is touched: "#" not followed by
    digits to the end of the string is kept.

    Example:
        >>> normalize_headword("ABOUT#2")
        'about'
        >>> normalize_headword("Happy")
        'happy'
    """
    return SENSE_SUFFIX_PATTERN.sub("", raw.strip().lower())


def parse_categories(header: Sequence[str]) -> tuple:
    """
    Extract category names from the header row.

    Drops the two leading columns (headword, source) and the two trailing
    non-category columns ("Othtags", "Defined").

    Raises:
        ValueError: If the header has no category columns
    """
    cells = [cell.strip() for cell in header]
    span = len(cells) - HARVARD_LEADING_COLUMNS - len(HARVARD_TRAILING_COLUMNS)
    if span <= 0:
        raise ValueError(
            f"header has {len(cells)} columns; expected headword, source, "
            f"at least one category, then {', '.join(HARVARD_TRAILING_COLUMNS)}"
        )

    trailing = tuple(cells[-len(HARVARD_TRAILING_COLUMNS):])
    if trailing != HARVARD_TRAILING_COLUMNS:
        logger.debug(
            f"Trailing header columns are {trailing}, expected {HARVARD_TRAILING_COLUMNS}; "
            f"dropping them anyway"
        )

    categories = tuple(cells[HARVARD_LEADING_COLUMNS:HARVARD_LEADING_COLUMNS + span])
    if any(not cat for cat in categories):
        raise ValueError("header contains an empty category name")
    duplicates = {cat for cat in categories if categories.count(cat) > 1}
    if duplicates:
        raise ValueError(f"header repeats category names: {sorted(duplicates)}")
    return categories


def row_categories(row: Sequence[str], categories: Sequence[str]) -> Set[str]:
    """
    Categories marked on one headword row.

    Only the category span is read; cells past it (other tags, definitions)
    are ignored. The caller guarantees the row covers the span.
    """
    span = row[HARVARD_LEADING_COLUMNS:HARVARD_LEADING_COLUMNS + len(categories)]
    return {cat for cat, cell in zip(categories, span) if cell.strip()}


def build_dictionary(
    rows: Iterable[Sequence[str]],
    source: str = "<memory>",
    merge_strategy: str = "adjacent",
) -> HarvardDictionary:
    """
    Build a HarvardDictionary from table rows.

    Args:
        rows: Rows of the table, header first, as lists of cell strings
        source: Name of the resource, used in error messages and metadata
        merge_strategy: "adjacent" or "grouped" (see module docstring)

    Returns:
        Frozen HarvardDictionary

    Raises:
        MalformedDictionaryRowError: If the header or counts row is missing,
            or a headword row is shorter than the category span or has an
            empty headword
        ValueError: If merge_strategy is unknown
    """
    if merge_strategy not in MERGE_STRATEGIES:
        raise ValueError(f"Unknown merge strategy {merge_strategy!r}; expected one of {MERGE_STRATEGIES}")

    start_time = time.time()
    iterator = iter(rows)
    record_number = 0

    def next_row():
        # csv.reader tracks physical lines, which differ from records after
        # a quoted multi-line cell; plain sequences are numbered by record
        nonlocal record_number
        row = next(iterator, None)
        record_number += 1
        return row, getattr(iterator, "line_num", record_number)

    header, _ = next_row()
    if header is None:
        raise MalformedDictionaryRowError(source, HARVARD_HEADER_ROW, "table is empty (missing header row)")
    try:
        categories = parse_categories(header)
    except ValueError as e:
        raise MalformedDictionaryRowError(source, HARVARD_HEADER_ROW, str(e)) from e

    counts_row, _ = next_row()
    if counts_row is None:
        raise MalformedDictionaryRowError(source, HARVARD_COUNTS_ROW, "missing category counts row")
    # TODO: use these counts to weight rare categories in the percentages report
    category_counts = {
        cat: cell.strip()
        for cat, cell in zip(categories, counts_row[HARVARD_LEADING_COLUMNS:])
        if cell.strip()
    }

    required = HARVARD_LEADING_COLUMNS + len(categories)
    words: Dict[str, Set[str]] = {}
    previous_key: Optional[str] = None
    rows_read = 0
    merged_rows = 0

    while True:
        row, line_number = next_row()
        if row is None:
            break
        if not row:
            # Blank line; it never breaks adjacency
            continue
        if len(row) < required:
            raise MalformedDictionaryRowError(
                source, line_number,
                f"row has {len(row)} columns but the category span needs {required}"
            )

        key = normalize_headword(row[0])
        if not key:
            raise MalformedDictionaryRowError(source, line_number, "empty headword")

        marked = row_categories(row, categories)
        rows_read += 1

        if key == previous_key or (merge_strategy == "grouped" and key in words):
            words[key] |= marked
            merged_rows += 1
        else:
            if key in words:
                logger.warning(
                    f"{source}, line {line_number}: headword {key!r} is not adjacent to its "
                    f"earlier rows; replacing the earlier entry (table not sorted?)"
                )
            words[key] = set(marked)
        previous_key = key

    frozen: Dict[str, FrozenSet[str]] = {word: frozenset(cats) for word, cats in words.items()}
    metadata = DictionaryMetadata(
        categories=categories,
        category_counts=category_counts,
        total_words=len(frozen),
        rows_read=rows_read,
        merged_rows=merged_rows,
        merge_strategy=merge_strategy,
        load_time_seconds=time.time() - start_time,
        source_file=source,
    )
    return HarvardDictionary(words=frozen, metadata=metadata)


def load_harvard_dictionary(
    csv_path: Path,
    encoding: str = "utf-8",
    merge_strategy: str = "adjacent",
) -> HarvardDictionary:
    """
    Load the category table from a CSV file.

    Raises:
        ResourceUnreadableError: If the file is missing or cannot be decoded
        MalformedDictionaryRowError: If a row cannot be interpreted
    """
    csv_path = Path(csv_path)
    if not csv_path.is_file():
        raise ResourceUnreadableError(
            csv_path,
            "dictionary table not found. Set PATHS_DICTIONARY_FILE or pass --dictionary"
        )

    logger.info(f"Loading Harvard dictionary from {csv_path}")
    try:
        with open(csv_path, 'r', encoding=encoding, newline='') as f:
            reader = csv.reader(f)
            try:
                dictionary = build_dictionary(reader, str(csv_path), merge_strategy)
            except csv.Error as e:
                raise MalformedDictionaryRowError(csv_path, reader.line_num, f"CSV parse error: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceUnreadableError(csv_path, str(e)) from e

    meta = dictionary.metadata
    logger.info(
        f"Dictionary loaded in {meta.load_time_seconds:.3f}s: "
        f"{meta.total_words} headwords from {meta.rows_read} rows "
        f"({meta.merged_rows} sense rows merged), {len(meta.categories)} categories"
    )
    if logger.isEnabledFor(logging.DEBUG):
        for word, cats in dictionary.iter_entries():
            logger.debug(f"{word} : {cats}")
    return dictionary
