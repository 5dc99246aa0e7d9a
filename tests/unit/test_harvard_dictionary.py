"""
Unit tests for semantic_categorizer/dictionaries/harvard_dictionary.py

Tests headword normalization, header parsing, sense merging, column
truncation and malformed-table handling.
"""

import csv
import logging

import pytest

from semantic_categorizer.dictionaries import (
    HarvardDictionary,
    build_dictionary,
    load_harvard_dictionary,
    normalize_headword,
    parse_categories,
    row_categories,
)
from semantic_categorizer.errors import MalformedDictionaryRowError, ResourceUnreadableError
from tests.conftest import write_table


@pytest.fixture
def small_field_limit():
    previous = csv.field_size_limit(50)
    yield
    csv.field_size_limit(previous)


HEADER = ["Entry", "Source", "Positiv", "Emot", "Ngtv", "Othtags", "Defined"]
COUNTS = ["", "", "1915", "311", "2291", "", ""]


class TestNormalizeHeadword:
    """Tests for normalize_headword."""

    @pytest.mark.parametrize("raw, expected", [
        ("ABOUT#1", "about"),
        ("ABOUT#12", "about"),
        ("about", "about"),
        ("  Happy  ", "happy"),
        ("A#1#2", "a#1"),
    ])
    def test_strips_trailing_sense_suffix(self, raw, expected):
        assert normalize_headword(raw) == expected

    def test_keeps_hash_without_digits(self):
        """Only '#' followed by digits to the end is a sense suffix."""
        assert normalize_headword("C#") == "c#"
        assert normalize_headword("AB#1X") == "ab#1x"

    def test_idempotent(self):
        once = normalize_headword("ABOUT#3")
        assert normalize_headword(once) == once


class TestParseCategories:
    """Tests for header parsing."""

    def test_drops_leading_and_trailing_columns(self):
        assert parse_categories(HEADER) == ("Positiv", "Emot", "Ngtv")

    def test_header_without_categories_rejected(self):
        with pytest.raises(ValueError, match="at least one category"):
            parse_categories(["Entry", "Source", "Othtags", "Defined"])

    def test_duplicate_category_rejected(self):
        with pytest.raises(ValueError, match="repeats"):
            parse_categories(["Entry", "Source", "Emot", "Emot", "Othtags", "Defined"])

    def test_row_categories_ignores_cells_past_span(self):
        row = ["HAPPY", "H4", "Positiv", "", "", "Ngtv", "Emot", "extra"]
        assert row_categories(row, ("Positiv", "Emot", "Ngtv")) == {"Positiv"}

    def test_whitespace_cell_is_empty(self):
        row = ["HAPPY", "H4", " ", "x", "", "", ""]
        assert row_categories(row, ("Positiv", "Emot", "Ngtv")) == {"Emot"}


class TestBuildDictionary:
    """Tests for build_dictionary."""

    def test_adjacent_senses_are_unioned(self, happy_rows):
        dictionary = build_dictionary(happy_rows)

        assert dictionary.words["happy"] == frozenset({"Positiv", "Emot"})
        assert dictionary.words["sad"] == frozenset({"Emot", "Ngtv"})
        assert "happy#1" not in dictionary.words
        assert len(dictionary) == 2

    def test_metadata(self, happy_rows):
        meta = build_dictionary(happy_rows, source="happy.csv").metadata

        assert meta.categories == ("Positiv", "Emot", "Ngtv")
        assert meta.category_counts == {"Positiv": "1915", "Emot": "311", "Ngtv": "2291"}
        assert meta.rows_read == 3
        assert meta.merged_rows == 1
        assert meta.total_words == 2
        assert meta.source_file == "happy.csv"

    def test_trailing_columns_never_categories(self):
        rows = [
            HEADER,
            COUNTS,
            ["WORD", "H4", "", "", "", "Positiv", "Emot", "Ngtv", "more"],
        ]
        dictionary = build_dictionary(rows)

        assert dictionary.words["word"] == frozenset()

    def test_headword_with_no_marks_is_present(self):
        rows = [HEADER, COUNTS, ["THE", "H4", "", "", "", "", ""]]
        dictionary = build_dictionary(rows)

        assert "the" in dictionary
        assert dictionary.get_word_categories("the") == frozenset()

    def test_headwords_lowercased(self):
        rows = [HEADER, COUNTS, ["ABANDON", "H4", "", "", "Ngtv", "", ""]]
        assert build_dictionary(rows).words == {"abandon": frozenset({"Ngtv"})}

    def test_deterministic(self, happy_rows):
        first = build_dictionary(happy_rows)
        second = build_dictionary(happy_rows)

        assert first.words == second.words
        assert first.categories == second.categories

    def test_non_adjacent_duplicate_replaces_and_warns(self, caplog):
        rows = [
            HEADER, COUNTS,
            ["ABOUT#1", "H4", "Positiv", "", "", "", ""],
            ["ZEBRA", "H4", "", "", "", "", ""],
            ["ABOUT#2", "H4", "", "Emot", "", "", ""],
        ]
        with caplog.at_level(logging.WARNING):
            dictionary = build_dictionary(rows, merge_strategy="adjacent")

        assert dictionary.words["about"] == frozenset({"Emot"})
        assert "not adjacent" in caplog.text
        assert "line 5" in caplog.text

    def test_grouped_strategy_merges_regardless_of_order(self):
        rows = [
            HEADER, COUNTS,
            ["ABOUT#1", "H4", "Positiv", "", "", "", ""],
            ["ZEBRA", "H4", "", "", "", "", ""],
            ["ABOUT#2", "H4", "", "Emot", "", "", ""],
        ]
        dictionary = build_dictionary(rows, merge_strategy="grouped")

        assert dictionary.words["about"] == frozenset({"Positiv", "Emot"})
        assert dictionary.metadata.merged_rows == 1

    def test_unknown_merge_strategy(self, happy_rows):
        with pytest.raises(ValueError, match="merge strategy"):
            build_dictionary(happy_rows, merge_strategy="sorted")

    def test_blank_line_skipped(self):
        rows = [
            HEADER, COUNTS,
            ["HAPPY#1", "H4", "Positiv", "", "", "", ""],
            [],
            ["HAPPY#2", "H4", "", "Emot", "", "", ""],
        ]
        assert build_dictionary(rows).words["happy"] == frozenset({"Positiv", "Emot"})


class TestMalformedTables:
    """Malformed input fails the whole load."""

    def test_short_row_names_line(self):
        rows = [
            HEADER, COUNTS,
            ["HAPPY", "H4", "Positiv", "", "", "", ""],
            ["SAD", "H4", "", "Emot"],
        ]
        with pytest.raises(MalformedDictionaryRowError) as exc_info:
            build_dictionary(rows, source="bad.csv")

        assert exc_info.value.line_number == 4
        assert "bad.csv" in str(exc_info.value)
        assert "needs 5" in str(exc_info.value)

    def test_row_exactly_covering_span_accepted(self):
        rows = [HEADER, COUNTS, ["SAD", "H4", "", "Emot", "Ngtv"]]
        assert build_dictionary(rows).words["sad"] == frozenset({"Emot", "Ngtv"})

    def test_empty_table(self):
        with pytest.raises(MalformedDictionaryRowError, match="missing header"):
            build_dictionary([])

    def test_missing_counts_row(self):
        with pytest.raises(MalformedDictionaryRowError, match="counts row"):
            build_dictionary([HEADER])

    def test_empty_headword(self):
        rows = [HEADER, COUNTS, ["", "H4", "Positiv", "", "", "", ""]]
        with pytest.raises(MalformedDictionaryRowError, match="empty headword"):
            build_dictionary(rows)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            build_dictionary([HEADER])


class TestLoadHarvardDictionary:
    """File loading."""

    def test_loads_csv(self, happy_csv):
        dictionary = load_harvard_dictionary(happy_csv)

        assert isinstance(dictionary, HarvardDictionary)
        assert dictionary.words["happy"] == frozenset({"Positiv", "Emot"})
        assert dictionary.metadata.source_file == str(happy_csv)

    def test_quoted_commas_stay_in_defined_column(self, tmp_path):
        path = tmp_path / "quoted.csv"
        path.write_text(
            "Entry,Source,Positiv,Emot,Othtags,Defined\n"
            ",,10,20,,\n"
            'GLAD,H4,Positiv,,Modif,"| adj: pleased, happy, content"\n',
            encoding='utf-8',
        )
        dictionary = load_harvard_dictionary(path)

        assert dictionary.words["glad"] == frozenset({"Positiv"})

    def test_error_names_physical_line_after_multiline_cell(self, tmp_path):
        path = tmp_path / "multiline.csv"
        path.write_text(
            "Entry,Source,Positiv,Emot,Othtags,Defined\n"
            ",,10,20,,\n"
            'GLAD,H4,Positiv,,Modif,"| adj: pleased,\n'
            'happy"\n'
            "SAD,H4\n",
            encoding='utf-8',
        )

        with pytest.raises(MalformedDictionaryRowError) as exc_info:
            load_harvard_dictionary(path)

        assert exc_info.value.line_number == 5

    def test_csv_parse_error_names_line(self, tmp_path, small_field_limit):
        path = write_table(tmp_path / "long.csv", [
            HEADER, COUNTS,
            ["HAPPY", "H4", "Positiv", "", "", "", ""],
            ["SAD", "H4", "", "Emot", "Ngtv", "", "x" * 100],
        ])

        with pytest.raises(MalformedDictionaryRowError, match="CSV parse error") as exc_info:
            load_harvard_dictionary(path)

        assert exc_info.value.line_number == 4
        assert "line 4" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceUnreadableError) as exc_info:
            load_harvard_dictionary(tmp_path / "missing.csv")

        assert "missing.csv" in str(exc_info.value)
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"Entry,Source,Positiv,Othtags,Defined\n,,1,,\nCAF\xe9,H4,Positiv,,\n")

        with pytest.raises(ResourceUnreadableError):
            load_harvard_dictionary(path, encoding="utf-8")

    def test_encoding_option(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes(b"Entry,Source,Positiv,Othtags,Defined\n,,1,,\nCAF\xe9,H4,Positiv,,\n")

        dictionary = load_harvard_dictionary(path, encoding="latin-1")
        assert "caf\xe9" in dictionary


class TestHarvardDictionary:
    """Lookup helpers on the loaded model."""

    def test_case_insensitive_lookup(self, happy_dictionary):
        assert happy_dictionary.get_word_categories("HAPPY") == frozenset({"Positiv", "Emot"})
        assert "Sad" in happy_dictionary

    def test_unknown_word(self, happy_dictionary):
        assert happy_dictionary.get_word_categories("zebra") == frozenset()

    def test_is_in_category(self, happy_dictionary):
        assert happy_dictionary.is_in_category("sad", "Ngtv")
        assert not happy_dictionary.is_in_category("happy", "Ngtv")
        with pytest.raises(ValueError, match="Invalid category"):
            happy_dictionary.is_in_category("sad", "Othtags")

    def test_get_category_words(self, happy_dictionary):
        assert happy_dictionary.get_category_words("Emot") == frozenset({"happy", "sad"})

    def test_iter_entries_in_declared_order(self, happy_dictionary):
        entries = dict(happy_dictionary.iter_entries())
        assert entries["happy"] == ["Positiv", "Emot"]

    def test_frozen(self, happy_dictionary):
        with pytest.raises(Exception):
            happy_dictionary.words = {}

    def test_words_read_only(self, happy_dictionary):
        with pytest.raises(TypeError):
            happy_dictionary.words["zebra"] = frozenset({"Othtags"})
        assert "zebra" not in happy_dictionary

    def test_serializes_categories_in_declared_order(self, happy_dictionary):
        assert happy_dictionary.model_dump()["words"]["happy"] == ["Positiv", "Emot"]

    def test_rejects_unknown_categories(self, happy_dictionary):
        with pytest.raises(ValueError):
            HarvardDictionary(
                words={"odd": frozenset({"Othtags"})},
                metadata=happy_dictionary.metadata,
            )
