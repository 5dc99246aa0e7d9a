"""Dictionary, lemmatizer and report configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from semantic_categorizer.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section(section="categorizer")


class DictionaryConfig(BaseSettings):
    """How the category table is read and how sense rows are merged."""
    model_config = SettingsConfigDict(
        env_prefix='CATEGORIZER_DICT_',
        case_sensitive=False
    )

    encoding: str = Field(
        default_factory=lambda: _get_config().get('dictionary', {}).get('encoding', 'utf-8')
    )
    merge_strategy: Literal["adjacent", "grouped"] = Field(
        default_factory=lambda: _get_config().get('dictionary', {}).get('merge_strategy', 'adjacent')
    )


class LemmatizerConfig(BaseSettings):
    """spaCy lemmatizer settings and failure handling."""
    model_config = SettingsConfigDict(
        env_prefix='CATEGORIZER_LEMMA_',
        case_sensitive=False
    )

    spacy_model: str = Field(
        default_factory=lambda: _get_config().get('lemmatizer', {}).get('spacy_model', 'en_core_web_sm')
    )
    include_punctuation: bool = Field(
        default_factory=lambda: _get_config().get('lemmatizer', {}).get('include_punctuation', True)
    )
    skip_failed_lines: bool = Field(
        default_factory=lambda: _get_config().get('lemmatizer', {}).get('skip_failed_lines', False)
    )
    show_progress: bool = Field(
        default_factory=lambda: _get_config().get('lemmatizer', {}).get('show_progress', False)
    )


class ReportConfig(BaseSettings):
    """Output format settings."""
    model_config = SettingsConfigDict(
        env_prefix='CATEGORIZER_REPORT_',
        case_sensitive=False
    )

    precision: int = Field(
        default_factory=lambda: _get_config().get('report', {}).get('precision', 4),
        ge=0
    )
    category_by_word_filename: str = Field(
        default_factory=lambda: _get_config().get('report', {}).get(
            'category_by_word_filename', 'category_by_word.txt'
        )
    )
    percentages_filename: str = Field(
        default_factory=lambda: _get_config().get('report', {}).get(
            'percentages_filename', 'percentages.txt'
        )
    )


class CategorizerConfig(BaseSettings):
    """
    Categorization run configuration.
    Loads from configs/config.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='CATEGORIZER_',
        env_nested_delimiter='__',
        case_sensitive=False
    )

    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)
    lemmatizer: LemmatizerConfig = Field(default_factory=LemmatizerConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
