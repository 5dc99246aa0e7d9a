"""
Semantic Categorizer Configuration Package.

This module uses Pydantic Settings to:
1. Define the schema for all configuration
2. Load defaults from configs/config.yaml
3. Automatically override with environment variables from .env

Usage:
    from semantic_categorizer.config import settings

    # Access paths
    dictionary_csv = settings.paths.dictionary_csv

    # Access categorizer settings
    strategy = settings.categorizer.dictionary.merge_strategy
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from semantic_categorizer.config.paths import PathsConfig
from semantic_categorizer.config.categorizer import (
    CategorizerConfig,
    DictionaryConfig,
    LemmatizerConfig,
    ReportConfig,
)
from semantic_categorizer.config.run_context import RunContext


class Settings(BaseSettings):
    """
    Main settings class that combines all configuration sections.

    Usage:
        from semantic_categorizer.config import settings

        settings.paths.reports_dir
        settings.categorizer.report.precision
    """
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    categorizer: CategorizerConfig = Field(default_factory=CategorizerConfig)


# ===========================
# Global Settings Instance
# ===========================

settings = Settings()


# ===========================
# Utility Functions
# ===========================

ensure_directories = settings.paths.ensure_directories


__all__ = [
    "settings",
    "Settings",
    "ensure_directories",
    "RunContext",
    "PathsConfig",
    "CategorizerConfig",
    "DictionaryConfig",
    "LemmatizerConfig",
    "ReportConfig",
]
