"""Project path configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from semantic_categorizer.config._loader import load_yaml_section
from semantic_categorizer.dictionaries.constants import HARVARD_SOURCE_CSV_FILENAME


def _get_config() -> dict:
    return load_yaml_section(section="paths")


class PathsConfig(BaseSettings):
    """
    Project path configuration.
    Relative paths are resolved against project_root.
    """
    model_config = SettingsConfigDict(
        env_prefix='PATHS_',
        case_sensitive=False
    )

    # Project root directory (computed)
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    dictionary_file: Optional[Path] = Field(
        default_factory=lambda: _get_config().get('dictionary_file')
    )
    reports_root: Optional[Path] = Field(
        default_factory=lambda: _get_config().get('reports_dir')
    )

    def _resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project_root / path

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def dictionary_dir(self) -> Path:
        """Directory containing dictionary resources"""
        return self.data_dir / "dictionary"

    @property
    def dictionary_csv(self) -> Path:
        """Path to the Harvard Inquirer category table."""
        if self.dictionary_file is not None:
            return self._resolve(self.dictionary_file)
        return self.dictionary_dir / HARVARD_SOURCE_CSV_FILENAME

    @property
    def reports_dir(self) -> Path:
        """Directory under which each run writes its reports"""
        if self.reports_root is not None:
            return self._resolve(self.reports_root)
        return self.data_dir / "reports"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        for directory in (self.dictionary_dir, self.reports_dir):
            directory.mkdir(parents=True, exist_ok=True)
