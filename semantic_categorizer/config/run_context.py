"""Run label and output path management."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunContext(BaseSettings):
    """
    Derives report paths from a caller-supplied run label.
    Ensures all reports from a run are saved together.

    Usage:
        run = RunContext(name="moby_dick")
        run.create()
        output_dir = run.output_dir  # e.g., data/reports/moby_dick/
        path = run.path_for("percentages.txt")
    """
    model_config = SettingsConfigDict(
        env_prefix='RUN_',
        arbitrary_types_allowed=True,
        validate_default=True
    )

    name: str = Field(..., description="Run label; names the report directory")
    base_dir: Optional[Path] = Field(
        default=None,
        description="Base directory for run outputs. Defaults to reports_dir"
    )
    timestamped: bool = Field(
        default=False,
        description="Prefix the report directory with the run timestamp"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp for this run"
    )

    @field_validator('name')
    @classmethod
    def name_must_be_plain(cls, v: str) -> str:
        """Reject empty labels and labels that would escape base_dir."""
        v = v.strip()
        if not v:
            raise ValueError('Run label cannot be empty')
        if '/' in v or '\\' in v or v in ('.', '..'):
            raise ValueError(f'Run label must be a plain name, got {v!r}')
        return v

    def model_post_init(self, __context) -> None:
        """Set default base_dir after settings are available."""
        if self.base_dir is None:
            # Import here to avoid circular dependency
            from semantic_categorizer.config import settings
            object.__setattr__(self, 'base_dir', settings.paths.reports_dir)

    @property
    def run_id(self) -> str:
        """Generate run ID from timestamp."""
        return self.timestamp.strftime("%Y%m%d_%H%M%S")

    @property
    def output_dir(self) -> Path:
        """Construct the output directory path for this label."""
        if self.timestamped:
            return self.base_dir / f"{self.run_id}_{self.name}"
        return self.base_dir / self.name

    def path_for(self, filename: str) -> Path:
        """Path of a report file inside this run's directory."""
        return self.output_dir / filename

    def create(self) -> "RunContext":
        """Create the run directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self
