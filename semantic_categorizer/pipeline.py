"""
Categorization Pipeline

Runs the stages strictly in sequence, each finishing before the next
starts:

    1. Load the Harvard dictionary
    2. Build the lemma frequency list from the input corpus
    3. Categorize the frequency list
    4. Compute percentages and write the two reports

Any failure aborts the run before reports are written.

Usage:
    from semantic_categorizer.pipeline import CategorizationPipeline

    pipeline = CategorizationPipeline()
    outcome = pipeline.run(Path("data/corpus.txt"), label="corpus")
    print(outcome.percentages["Positiv"])
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from semantic_categorizer.categorizer import CategorizationResult, categorize
from semantic_categorizer.config import CategorizerConfig, RunContext
from semantic_categorizer.dictionaries import HarvardDictionary, load_harvard_dictionary
from semantic_categorizer.frequency import FrequencyBuilder
from semantic_categorizer.lemmatizer import Lemmatizer, SpacyLemmatizer
from semantic_categorizer.reporting import ReportGenerator

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything a run produced."""
    result: CategorizationResult
    percentages: Dict[str, float]
    summary: Dict[str, int]
    report_paths: Dict[str, Path] = field(default_factory=dict)
    elapsed_seconds: float = 0.0


class CategorizationPipeline:
    """
    Wires dictionary loading, frequency building, categorization and reporting.

    Paths are supplied by the caller or by settings; nothing is hard-coded.
    """

    def __init__(
        self,
        config: Optional[CategorizerConfig] = None,
        lemmatizer: Optional[Lemmatizer] = None,
        dictionary_path: Optional[Path] = None,
        reports_dir: Optional[Path] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Optional CategorizerConfig. If None, loads from settings.
            lemmatizer: Lemmatizer to use; a SpacyLemmatizer is created lazily if None
            dictionary_path: Category table path (default from settings)
            reports_dir: Base directory for run reports (default from settings)
        """
        if config is None or dictionary_path is None or reports_dir is None:
            from semantic_categorizer.config import settings
            config = config or settings.categorizer
            dictionary_path = dictionary_path or settings.paths.dictionary_csv
            reports_dir = reports_dir or settings.paths.reports_dir

        self.config = config
        self.dictionary_path = Path(dictionary_path)
        self.reports_dir = Path(reports_dir)
        self._lemmatizer = lemmatizer
        self.reporter = ReportGenerator(config.report)

    @property
    def lemmatizer(self) -> Lemmatizer:
        """Lazy-load the spaCy lemmatizer."""
        if self._lemmatizer is None:
            lemmatizer = SpacyLemmatizer(
                spacy_model=self.config.lemmatizer.spacy_model,
                include_punctuation=self.config.lemmatizer.include_punctuation,
            )
            # Load the model now so a missing model fails before the corpus is read
            lemmatizer.nlp
            self._lemmatizer = lemmatizer
        return self._lemmatizer

    def load_dictionary(self) -> HarvardDictionary:
        return load_harvard_dictionary(
            self.dictionary_path,
            encoding=self.config.dictionary.encoding,
            merge_strategy=self.config.dictionary.merge_strategy,
        )

    def run(self, input_path: Path, label: str, timestamped: bool = False) -> PipelineResult:
        """
        Categorize one corpus file and write its reports.

        Args:
            input_path: UTF-8 text file, one unit per line
            label: Run label; names the report directory
            timestamped: Prefix the report directory with the run timestamp

        Returns:
            PipelineResult

        Raises:
            CategorizerError: Any fatal condition (unreadable resource,
                malformed dictionary, lemmatizer failure, empty corpus)
        """
        start = time.time()
        run = RunContext(name=label, base_dir=self.reports_dir, timestamped=timestamped)

        dictionary = self.load_dictionary()

        builder = FrequencyBuilder(
            self.lemmatizer,
            skip_failed_lines=self.config.lemmatizer.skip_failed_lines,
            show_progress=self.config.lemmatizer.show_progress,
        )
        frequencies = builder.build_from_file(Path(input_path))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Frequency list: {frequencies.counts}")

        result = categorize(frequencies, dictionary)

        # Percentages first: an empty corpus must fail before any file is written
        percentages = self.reporter.category_percentages(result)
        report_paths = self.reporter.write_reports(result, run)

        elapsed = time.time() - start
        logger.info(f"Run '{label}' finished in {elapsed:.2f}s")
        return PipelineResult(
            result=result,
            percentages=percentages,
            summary=self.reporter.summary(result),
            report_paths=report_paths,
            elapsed_seconds=elapsed,
        )
