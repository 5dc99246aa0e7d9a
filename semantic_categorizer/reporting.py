"""Report generation for categorization runs."""

import logging
from pathlib import Path
from typing import Dict, Optional

from semantic_categorizer.categorizer import CategorizationResult
from semantic_categorizer.config import ReportConfig, RunContext
from semantic_categorizer.errors import EmptyCorpusError

logger = logging.getLogger(__name__)


SUMMARY_LABELS = {
    "total_tokens": "Total tokens",
    "uncategorizable_tokens": "Total uncategorizable tokens",
    "categorizable_tokens": "Total categorizable tokens",
    "total_lemmas": "Total lemmas",
    "uncategorizable_lemmas": "Total uncategorizable lemmas",
    "categorizable_lemmas": "Total categorizable lemmas",
}


class ReportGenerator:
    """
    Renders category percentages and the per-word listing.

    Percentages are computed against all tokens (categorizable or not):
    100 * category token count / total tokens. Lemmas with several
    categories count toward each, so the column does not sum to 100.

    Usage:
        generator = ReportGenerator()
        percentages = generator.category_percentages(result)
        paths = generator.write_reports(result, RunContext(name="corpus_a"))
    """

    def __init__(self, config: Optional[ReportConfig] = None):
        """
        Initialize the report generator.

        Args:
            config: Optional ReportConfig. If None, loads from settings.
        """
        if config is None:
            from semantic_categorizer.config import settings
            config = settings.categorizer.report
        self.config = config

    @staticmethod
    def category_percentages(result: CategorizationResult) -> Dict[str, float]:
        """
        Percentage of all tokens carrying each category, in dictionary order.

        Raises:
            EmptyCorpusError: If no tokens were processed
        """
        total = result.total_tokens
        if total == 0:
            raise EmptyCorpusError()
        return {
            cat: 100 * result.category_frequencies[cat] / total
            for cat in result.categories
        }

    @staticmethod
    def summary(result: CategorizationResult) -> Dict[str, int]:
        """Token and lemma totals, split into categorizable and not."""
        return {
            "total_tokens": result.total_tokens,
            "uncategorizable_tokens": result.uncategorizable_tokens,
            "categorizable_tokens": result.categorizable_tokens,
            "total_lemmas": result.total_lemmas,
            "uncategorizable_lemmas": len(result.uncategorizable),
            "categorizable_lemmas": result.categorizable_lemmas,
        }

    @staticmethod
    def format_summary(summary: Dict[str, int]) -> str:
        """Header block of the percentages report."""
        return "\n".join(f"{SUMMARY_LABELS[key]}: {value}" for key, value in summary.items())

    def render_category_by_word(self, result: CategorizationResult) -> str:
        """One line per distinct lemma."""
        lines = list(result.records())
        return "\n".join(lines) + ("\n" if lines else "")

    def render_percentages(self, result: CategorizationResult) -> str:
        """
        Summary block, then a "category, percentage, token count" table.

        Raises:
            EmptyCorpusError: If no tokens were processed
        """
        percentages = self.category_percentages(result)
        precision = self.config.precision

        sections = [self.format_summary(self.summary(result)), "", "category, percentage, token count"]
        for cat, pct in percentages.items():
            sections.append(f"{cat}, {pct:.{precision}f}, {result.category_frequencies[cat]}")
        return "\n".join(sections) + "\n"

    def write_reports(self, result: CategorizationResult, run: RunContext) -> Dict[str, Path]:
        """
        Write both reports into the run directory.

        Both reports are rendered before anything is written, so an empty
        corpus leaves no files behind.

        Returns:
            Dict with "category_by_word" and "percentages" paths
        """
        percentages_text = self.render_percentages(result)
        by_word_text = self.render_category_by_word(result)

        run.create()
        paths = {
            "category_by_word": run.path_for(self.config.category_by_word_filename),
            "percentages": run.path_for(self.config.percentages_filename),
        }
        paths["category_by_word"].write_text(by_word_text, encoding='utf-8')
        paths["percentages"].write_text(percentages_text, encoding='utf-8')

        for name, path in paths.items():
            logger.info(f"Saved {name} report to {path}")
        return paths
