"""
CLI entry point for the semantic categorizer.

Output layout:
    data/reports/
    └── {label}/                      # or {YYYYMMDD_HHMMSS}_{label} with --timestamped
        ├── category_by_word.txt      # one line per distinct lemma
        └── percentages.txt           # summary block + per-category table

Usage:
    python -m semantic_categorizer data/corpus.txt --label corpus
    python -m semantic_categorizer data/corpus.txt --dictionary data/dictionary/harvard.csv
    python -m semantic_categorizer data/corpus.txt --merge-strategy grouped --skip-failed-lines
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from semantic_categorizer.config import settings
from semantic_categorizer.dictionaries import MERGE_STRATEGIES
from semantic_categorizer.errors import CategorizerError
from semantic_categorizer.pipeline import CategorizationPipeline

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semantic_categorizer",
        description="Categorize the lemmas of a text with the Harvard Inquirer dictionary",
    )
    parser.add_argument("input", type=Path, help="UTF-8 text file, one unit per line")
    parser.add_argument("--label", help="Run label naming the report directory (default: input file stem)")
    parser.add_argument("--dictionary", type=Path, help="Category table CSV (default from settings)")
    parser.add_argument("--output-dir", type=Path, help="Base directory for reports (default from settings)")
    parser.add_argument("--merge-strategy", choices=MERGE_STRATEGIES,
                        help="How rows sharing a headword are merged")
    parser.add_argument("--spacy-model", help="spaCy model used for lemmatization")
    parser.add_argument("--skip-failed-lines", action="store_true", default=None,
                        help="Skip lines the lemmatizer fails on instead of aborting")
    parser.add_argument("--timestamped", action="store_true",
                        help="Prefix the report directory with the run timestamp")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    verbosity.add_argument("--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)
    elif args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = settings.categorizer
    if args.merge_strategy:
        config = config.model_copy(update={
            "dictionary": config.dictionary.model_copy(update={"merge_strategy": args.merge_strategy})
        })
    lemma_updates = {}
    if args.spacy_model:
        lemma_updates["spacy_model"] = args.spacy_model
    if args.skip_failed_lines:
        lemma_updates["skip_failed_lines"] = True
    if lemma_updates:
        config = config.model_copy(update={
            "lemmatizer": config.lemmatizer.model_copy(update=lemma_updates)
        })

    label = args.label or args.input.stem
    try:
        pipeline = CategorizationPipeline(
            config=config,
            dictionary_path=args.dictionary,
            reports_dir=args.output_dir,
        )
        outcome = pipeline.run(args.input, label=label, timestamped=args.timestamped)
    except (CategorizerError, ValueError, RuntimeError) as e:
        logger.error(str(e))
        return 1

    for key, value in outcome.summary.items():
        logger.info(f"  {key:24s}: {value:,}")
    for name, path in outcome.report_paths.items():
        logger.info(f"  {name:24s}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
