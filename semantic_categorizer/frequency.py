"""
Lemma frequency lists.

FrequencyBuilder feeds each input line to a lemmatizer and counts the
lowercased lemmas it returns. Counts accumulate across the whole input,
regardless of line boundaries. The result is an immutable FrequencyList.

Usage:
    from semantic_categorizer.frequency import FrequencyBuilder
    from semantic_categorizer.lemmatizer import SpacyLemmatizer

    builder = FrequencyBuilder(SpacyLemmatizer())
    frequencies = builder.build_from_file(Path("data/corpus.txt"))
    print(frequencies.total_tokens, frequencies["happy"])
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from tqdm import tqdm

from semantic_categorizer.errors import LemmatizerError, ResourceUnreadableError
from semantic_categorizer.lemmatizer import Lemmatizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrequencyList:
    """
    Lemma -> occurrence count, plus the total token count.

    total_tokens always equals the sum of the counts: every lemma the
    lemmatizer produced is counted, categorizable or not. skipped_lines
    lists the line numbers dropped after a lemmatizer failure (only
    populated when failures are configured to be skipped).
    """
    counts: Mapping[str, int] = field(default_factory=dict)
    total_tokens: int = 0
    skipped_lines: Tuple[int, ...] = ()

    def __post_init__(self):
        # Read-only views so the total cannot drift from the counts
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))
        object.__setattr__(self, "skipped_lines", tuple(self.skipped_lines))

        bad = {lemma: n for lemma, n in self.counts.items() if n <= 0}
        if bad:
            raise ValueError(f"Occurrence counts must be positive: {bad}")
        if self.total_tokens != sum(self.counts.values()):
            raise ValueError(
                f"total_tokens={self.total_tokens} does not match the sum of counts "
                f"({sum(self.counts.values())})"
            )

    @classmethod
    def from_lemmas(cls, lemmas: Iterable[str]) -> "FrequencyList":
        """Count an already lemmatized token stream."""
        counts = Counter(lemma.lower() for lemma in lemmas if lemma)
        return cls(counts=dict(counts), total_tokens=sum(counts.values()))

    def merge(self, other: "FrequencyList") -> "FrequencyList":
        """
        Sum two partial lists into a new one.

        Used to combine lists built over separate slices of the input.
        Skipped line numbers are concatenated as-is; callers that split the
        input are responsible for keeping them meaningful.
        """
        counts = Counter(self.counts)
        counts.update(other.counts)
        return FrequencyList(
            counts=dict(counts),
            total_tokens=self.total_tokens + other.total_tokens,
            skipped_lines=self.skipped_lines + other.skipped_lines,
        )

    @property
    def distinct_lemmas(self) -> int:
        return len(self.counts)

    def most_common(self, n: Optional[int] = None):
        return Counter(self.counts).most_common(n)

    def items(self):
        return self.counts.items()

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "counts": dict(self.counts),
            "total_tokens": self.total_tokens,
            "skipped_lines": list(self.skipped_lines),
        }

    def __getitem__(self, lemma: str) -> int:
        return self.counts.get(lemma, 0)

    def __contains__(self, lemma: str) -> bool:
        return lemma in self.counts

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __reduce__(self):
        return (type(self), (dict(self.counts), self.total_tokens, self.skipped_lines))


class FrequencyBuilder:
    """
    Builds a FrequencyList from lines of text.

    This class:
    1. Passes each line to the lemmatizer
    2. Lowercases every lemma it returns
    3. Counts occurrences and total tokens

    A lemmatizer failure aborts the build with LemmatizerError, unless
    skip_failed_lines is set; then the line is logged and recorded in
    FrequencyList.skipped_lines.
    """

    def __init__(
        self,
        lemmatizer: Lemmatizer,
        skip_failed_lines: Optional[bool] = None,
        show_progress: Optional[bool] = None,
    ):
        """
        Initialize frequency builder.

        Args:
            lemmatizer: Object with lemmatize(line) -> sequence of lemmas
            skip_failed_lines: Skip lines the lemmatizer fails on (default from settings)
            show_progress: Display a tqdm progress bar (default from settings)
        """
        if skip_failed_lines is None or show_progress is None:
            from semantic_categorizer.config import settings
            lemma_config = settings.categorizer.lemmatizer
            if skip_failed_lines is None:
                skip_failed_lines = lemma_config.skip_failed_lines
            if show_progress is None:
                show_progress = lemma_config.show_progress

        self.lemmatizer = lemmatizer
        self.skip_failed_lines = skip_failed_lines
        self.show_progress = show_progress

    def build(
        self,
        lines: Iterable[str],
        source: Optional[Union[str, Path]] = None,
    ) -> FrequencyList:
        """
        Count lemmas over all lines.

        Args:
            lines: Lines of text, in order
            source: Name of the input, used in error messages

        Returns:
            FrequencyList over the whole input

        Raises:
            LemmatizerError: If the lemmatizer fails and failures are not skipped
        """
        counts: Counter = Counter()
        total_tokens = 0
        skipped = []

        if self.show_progress:
            lines = tqdm(lines, desc="Lemmatizing", unit=" lines")

        for line_number, line in enumerate(lines, start=1):
            try:
                lemmas = [lemma.lower() for lemma in self.lemmatizer.lemmatize(line) if lemma]
            except Exception as e:
                if not self.skip_failed_lines:
                    raise LemmatizerError(line_number, line, source, reason=str(e)) from e
                logger.warning(f"Skipping line {line_number} after lemmatizer failure: {e}")
                skipped.append(line_number)
                continue

            counts.update(lemmas)
            total_tokens += len(lemmas)

        logger.info(
            f"Counted {total_tokens} tokens, {len(counts)} distinct lemmas"
            + (f", {len(skipped)} lines skipped" if skipped else "")
        )
        return FrequencyList(
            counts=dict(counts),
            total_tokens=total_tokens,
            skipped_lines=tuple(skipped),
        )

    def build_from_file(self, input_path: Path, encoding: str = "utf-8") -> FrequencyList:
        """
        Count lemmas over a UTF-8 text file, one unit per line.

        Raises:
            ResourceUnreadableError: If the file is missing or cannot be decoded
            LemmatizerError: If the lemmatizer fails and failures are not skipped
        """
        input_path = Path(input_path)
        if not input_path.is_file():
            raise ResourceUnreadableError(input_path, "input corpus not found")

        logger.info(f"Building frequency list from {input_path}")
        try:
            with open(input_path, 'r', encoding=encoding) as f:
                return self.build((line.rstrip("\r\n") for line in f), source=input_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceUnreadableError(input_path, str(e)) from e
