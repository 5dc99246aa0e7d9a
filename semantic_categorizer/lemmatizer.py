"""
Lemmatizer adapters.

The frequency builder only needs something with
``lemmatize(line: str) -> Sequence[str]``. Tokens that cannot be
lemmatized are left out of the returned sequence.

SpacyLemmatizer is the production implementation; tests pass stubs.
"""

import logging
from typing import List, Optional, Protocol, Sequence, runtime_checkable

try:
    import spacy
    from spacy.language import Language
    SPACY_AVAILABLE = True
except ImportError:
    SPACY_AVAILABLE = False

logger = logging.getLogger(__name__)


@runtime_checkable
class Lemmatizer(Protocol):
    """Anything that turns a line of text into lemma strings."""

    def lemmatize(self, line: str) -> Sequence[str]:
        ...


class SpacyLemmatizer:
    """Lemmatizes text lines with a spaCy pipeline"""

    def __init__(self,
                 spacy_model: Optional[str] = None,
                 include_punctuation: Optional[bool] = None,
                 nlp: Optional["Language"] = None):
        """
        Initialize the lemmatizer

        Args:
            spacy_model: spaCy model to load (default from settings)
            include_punctuation: Keep punctuation tokens as lemmas
                (default from settings)
            nlp: Already loaded pipeline; skips model loading
        """
        if spacy_model is None or include_punctuation is None:
            from semantic_categorizer.config import settings
            lemma_config = settings.categorizer.lemmatizer
            spacy_model = spacy_model or lemma_config.spacy_model
            if include_punctuation is None:
                include_punctuation = lemma_config.include_punctuation

        self.spacy_model = spacy_model
        self.include_punctuation = include_punctuation
        self._nlp = nlp

    @property
    def nlp(self) -> "Language":
        """Lazy-load the spaCy pipeline."""
        if self._nlp is None:
            self._nlp = self._load(self.spacy_model)
        return self._nlp

    @staticmethod
    def _load(model_name: str) -> "Language":
        if not SPACY_AVAILABLE:
            raise RuntimeError("spaCy is not installed. Install with: pip install spacy")
        try:
            # Only the tagger/lemmatizer are needed
            nlp = spacy.load(model_name, disable=["parser", "ner"])
        except OSError as e:
            raise RuntimeError(
                f"spaCy model '{model_name}' not found. "
                f"Download it with: python -m spacy download {model_name}"
            ) from e
        logger.info(f"Loaded spaCy model {model_name} ({', '.join(nlp.pipe_names)})")
        return nlp

    def lemmatize(self, line: str) -> List[str]:
        """
        Lemmatize one line of text

        Args:
            line: Input text

        Returns:
            List[str]: Lowercase lemmas in token order; whitespace tokens and
            tokens without a lemma are dropped
        """
        lemmas = []
        for token in self.nlp(line):
            if token.is_space:
                continue
            if token.is_punct and not self.include_punctuation:
                continue
            lemma = token.lemma_.strip()
            if lemma:
                lemmas.append(lemma.lower())
        return lemmas

    def __repr__(self) -> str:
        return f"<SpacyLemmatizer model={self.spacy_model!r}>"
