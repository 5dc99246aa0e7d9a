"""
Error kinds raised by the categorization pipeline.

Each error subclasses the builtin exception callers would otherwise expect
(FileNotFoundError, ValueError, ...), so generic handlers keep working.
All of them are fatal for a run.
"""

from pathlib import Path
from typing import Optional, Union


class CategorizerError(Exception):
    """Base class for all categorization failures."""


class ResourceUnreadableError(CategorizerError, FileNotFoundError):
    """The dictionary table or the input corpus is missing or unreadable."""

    def __init__(self, path: Union[str, Path], reason: str = "file not found"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class MalformedDictionaryRowError(CategorizerError, ValueError):
    """A row of the category table cannot be interpreted."""

    def __init__(self, path: Union[str, Path], line_number: int, message: str):
        self.path = Path(path)
        self.line_number = line_number
        super().__init__(f"{self.path}, line {line_number}: {message}")


class EmptyCorpusError(CategorizerError, ZeroDivisionError):
    """No tokens were processed, so percentages are undefined."""

    def __init__(self, message: str = "No tokens processed; cannot compute category percentages"):
        super().__init__(message)


class LemmatizerError(CategorizerError, RuntimeError):
    """The external lemmatizer failed on an input line."""

    def __init__(
        self,
        line_number: int,
        line: str,
        source: Optional[Union[str, Path]] = None,
        reason: Optional[str] = None,
    ):
        self.line_number = line_number
        self.line = line
        self.source = source
        where = f"{source}, line {line_number}" if source else f"line {line_number}"
        preview = line if len(line) <= 60 else line[:57] + "..."
        message = f"Lemmatizer failed on {where}: {preview!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
