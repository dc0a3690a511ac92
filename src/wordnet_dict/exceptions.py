"""Custom exception hierarchy for wordnet-dict."""

from __future__ import annotations


class WordnetDictError(Exception):
    """Base exception for all wordnet-dict errors."""


class ConfigError(WordnetDictError):
    """Invalid configuration (bad YAML, unknown key, out-of-range value)."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)


class ValidationError(WordnetDictError):
    """Invalid input at the query boundary (blank lemma)."""


class EntityNotFoundError(WordnetDictError):
    """Entity doesn't exist in the database."""


class LemmaNotFoundError(EntityNotFoundError):
    """A lemma has no synsets in the store."""

    def __init__(self, lemma: str) -> None:
        self.lemma = lemma
        super().__init__(f"Lemma not found: {lemma!r}")


class DataImportError(WordnetDictError):
    """Failed to import data (missing dictionary files, aborted flush)."""


class DatabaseError(WordnetDictError):
    """Schema version mismatch, connection or transaction failure."""
