from __future__ import annotations

from typing import Any, Optional


class VocabError(Exception):
    """Base class for every failure the vocabulary core can report."""


class ValidationError(VocabError):
    """Input rejected before reaching the store. Message is user-facing."""


class ConflictError(VocabError):
    def __init__(self, word: str, existing: Optional[Any] = None) -> None:
        super().__init__(f'"{word}" already exists in the database')
        self.word = word
        self.existing = existing


class NotFoundError(VocabError):
    def __init__(self, vocab_id: str) -> None:
        super().__init__("Vocabulary not found")
        self.vocab_id = vocab_id


class StoreError(VocabError):
    """Backend failure. The detail is for logs only, never for callers."""

    def __init__(self, operation: str, detail: str = "") -> None:
        super().__init__(f"{operation} failed")
        self.operation = operation
        self.detail = detail
