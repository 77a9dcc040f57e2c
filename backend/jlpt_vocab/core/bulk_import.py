from __future__ import annotations

from typing import List, Optional, Tuple

import structlog
from sqlalchemy.orm import Session

from ..config import settings
from ..models import JLPTLevel
from . import vocab_store
from .errors import StoreError
from .results import BulkImportResult
from .validator import is_japanese_text, normalize

logger = structlog.get_logger(__name__)


def classify_lines(text: str) -> Tuple[List[str], int, List[str]]:
    """
    Split raw input into (unique Japanese words in first-seen order,
    number of repeats inside the input, error strings).
    """
    unique: dict[str, None] = {}
    repeats = 0
    errors: List[str] = []

    for raw in text.split("\n"):
        line = normalize(raw)
        if not line:
            continue
        if not is_japanese_text(line):
            errors.append(f'"{line}" - Not Japanese')
            continue
        if line in unique:
            repeats += 1
        else:
            unique[line] = None

    return list(unique), repeats, errors


def bulk_import(
    db: Session,
    text: str,
    level: Optional[JLPTLevel] = None,
    batch_size: Optional[int] = None,
) -> BulkImportResult:
    """
    Import a block of words, one per line.

    Batches run one after another so each existence check sees the rows
    inserted by the previous batch. A failed batch is reported in `errors`
    and the import moves on.
    """
    size = batch_size or settings.bulk_batch_size
    words, skipped, errors = classify_lines(text)
    success = 0

    for start in range(0, len(words), size):
        batch = words[start:start + size]
        end = start + len(batch)

        try:
            existing = vocab_store.find_existing_words(db, batch)
        except StoreError as exc:
            logger.error(
                "bulk_import_check_failed",
                batch_start=start,
                batch_end=end,
                error=exc.detail,
            )
            errors.append(f"Batch {start}-{end}: Failed to check duplicates")
            continue

        skipped += len(existing)
        new_words = [w for w in batch if w not in existing]
        if not new_words:
            continue

        try:
            success += vocab_store.insert_many(db, new_words, level)
        except StoreError as exc:
            logger.error(
                "bulk_import_insert_failed",
                batch_start=start,
                batch_end=end,
                words=len(new_words),
                error=exc.detail,
            )
            errors.append(f"Batch insert failed for {len(new_words)} words")

    logger.info(
        "bulk_import_finished",
        success=success,
        skipped=skipped,
        errors=len(errors),
    )
    return BulkImportResult(success_count=success, skipped_count=skipped, errors=errors)
