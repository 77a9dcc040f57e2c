"""
Entry points the UI (here: the HTTP router) calls.

None of these raise: every outcome comes back as a value. Successful
writes drop the cached list and count. Reads that came back degraded
(a failed page, a failed count) are returned but never cached.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models import JLPTLevel
from . import vocab_store
from .bulk_import import bulk_import
from .cache import VOCAB_COUNT_KEY, VOCAB_LIST_KEY, vocab_cache
from .errors import ConflictError, NotFoundError, StoreError, ValidationError
from .results import ActionResult, BulkImportResult, Outcome, VocabInput, VocabOut
from .validator import clean_word, normalize


def _out(entry) -> Optional[VocabOut]:
    return None if entry is None else VocabOut.model_validate(entry)


def _failure(message: str, outcome: Outcome, existing=None) -> ActionResult:
    return ActionResult(success=False, message=message, outcome=outcome, existing=_out(existing))


def _load_list(db: Session, order_by: str, ascending: bool) -> Tuple[List[VocabOut], bool]:
    entries, complete = vocab_store.read_entries(db, order_by=order_by, ascending=ascending)
    return [VocabOut.model_validate(e) for e in entries], complete


def _load_count(db: Session) -> Tuple[int, bool]:
    n = vocab_store.count_or_none(db)
    if n is None:
        return 0, False
    return n, True


# ---------- Reads ----------

def get_vocab_list(
    db: Session, order_by: str = "created_at", ascending: bool = False
) -> List[VocabOut]:
    if order_by == "created_at" and not ascending:
        return vocab_cache.get_or_load(
            VOCAB_LIST_KEY, lambda: _load_list(db, order_by, ascending)
        )
    return _load_list(db, order_by, ascending)[0]


def get_all_vocab(db: Session) -> List[str]:
    return vocab_store.list_words(db)


def get_vocab_count(db: Session) -> int:
    return vocab_cache.get_or_load(VOCAB_COUNT_KEY, lambda: _load_count(db))


def check_word_exists(db: Session, word: str) -> Optional[VocabOut]:
    return _out(vocab_store.find_by_word(db, normalize(word)))


def search_vocab(
    db: Session,
    query: str = "",
    level: Optional[JLPTLevel] = None,
    order_by: str = "created_at",
    ascending: bool = False,
) -> List[VocabOut]:
    """Substring match on the word, optionally narrowed to one level, in the requested order."""
    needle = normalize(query)
    results = []
    for entry in get_vocab_list(db, order_by=order_by, ascending=ascending):
        if needle and needle not in entry.word:
            continue
        if level is not None and (entry.level or JLPTLevel.UNCLASSIFIED) != level:
            continue
        results.append(entry)
    return results


def get_level_stats(db: Session) -> Dict[str, int]:
    per_level = vocab_store.count_by_level(db)
    stats = {"All": sum(per_level.values())}
    for level in JLPTLevel:
        stats[level.value] = per_level[level]
    return stats


# ---------- Writes ----------

def add_vocab(db: Session, payload: VocabInput) -> ActionResult:
    try:
        word = clean_word(payload.word)
        existing = vocab_store.find_by_word(db, word)
        if existing is not None:
            raise ConflictError(word, existing)
        vocab_store.insert(db, word, payload.level)
    except ValidationError as exc:
        return _failure(str(exc), Outcome.INVALID)
    except ConflictError as exc:
        return _failure(str(exc), Outcome.CONFLICT, exc.existing)
    except StoreError:
        return _failure("Failed to add vocabulary", Outcome.STORE_ERROR)

    vocab_cache.invalidate()
    return ActionResult(success=True, message=f'Added "{word}" successfully')


def add_bulk_vocab(
    db: Session, text: str, level: Optional[JLPTLevel] = None
) -> BulkImportResult:
    result = bulk_import(db, text, level)
    if result.success_count:
        vocab_cache.invalidate()
    return result


def update_vocab(db: Session, vocab_id: str, payload: VocabInput) -> ActionResult:
    try:
        word = clean_word(payload.word)
        vocab_store.update(db, vocab_id, word, payload.level)
    except ValidationError as exc:
        return _failure(str(exc), Outcome.INVALID)
    except NotFoundError as exc:
        return _failure(str(exc), Outcome.NOT_FOUND)
    except ConflictError as exc:
        return _failure(str(exc), Outcome.CONFLICT, exc.existing)
    except StoreError:
        return _failure("Failed to update vocabulary", Outcome.STORE_ERROR)

    vocab_cache.invalidate()
    return ActionResult(success=True, message=f'Updated "{word}" successfully')


def delete_vocab(db: Session, vocab_id: str) -> ActionResult:
    try:
        vocab_store.delete_one(db, vocab_id)
    except NotFoundError as exc:
        return _failure(str(exc), Outcome.NOT_FOUND)
    except StoreError:
        return _failure("Failed to delete vocabulary", Outcome.STORE_ERROR)

    vocab_cache.invalidate()
    return ActionResult(success=True, message="Deleted successfully")


def delete_all_vocab(db: Session) -> ActionResult:
    try:
        vocab_store.delete_all(db)
    except StoreError:
        return _failure("Failed to delete all vocabulary", Outcome.STORE_ERROR)

    vocab_cache.invalidate()
    return ActionResult(success=True, message="All vocabulary deleted successfully")
