"""
Persistence gateway for the `vocabulary` table.

Reads that feed the UI fail soft (empty / partial result, logged).
Writes raise ConflictError, NotFoundError or StoreError so the service
layer can turn them into result payloads.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

import structlog
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..models import JLPTLevel, Vocabulary
from .errors import ConflictError, NotFoundError, StoreError

logger = structlog.get_logger(__name__)

# Always-true predicate for "delete everything" without a TRUNCATE
EPOCH = datetime(1970, 1, 1)

ORDERABLE_FIELDS = ("created_at", "word", "level")


def _order_clauses(order_by: str, ascending: bool):
    if order_by not in ORDERABLE_FIELDS:
        raise ValueError(f"order_by must be one of {ORDERABLE_FIELDS}")
    column = getattr(Vocabulary, order_by)
    # id breaks ties so offset windows never overlap
    if ascending:
        return [column.asc(), Vocabulary.id.asc()]
    return [column.desc(), Vocabulary.id.desc()]


def _fetch_page(db: Session, columns: Sequence, order, offset: int, limit: int) -> list:
    return db.query(*columns).order_by(*order).offset(offset).limit(limit).all()


def iter_pages(
    db: Session,
    columns: Sequence,
    order_by: str = "created_at",
    ascending: bool = False,
    page_size: Optional[int] = None,
    raise_on_error: bool = False,
) -> Iterator[list]:
    """
    Yield consecutive pages of the table in the requested order.

    Stops after a short or empty page. A failing page is logged and ends
    the iteration, so callers keep whatever was already yielded; with
    raise_on_error it raises StoreError instead so callers can tell a
    truncated read from a complete one.
    """
    size = page_size or settings.page_size
    order = _order_clauses(order_by, ascending)
    page = 0
    while True:
        offset = page * size
        try:
            rows = _fetch_page(db, columns, order, offset, size)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(
                "vocab_page_fetch_failed",
                page=page,
                offset=offset,
                page_size=size,
                error=str(exc),
            )
            if raise_on_error:
                raise StoreError("iter_pages", str(exc)) from exc
            return

        if not rows:
            return
        yield rows
        if len(rows) < size:
            return
        page += 1


def read_entries(
    db: Session,
    order_by: str = "created_at",
    ascending: bool = False,
    page_size: Optional[int] = None,
) -> Tuple[List[Vocabulary], bool]:
    """Full-table read returning (entries, complete). complete is False after a failed page."""
    entries: List[Vocabulary] = []
    try:
        for rows in iter_pages(
            db, [Vocabulary], order_by, ascending, page_size, raise_on_error=True
        ):
            entries.extend(rows)
    except StoreError:
        return entries, False
    return entries, True


def list_entries(
    db: Session,
    order_by: str = "created_at",
    ascending: bool = False,
    page_size: Optional[int] = None,
) -> List[Vocabulary]:
    return read_entries(db, order_by, ascending, page_size)[0]


def list_words(db: Session, page_size: Optional[int] = None) -> List[str]:
    words: List[str] = []
    for rows in iter_pages(db, [Vocabulary.word], page_size=page_size):
        words.extend(row.word for row in rows)
    return words


def count_or_none(db: Session) -> Optional[int]:
    try:
        return db.query(func.count(Vocabulary.id)).scalar() or 0
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_count_failed", error=str(exc))
        return None


def count(db: Session) -> int:
    n = count_or_none(db)
    return 0 if n is None else n


def count_by_level(db: Session) -> Dict[JLPTLevel, int]:
    counts = {level: 0 for level in JLPTLevel}
    try:
        rows = (
            db.query(Vocabulary.level, func.count(Vocabulary.id))
            .group_by(Vocabulary.level)
            .all()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_level_count_failed", error=str(exc))
        return counts
    for level, n in rows:
        counts[JLPTLevel.from_column(level)] += n
    return counts


def get_by_id(db: Session, vocab_id: str) -> Optional[Vocabulary]:
    try:
        return db.query(Vocabulary).filter(Vocabulary.id == vocab_id).first()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_get_failed", id=vocab_id, error=str(exc))
        raise StoreError("get_by_id", str(exc)) from exc


def find_by_word(db: Session, word: str) -> Optional[Vocabulary]:
    try:
        return db.query(Vocabulary).filter(Vocabulary.word == word).first()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_lookup_failed", word=word, error=str(exc))
        return None


def find_existing_words(db: Session, words: Iterable[str]) -> Set[str]:
    batch = list(words)
    if not batch:
        return set()
    try:
        rows = db.query(Vocabulary.word).filter(Vocabulary.word.in_(batch)).all()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("find_existing_words", str(exc)) from exc
    return {row.word for row in rows}


def insert(db: Session, word: str, level: Optional[JLPTLevel] = None) -> Vocabulary:
    """
    Single-row write. The caller has already validated the word and checked
    for an existing entry; the unique constraint decides any race.
    """
    entry = Vocabulary(word=word, level=JLPTLevel.to_column(level))
    db.add(entry)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("vocab_insert_conflict", word=word)
        raise ConflictError(word, find_by_word(db, word)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_insert_failed", word=word, error=str(exc))
        raise StoreError("insert", str(exc)) from exc
    db.refresh(entry)
    return entry


def insert_many(db: Session, words: Sequence[str], level: Optional[JLPTLevel] = None) -> int:
    if not words:
        return 0
    stored_level = JLPTLevel.to_column(level)
    db.add_all([Vocabulary(word=word, level=stored_level) for word in words])
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("insert_many", str(exc)) from exc
    return len(words)


def update(
    db: Session,
    vocab_id: str,
    word: str,
    level: Optional[JLPTLevel] = None,
) -> Vocabulary:
    entry = get_by_id(db, vocab_id)
    if entry is None:
        raise NotFoundError(vocab_id)

    try:
        other = (
            db.query(Vocabulary)
            .filter(Vocabulary.word == word, Vocabulary.id != vocab_id)
            .first()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_update_check_failed", id=vocab_id, error=str(exc))
        raise StoreError("update", str(exc)) from exc
    if other is not None:
        raise ConflictError(word, other)

    entry.word = word
    entry.level = JLPTLevel.to_column(level)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("vocab_update_conflict", id=vocab_id, word=word)
        raise ConflictError(word, find_by_word(db, word)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_update_failed", id=vocab_id, error=str(exc))
        raise StoreError("update", str(exc)) from exc
    db.refresh(entry)
    return entry


def delete_one(db: Session, vocab_id: str) -> None:
    entry = get_by_id(db, vocab_id)
    if entry is None:
        raise NotFoundError(vocab_id)
    db.delete(entry)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_delete_failed", id=vocab_id, error=str(exc))
        raise StoreError("delete_one", str(exc)) from exc


def delete_all(db: Session) -> int:
    try:
        deleted = (
            db.query(Vocabulary)
            .filter(Vocabulary.created_at > EPOCH)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("vocab_delete_all_failed", error=str(exc))
        raise StoreError("delete_all", str(exc)) from exc
    return deleted
