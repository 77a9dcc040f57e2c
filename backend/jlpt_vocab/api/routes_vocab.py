from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..core import vocab_service
from ..core.database import get_db
from ..core.export import export_filename, to_csv, to_markdown
from ..core.results import (
    ActionResult,
    BulkImportInput,
    BulkImportResult,
    Outcome,
    VocabInput,
    VocabOut,
)
from ..core.vocab_store import ORDERABLE_FIELDS
from ..models import JLPTLevel

router = APIRouter(prefix="/vocab", tags=["vocab"])


_FAILURE_STATUS = {
    Outcome.INVALID: status.HTTP_400_BAD_REQUEST,
    Outcome.CONFLICT: status.HTTP_409_CONFLICT,
    Outcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.STORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _status_for(result: ActionResult, ok: int = status.HTTP_200_OK) -> int:
    if result.success:
        return ok
    return _FAILURE_STATUS[result.outcome]


# ---------- Reads ----------

@router.get("", response_model=List[VocabOut])
def list_vocab(
    q: str = "",
    level: Optional[JLPTLevel] = None,
    order_by: str = Query("created_at"),
    ascending: bool = False,
    db: Session = Depends(get_db),
):
    if order_by not in ORDERABLE_FIELDS:
        raise HTTPException(status_code=422, detail=f"order_by must be one of {ORDERABLE_FIELDS}")
    if q or level is not None:
        return vocab_service.search_vocab(
            db, q, level, order_by=order_by, ascending=ascending
        )
    return vocab_service.get_vocab_list(db, order_by=order_by, ascending=ascending)


@router.get("/words", response_model=List[str])
def list_vocab_words(db: Session = Depends(get_db)):
    return vocab_service.get_all_vocab(db)


@router.get("/count")
def vocab_count(db: Session = Depends(get_db)):
    return {"count": vocab_service.get_vocab_count(db)}


@router.get("/stats", response_model=Dict[str, int])
def vocab_stats(db: Session = Depends(get_db)):
    return vocab_service.get_level_stats(db)


@router.get("/lookup", response_model=VocabOut)
def lookup_word(word: str, db: Session = Depends(get_db)):
    entry = vocab_service.check_word_exists(db, word)
    if entry is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return entry


@router.get("/export")
def export_vocab(
    format: str = Query("csv", pattern="^(csv|md)$"),
    style: Optional[str] = Query(None, pattern="^(full|words|table|list)$"),
    db: Session = Depends(get_db),
):
    entries = vocab_service.get_vocab_list(db)
    if not entries:
        raise HTTPException(status_code=404, detail="No vocabulary to export")

    if format == "csv":
        if style not in (None, "full", "words"):
            raise HTTPException(status_code=422, detail="CSV style must be 'full' or 'words'")
        content = to_csv(entries, include_created_at=style != "words")
        media_type = "text/csv; charset=utf-8"
    else:
        if style not in (None, "table", "list"):
            raise HTTPException(status_code=422, detail="Markdown style must be 'table' or 'list'")
        content = to_markdown(entries, style=style or "table")
        media_type = "text/markdown; charset=utf-8"

    filename = export_filename(format)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------- Writes ----------

@router.post("", response_model=ActionResult)
def create_vocab(payload: VocabInput, response: Response, db: Session = Depends(get_db)):
    result = vocab_service.add_vocab(db, payload)
    response.status_code = _status_for(result, ok=status.HTTP_201_CREATED)
    return result


@router.post("/bulk", response_model=BulkImportResult)
def create_vocab_bulk(payload: BulkImportInput, db: Session = Depends(get_db)):
    return vocab_service.add_bulk_vocab(db, payload.text, payload.level)


@router.patch("/{vocab_id}", response_model=ActionResult)
def update_vocab(
    vocab_id: str, payload: VocabInput, response: Response, db: Session = Depends(get_db)
):
    result = vocab_service.update_vocab(db, vocab_id, payload)
    response.status_code = _status_for(result)
    return result


@router.delete("/{vocab_id}", response_model=ActionResult)
def delete_vocab(vocab_id: str, response: Response, db: Session = Depends(get_db)):
    result = vocab_service.delete_vocab(db, vocab_id)
    response.status_code = _status_for(result)
    return result


@router.delete("", response_model=ActionResult)
def delete_all_vocab(response: Response, db: Session = Depends(get_db)):
    result = vocab_service.delete_all_vocab(db)
    response.status_code = _status_for(result)
    return result
