from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..config import settings
from ..core import vocab_service
from ..core.database import get_db

router = APIRouter(tags=["status"])


class StatusResponse(BaseModel):
    app: str
    environment: str
    now: datetime
    total_words: int
    levels: dict[str, int]


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/status", response_model=StatusResponse)
def get_status(db: Session = Depends(get_db)):
    return StatusResponse(
        app=settings.app_name,
        environment=settings.environment,
        now=datetime.utcnow(),
        total_words=vocab_service.get_vocab_count(db),
        levels=vocab_service.get_level_stats(db),
    )
