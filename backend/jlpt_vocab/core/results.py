from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import JLPTLevel


class Outcome(str, Enum):
    OK = "ok"
    INVALID = "invalid"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


class VocabInput(BaseModel):
    word: str
    level: Optional[JLPTLevel] = None


class VocabOut(BaseModel):
    id: str
    word: str
    level: Optional[JLPTLevel] = None
    created_at: datetime

    class Config:
        from_attributes = True


class BulkImportInput(BaseModel):
    text: str
    level: Optional[JLPTLevel] = None


class ActionResult(BaseModel):
    success: bool
    message: str
    outcome: Outcome = Outcome.OK
    existing: Optional[VocabOut] = None


class BulkImportResult(BaseModel):
    success_count: int = 0
    skipped_count: int = 0
    errors: List[str] = Field(default_factory=list)

    @field_validator("success_count", "skipped_count")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("counts cannot be negative")
        return v
