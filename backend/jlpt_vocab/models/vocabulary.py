import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, Column, DateTime, String

from ..core.database import Base


class JLPTLevel(str, Enum):
    N5 = "N5"
    N4 = "N4"
    N3 = "N3"
    N2 = "N2"
    N1 = "N1"
    # Filter-only variant; stored as NULL
    UNCLASSIFIED = "Unclassified"

    @classmethod
    def stored(cls) -> list["JLPTLevel"]:
        return [lvl for lvl in cls if lvl is not cls.UNCLASSIFIED]

    @classmethod
    def to_column(cls, level: Optional["JLPTLevel"]) -> Optional[str]:
        if level is None or level is cls.UNCLASSIFIED:
            return None
        return cls(level).value

    @classmethod
    def from_column(cls, value: Optional[str]) -> "JLPTLevel":
        return cls.UNCLASSIFIED if value is None else cls(value)


def _new_id() -> str:
    return str(uuid.uuid4())


_LEVEL_VALUES = ", ".join(f"'{lvl.value}'" for lvl in JLPTLevel.stored())


class Vocabulary(Base):
    __tablename__ = "vocabulary"
    __table_args__ = (
        CheckConstraint(
            f"level IS NULL OR level IN ({_LEVEL_VALUES})",
            name="ck_vocabulary_level",
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    word = Column(String, unique=True, nullable=False)

    # NULL means unclassified
    level = Column(String(2), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
