from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from app.core.clock import from_ist_input, to_ist
from app.core.config import MAX_CLASS_GRADE, MAX_TOTAL_MARKS, MIN_CLASS_GRADE
from app.schemas.common import UTCDateTime


class AssignmentCreate(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=1)
    class_grade: int = Field(ge=MIN_CLASS_GRADE, le=MAX_CLASS_GRADE)
    due_at: datetime
    total_marks: int = Field(ge=1, le=MAX_TOTAL_MARKS)
    attachment_url: Optional[str] = None

    # due dates typed without an offset are IST wall-clock times
    @field_validator("due_at")
    @classmethod
    def due_at_to_utc(cls, v: datetime) -> datetime:
        return from_ist_input(v)


class AssignmentRead(BaseModel):
    id: int
    class_grade: int
    title: str
    description: str
    total_marks: int
    due_at: UTCDateTime
    attachment_url: Optional[str] = None
    created_by: int
    created_at: UTCDateTime

    # per-caller annotations, filled in by the router
    is_overdue: bool = False
    has_submitted: Optional[bool] = None
    is_graded: Optional[bool] = None

    @computed_field
    @property
    def due_at_ist(self) -> datetime:
        return to_ist(self.due_at)

    class Config:
        from_attributes = True
