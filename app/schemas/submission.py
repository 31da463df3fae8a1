from typing import Optional

from pydantic import BaseModel

from app.models.submission import SubmissionStatus
from app.schemas.common import UTCDateTime


class SubmissionCreate(BaseModel):
    submission_text: Optional[str] = None
    attachment_url: Optional[str] = None


class SubmissionRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    assignment_title: Optional[str] = None
    submission_text: Optional[str] = None
    attachment_url: Optional[str] = None
    submitted_at: UTCDateTime
    is_late: bool
    status: SubmissionStatus
    marks_obtained: Optional[int] = None
    feedback: Optional[str] = None
    graded_at: Optional[UTCDateTime] = None

    class Config:
        from_attributes = True


# bounds are checked by the grading service against the assignment's total
class SubmissionGradeUpdate(BaseModel):
    marks_obtained: int
    feedback: Optional[str] = None
