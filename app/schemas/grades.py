from typing import Optional

from pydantic import BaseModel

from app.models.submission import SubmissionStatus
from app.schemas.common import UTCDateTime


class GradeReportRow(BaseModel):
    assignment_id: int
    assignment_title: str
    submission_id: int
    submitted_at: UTCDateTime
    is_late: bool
    status: SubmissionStatus
    marks_obtained: Optional[int] = None
    total_marks: int
    percentage: Optional[float] = None
    feedback: Optional[str] = None
