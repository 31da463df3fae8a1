from typing import Optional

from pydantic import BaseModel

from app.models.late_request import RequestStatus
from app.schemas.common import UTCDateTime


class LateRequestCreate(BaseModel):
    reason: str


class LateRequestRespond(BaseModel):
    decision: RequestStatus
    teacher_response: Optional[str] = None


class LateRequestRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    student_name: Optional[str] = None
    student_email: Optional[str] = None
    assignment_title: Optional[str] = None
    reason: str
    status: RequestStatus
    requested_at: UTCDateTime
    responded_at: Optional[UTCDateTime] = None
    teacher_response: Optional[str] = None

    class Config:
        from_attributes = True


class ApprovalCheck(BaseModel):
    approved: bool
    message: str
