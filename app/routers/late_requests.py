from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock
from app.core.deps import get_db
from app.core.errors import NotFoundError
from app.core.permissions import (
    StudentPrincipal,
    TeacherPrincipal,
    require_student,
    require_teacher,
)
from app.models.late_request import RequestStatus
from app.schemas.late_request import (
    ApprovalCheck,
    LateRequestCreate,
    LateRequestRead,
    LateRequestRespond,
)
from app.services import late_requests as workflow

router = APIRouter()


@router.post(
    "/assignments/{assignment_id}/late-requests",
    response_model=LateRequestRead,
    status_code=status.HTTP_201_CREATED,
)
def request_late_submission(
    assignment_id: int,
    payload: LateRequestCreate,
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
    clock: Clock = Depends(get_clock),
):
    return workflow.request_late_submission(db, student, assignment_id, payload.reason, clock.now())


@router.get("/assignments/{assignment_id}/late-requests/me", response_model=LateRequestRead)
def my_late_request(
    assignment_id: int,
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
):
    request = workflow.find_request(db, assignment_id, student.id)
    if request is None:
        raise NotFoundError("No late submission request for this assignment")
    return request


@router.get(
    "/assignments/{assignment_id}/late-requests/me/approval",
    response_model=ApprovalCheck,
)
def check_approval(
    assignment_id: int,
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
):
    approved = workflow.is_late_submission_approved(db, assignment_id, student.id)
    return {
        "approved": approved,
        "message": "Late submission approved" if approved else "Late submission not approved",
    }


@router.get("/late-requests/pending", response_model=list[LateRequestRead])
def pending_requests(
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    return workflow.list_requests_for_teacher(db, teacher, RequestStatus.PENDING)


@router.get("/late-requests", response_model=list[LateRequestRead])
def all_requests(
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    return workflow.list_requests_for_teacher(db, teacher)


@router.post("/late-requests/{request_id}/respond", response_model=LateRequestRead)
def respond_to_late_request(
    request_id: int,
    payload: LateRequestRespond,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
    clock: Clock = Depends(get_clock),
):
    return workflow.respond_to_late_request(
        db,
        teacher,
        request_id,
        payload.decision,
        payload.teacher_response,
        clock.now(),
    )
