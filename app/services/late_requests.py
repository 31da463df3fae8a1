"""Late-submission request state machine.

A (assignment, student) pair moves NONE -> PENDING when the student asks,
then PENDING -> APPROVED or PENDING -> REJECTED when the class teacher
answers. Both answers are terminal; only APPROVED unlocks a submission.
"""
import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import is_overdue
from app.core.config import LATE_REASON_MAX_LENGTH, LATE_REASON_MIN_LENGTH
from app.core.errors import (
    AlreadyResponded,
    AlreadySubmitted,
    ConflictError,
    DuplicateLateRequest,
    NotFoundError,
    ValidationError,
)
from app.core.permissions import StudentPrincipal, TeacherPrincipal
from app.models.assignment import Assignment
from app.models.late_request import LateSubmissionRequest, RequestStatus
from app.models.submission import Submission
from app.services.access import (
    ensure_student_in_class,
    ensure_teacher_owns_class,
    get_assignment,
    owned_grades,
)

logger = logging.getLogger(__name__)

# None stands for "no request exists yet"
TRANSITIONS: dict[RequestStatus | None, frozenset[RequestStatus]] = {
    None: frozenset({RequestStatus.PENDING}),
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}

TERMINAL = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


def transition(current: RequestStatus | None, target: RequestStatus) -> RequestStatus:
    if target in TRANSITIONS[current]:
        return target
    if current in TERMINAL:
        raise AlreadyResponded("Request has already been responded to")
    current_name = current.value if current is not None else "NONE"
    raise ValidationError(f"Cannot move a late request from {current_name} to {target.value}")


def find_request(db: Session, assignment_id: int, student_id: int) -> LateSubmissionRequest | None:
    return (
        db.query(LateSubmissionRequest)
        .filter(
            LateSubmissionRequest.assignment_id == assignment_id,
            LateSubmissionRequest.student_id == student_id,
        )
        .first()
    )


def is_late_submission_approved(db: Session, assignment_id: int, student_id: int) -> bool:
    request = find_request(db, assignment_id, student_id)
    return request is not None and request.status == RequestStatus.APPROVED


def _validate_reason(reason: str | None) -> str:
    reason = (reason or "").strip()
    if len(reason) < LATE_REASON_MIN_LENGTH:
        raise ValidationError(f"Reason must be at least {LATE_REASON_MIN_LENGTH} characters")
    if len(reason) > LATE_REASON_MAX_LENGTH:
        raise ValidationError(f"Reason must be at most {LATE_REASON_MAX_LENGTH} characters")
    return reason


def request_late_submission(
    db: Session,
    student: StudentPrincipal,
    assignment_id: int,
    reason: str,
    now: datetime,
) -> LateSubmissionRequest:
    assignment = get_assignment(db, assignment_id)
    ensure_student_in_class(student, assignment)
    reason = _validate_reason(reason)

    if not is_overdue(now, assignment.due_at):
        raise ConflictError("Assignment is not yet overdue; submit it directly")

    submitted = (
        db.query(Submission.id)
        .filter(Submission.assignment_id == assignment_id, Submission.student_id == student.id)
        .first()
    )
    if submitted is not None:
        raise AlreadySubmitted("Assignment already submitted")

    existing = find_request(db, assignment_id, student.id)
    if existing is not None:
        raise DuplicateLateRequest("Late submission request already exists for this assignment")

    request = LateSubmissionRequest(
        assignment_id=assignment_id,
        student_id=student.id,
        reason=reason,
        status=transition(None, RequestStatus.PENDING),
        requested_at=now,
    )
    db.add(request)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateLateRequest("Late submission request already exists for this assignment")

    db.refresh(request)
    logger.info(
        "late request %s created: assignment=%s student=%s",
        request.id,
        assignment_id,
        student.id,
    )
    return request


def respond_to_late_request(
    db: Session,
    teacher: TeacherPrincipal,
    request_id: int,
    decision: RequestStatus,
    teacher_response: str | None,
    now: datetime,
) -> LateSubmissionRequest:
    request = db.query(LateSubmissionRequest).filter(LateSubmissionRequest.id == request_id).first()
    if not request:
        raise NotFoundError("Late submission request not found")

    assignment = get_assignment(db, request.assignment_id)
    ensure_teacher_owns_class(db, teacher, assignment.class_grade)

    if request.status in TERMINAL:
        raise AlreadyResponded("Request has already been responded to")
    if decision not in TERMINAL:
        raise ValidationError("Decision must be APPROVED or REJECTED")
    new_status = transition(request.status, decision)

    # conditional update: only one response can win against a PENDING row
    updated = (
        db.query(LateSubmissionRequest)
        .filter(
            LateSubmissionRequest.id == request_id,
            LateSubmissionRequest.status == RequestStatus.PENDING,
        )
        .update(
            {
                LateSubmissionRequest.status: new_status,
                LateSubmissionRequest.responded_at: now,
                LateSubmissionRequest.teacher_response: teacher_response,
                LateSubmissionRequest.responded_by: teacher.id,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise AlreadyResponded("Request has already been responded to")

    db.commit()
    db.refresh(request)
    logger.info("late request %s %s by teacher %s", request_id, new_status.value, teacher.id)
    return request


def list_requests_for_teacher(
    db: Session,
    teacher: TeacherPrincipal,
    status: RequestStatus | None = None,
) -> list[LateSubmissionRequest]:
    q = (
        db.query(LateSubmissionRequest)
        .join(Assignment, Assignment.id == LateSubmissionRequest.assignment_id)
        .filter(Assignment.class_grade.in_(owned_grades(db, teacher)))
    )
    if status is not None:
        q = q.filter(LateSubmissionRequest.status == status)
    return q.order_by(LateSubmissionRequest.requested_at.asc(), LateSubmissionRequest.id.asc()).all()
