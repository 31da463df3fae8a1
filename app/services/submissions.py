import logging
from datetime import datetime
from pathlib import PurePosixPath
from urllib.parse import urlparse

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import is_overdue
from app.core.config import ALLOWED_EXTENSIONS
from app.core.errors import AlreadySubmitted, LateWithoutApproval, ValidationError
from app.core.permissions import StudentPrincipal
from app.models.submission import Submission, SubmissionStatus
from app.services.access import ensure_student_in_class, get_assignment
from app.services.late_requests import is_late_submission_approved

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validate_attachment_url(url: str) -> None:
    suffix = PurePosixPath(urlparse(url).path).suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise ValidationError("Attachment must be a PDF or Word document")


def find_submission(db: Session, assignment_id: int, student_id: int) -> Submission | None:
    return (
        db.query(Submission)
        .filter(
            Submission.assignment_id == assignment_id,
            Submission.student_id == student_id,
        )
        .first()
    )


def submit_assignment(
    db: Session,
    student: StudentPrincipal,
    assignment_id: int,
    submission_text: str | None,
    attachment_url: str | None,
    now: datetime,
) -> Submission:
    """Record a student's one and only submission for an assignment.

    On time submissions are accepted directly. Once the due date has passed
    the student needs an APPROVED late request, and the submission is
    flagged late.
    """
    assignment = get_assignment(db, assignment_id)
    ensure_student_in_class(student, assignment)

    text = _clean(submission_text)
    attachment = _clean(attachment_url)
    if text is None and attachment is None:
        raise ValidationError("Please provide either submission text or an attachment")
    if attachment is not None:
        _validate_attachment_url(attachment)

    if find_submission(db, assignment_id, student.id) is not None:
        raise AlreadySubmitted("Assignment already submitted")

    late = is_overdue(now, assignment.due_at)
    if late and not is_late_submission_approved(db, assignment_id, student.id):
        raise LateWithoutApproval(
            "Assignment is overdue. Please request late submission permission from your teacher."
        )

    submission = Submission(
        assignment_id=assignment_id,
        student_id=student.id,
        submission_text=text,
        attachment_url=attachment,
        submitted_at=now,
        is_late=late,
        status=SubmissionStatus.SUBMITTED,
    )
    db.add(submission)

    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent submit for the same pair
        db.rollback()
        raise AlreadySubmitted("Assignment already submitted")

    db.refresh(submission)
    logger.info(
        "submission %s created: assignment=%s student=%s late=%s",
        submission.id,
        assignment_id,
        student.id,
        late,
    )
    return submission
