import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.errors import MarksOutOfRange, NotFoundError
from app.core.permissions import TeacherPrincipal
from app.models.submission import Submission, SubmissionStatus
from app.services.access import ensure_teacher_owns_class, get_assignment

logger = logging.getLogger(__name__)


def grade_submission(
    db: Session,
    teacher: TeacherPrincipal,
    submission_id: int,
    marks_obtained: int,
    feedback: str | None,
    now: datetime,
) -> Submission:
    """Record (or overwrite) marks and feedback on a submission.

    Re-grading replaces the previous values; the last write wins if two
    teacher sessions grade at the same time.
    """
    sub = db.query(Submission).filter(Submission.id == submission_id).first()
    if not sub:
        raise NotFoundError("Submission not found")

    assignment = get_assignment(db, sub.assignment_id)
    ensure_teacher_owns_class(db, teacher, assignment.class_grade)

    if marks_obtained < 0 or marks_obtained > assignment.total_marks:
        raise MarksOutOfRange(
            f"Marks obtained ({marks_obtained}) must be between 0 and {assignment.total_marks}"
        )

    sub.marks_obtained = marks_obtained
    sub.feedback = feedback
    sub.status = SubmissionStatus.GRADED
    sub.graded_at = now
    sub.graded_by = teacher.id

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(sub)
    logger.info(
        "submission %s graded %s/%s by teacher %s",
        sub.id,
        marks_obtained,
        assignment.total_marks,
        teacher.id,
    )
    return sub


def percentage(marks_obtained: int | None, total_marks: int) -> float | None:
    if marks_obtained is None:
        return None
    return round(marks_obtained / total_marks * 100, 2)
