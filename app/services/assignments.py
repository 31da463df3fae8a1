import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.clock import ensure_utc
from app.core.errors import ValidationError
from app.core.permissions import TeacherPrincipal
from app.models.assignment import Assignment
from app.schemas.assignment import AssignmentCreate
from app.services.access import ensure_teacher_owns_class, get_assignment

logger = logging.getLogger(__name__)


def create_assignment(
    db: Session,
    teacher: TeacherPrincipal,
    payload: AssignmentCreate,
    now: datetime,
) -> Assignment:
    ensure_teacher_owns_class(db, teacher, payload.class_grade)

    if ensure_utc(payload.due_at) <= ensure_utc(now):
        raise ValidationError("Due date must be in the future")

    a = Assignment(
        class_grade=payload.class_grade,
        title=payload.title,
        description=payload.description,
        total_marks=payload.total_marks,
        due_at=payload.due_at,
        attachment_url=payload.attachment_url,
        created_by=teacher.id,
    )
    db.add(a)
    db.commit()
    db.refresh(a)
    logger.info("assignment %s created for grade %s", a.id, a.class_grade)
    return a


def delete_assignment(db: Session, teacher: TeacherPrincipal, assignment_id: int) -> None:
    """Delete an assignment along with its submissions and late requests."""
    a = get_assignment(db, assignment_id)
    ensure_teacher_owns_class(db, teacher, a.class_grade)

    db.delete(a)
    db.commit()
    logger.info("assignment %s deleted by teacher %s", assignment_id, teacher.id)


def list_for_class(db: Session, class_grade: int) -> list[Assignment]:
    # newest due date first
    return (
        db.query(Assignment)
        .filter(Assignment.class_grade == class_grade)
        .order_by(Assignment.due_at.desc(), Assignment.id.desc())
        .all()
    )
