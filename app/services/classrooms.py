import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.core.permissions import TeacherPrincipal
from app.models.classroom import Classroom
from app.schemas.classroom import ClassroomCreate

logger = logging.getLogger(__name__)


def create_classroom(db: Session, teacher: TeacherPrincipal, payload: ClassroomCreate) -> Classroom:
    classroom = Classroom(grade=payload.grade, name=payload.name, teacher_id=teacher.id)
    db.add(classroom)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Grade {payload.grade} already has a class teacher")

    db.refresh(classroom)
    logger.info("classroom grade=%s assigned to teacher %s", classroom.grade, teacher.id)
    return classroom


def list_for_teacher(db: Session, teacher: TeacherPrincipal) -> list[Classroom]:
    return (
        db.query(Classroom)
        .filter(Classroom.teacher_id == teacher.id)
        .order_by(Classroom.grade.asc())
        .all()
    )
