from sqlalchemy.orm import Session

from app.core.errors import AuthorizationError, NotFoundError
from app.core.permissions import StudentPrincipal, TeacherPrincipal
from app.models.assignment import Assignment
from app.models.classroom import Classroom


def get_assignment(db: Session, assignment_id: int) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment


def get_classroom(db: Session, grade: int) -> Classroom:
    classroom = db.query(Classroom).filter(Classroom.grade == grade).first()
    if not classroom:
        raise NotFoundError(f"No classroom for grade {grade}")
    return classroom


def ensure_student_in_class(student: StudentPrincipal, assignment: Assignment) -> None:
    if student.class_grade != assignment.class_grade:
        raise AuthorizationError("Not enrolled in this assignment's class")


def ensure_teacher_owns_class(db: Session, teacher: TeacherPrincipal, grade: int) -> Classroom:
    classroom = get_classroom(db, grade)
    if classroom.teacher_id != teacher.id:
        raise AuthorizationError("Only the class teacher can do this")
    return classroom


def owned_grades(db: Session, teacher: TeacherPrincipal) -> list[int]:
    rows = db.query(Classroom.grade).filter(Classroom.teacher_id == teacher.id).all()
    return [r.grade for r in rows]
