from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock, is_overdue
from app.core.deps import get_db
from app.core.errors import AuthorizationError
from app.core.permissions import (
    StudentPrincipal,
    TeacherPrincipal,
    get_principal,
    require_teacher,
)
from app.models.assignment import Assignment
from app.models.submission import Submission, SubmissionStatus
from app.schemas.assignment import AssignmentCreate, AssignmentRead
from app.services import assignments as assignment_service
from app.services.access import ensure_teacher_owns_class, get_assignment, get_classroom

router = APIRouter()


def _to_read(
    assignment: Assignment,
    now,
    submission: Submission | None = None,
    for_student: bool = False,
) -> AssignmentRead:
    read = AssignmentRead.model_validate(assignment)
    read.is_overdue = is_overdue(now, assignment.due_at)
    if for_student:
        read.has_submitted = submission is not None
        read.is_graded = submission is not None and submission.status == SubmissionStatus.GRADED
    return read


@router.post(
    "/assignments",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_assignment(
    payload: AssignmentCreate,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
    clock: Clock = Depends(get_clock),
):
    now = clock.now()
    a = assignment_service.create_assignment(db, teacher, payload, now)
    return _to_read(a, now)


@router.get("/classrooms/{grade}/assignments", response_model=list[AssignmentRead])
def list_class_assignments(
    grade: int,
    db: Session = Depends(get_db),
    principal: StudentPrincipal | TeacherPrincipal = Depends(get_principal),
    clock: Clock = Depends(get_clock),
):
    now = clock.now()

    if not isinstance(principal, StudentPrincipal):
        ensure_teacher_owns_class(db, principal, grade)
        return [_to_read(a, now) for a in assignment_service.list_for_class(db, grade)]

    get_classroom(db, grade)
    if principal.class_grade != grade:
        raise AuthorizationError("Not enrolled in this class")

    mine = {
        s.assignment_id: s
        for s in db.query(Submission).filter(Submission.student_id == principal.id).all()
    }
    return [
        _to_read(a, now, mine.get(a.id), for_student=True)
        for a in assignment_service.list_for_class(db, grade)
    ]


@router.get("/assignments/{assignment_id}", response_model=AssignmentRead)
def get_assignment_detail(
    assignment_id: int,
    db: Session = Depends(get_db),
    principal: StudentPrincipal | TeacherPrincipal = Depends(get_principal),
    clock: Clock = Depends(get_clock),
):
    a = get_assignment(db, assignment_id)
    if isinstance(principal, StudentPrincipal):
        if principal.class_grade != a.class_grade:
            raise AuthorizationError("Not enrolled in this assignment's class")
    else:
        ensure_teacher_owns_class(db, principal, a.class_grade)
    return _to_read(a, clock.now())


@router.delete("/assignments/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    assignment_service.delete_assignment(db, teacher, assignment_id)
