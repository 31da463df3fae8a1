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
from app.models.assignment import Assignment
from app.models.submission import Submission
from app.schemas.grades import GradeReportRow
from app.schemas.submission import SubmissionCreate, SubmissionGradeUpdate, SubmissionRead
from app.services.access import ensure_teacher_owns_class, get_assignment
from app.services.grading import grade_submission as grade, percentage
from app.services.submissions import find_submission, submit_assignment as submit

router = APIRouter()


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: int,
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
    clock: Clock = Depends(get_clock),
):
    return submit(
        db,
        student,
        assignment_id,
        payload.submission_text,
        payload.attachment_url,
        clock.now(),
    )


@router.get(
    "/assignments/{assignment_id}/submissions",
    response_model=list[SubmissionRead],
)
def list_submissions_for_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    assignment = get_assignment(db, assignment_id)
    ensure_teacher_owns_class(db, teacher, assignment.class_grade)

    return (
        db.query(Submission)
        .filter(Submission.assignment_id == assignment_id)
        .order_by(Submission.submitted_at.asc(), Submission.id.asc())
        .all()
    )


@router.get(
    "/assignments/{assignment_id}/submissions/me",
    response_model=SubmissionRead,
)
def my_submission(
    assignment_id: int,
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
):
    sub = find_submission(db, assignment_id, student.id)
    if sub is None:
        raise NotFoundError("Submission not found")
    return sub


@router.get("/submissions/me", response_model=list[SubmissionRead])
def my_submissions(
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
):
    return (
        db.query(Submission)
        .filter(Submission.student_id == student.id)
        .order_by(Submission.submitted_at.desc())
        .all()
    )


@router.patch(
    "/submissions/{submission_id}/grade",
    response_model=SubmissionRead,
)
def grade_submission(
    submission_id: int,
    payload: SubmissionGradeUpdate,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
    clock: Clock = Depends(get_clock),
):
    return grade(
        db,
        teacher,
        submission_id,
        payload.marks_obtained,
        payload.feedback,
        clock.now(),
    )


@router.get("/grades/me", response_model=list[GradeReportRow])
def my_grades(
    db: Session = Depends(get_db),
    student: StudentPrincipal = Depends(require_student),
):
    rows = (
        db.query(Submission, Assignment)
        .join(Assignment, Assignment.id == Submission.assignment_id)
        .filter(Submission.student_id == student.id)
        .order_by(Assignment.due_at.desc(), Assignment.id.desc())
        .all()
    )

    result: list[dict] = []
    for sub, a in rows:
        result.append(
            {
                "assignment_id": a.id,
                "assignment_title": a.title,
                "submission_id": sub.id,
                "submitted_at": sub.submitted_at,
                "is_late": sub.is_late,
                "status": sub.status,
                "marks_obtained": sub.marks_obtained,
                "total_marks": a.total_marks,
                "percentage": percentage(sub.marks_obtained, a.total_marks),
                "feedback": sub.feedback,
            }
        )
    return result
