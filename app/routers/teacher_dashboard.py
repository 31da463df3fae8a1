from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.permissions import TeacherPrincipal, require_teacher
from app.models.assignment import Assignment
from app.models.late_request import LateSubmissionRequest, RequestStatus
from app.models.submission import Submission, SubmissionStatus
from app.models.user import ROLE_STUDENT, User
from app.schemas.teacher_dashboard import TeacherClassStats
from app.services.classrooms import list_for_teacher

router = APIRouter(tags=["teacher"])


@router.get("/teacher/dashboard", response_model=list[TeacherClassStats])
def teacher_dashboard(
    db: Session = Depends(get_db),
    me: TeacherPrincipal = Depends(require_teacher),
):
    rows: list[TeacherClassStats] = []

    for classroom in list_for_teacher(db, me):
        total_students = (
            db.query(func.count(User.id))
            .filter(User.role == ROLE_STUDENT, User.class_grade == classroom.grade)
            .scalar()
        ) or 0

        total_assignments = (
            db.query(func.count(Assignment.id))
            .filter(Assignment.class_grade == classroom.grade)
            .scalar()
        ) or 0

        total_submissions = (
            db.query(func.count(Submission.id))
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .filter(Assignment.class_grade == classroom.grade)
            .scalar()
        ) or 0

        ungraded_submissions = (
            db.query(func.count(Submission.id))
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .filter(
                Assignment.class_grade == classroom.grade,
                Submission.status == SubmissionStatus.SUBMITTED,
            )
            .scalar()
        ) or 0

        pending_late_requests = (
            db.query(func.count(LateSubmissionRequest.id))
            .join(Assignment, LateSubmissionRequest.assignment_id == Assignment.id)
            .filter(
                Assignment.class_grade == classroom.grade,
                LateSubmissionRequest.status == RequestStatus.PENDING,
            )
            .scalar()
        ) or 0

        rows.append(
            TeacherClassStats(
                class_grade=classroom.grade,
                class_name=classroom.name,
                total_students=total_students,
                total_assignments=total_assignments,
                total_submissions=total_submissions,
                ungraded_submissions=ungraded_submissions,
                pending_late_requests=pending_late_requests,
            )
        )

    return rows
