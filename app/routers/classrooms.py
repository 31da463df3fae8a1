from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.permissions import TeacherPrincipal, require_teacher
from app.schemas.classroom import ClassroomCreate, ClassroomRead
from app.services import classrooms as classroom_service

router = APIRouter()


@router.post("", response_model=ClassroomRead, status_code=status.HTTP_201_CREATED)
def create_classroom(
    payload: ClassroomCreate,
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    return classroom_service.create_classroom(db, teacher, payload)


@router.get("", response_model=list[ClassroomRead])
def my_classrooms(
    db: Session = Depends(get_db),
    teacher: TeacherPrincipal = Depends(require_teacher),
):
    return classroom_service.list_for_teacher(db, teacher)
