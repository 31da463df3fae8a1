from dataclasses import dataclass

from fastapi import Depends, HTTPException, status

from app.core.current_user import get_current_user
from app.models.user import ROLE_STUDENT, ROLE_TEACHER, User


@dataclass(frozen=True)
class StudentPrincipal:
    id: int
    class_grade: int


@dataclass(frozen=True)
class TeacherPrincipal:
    id: int


def get_principal(
    current_user: User = Depends(get_current_user),
) -> StudentPrincipal | TeacherPrincipal:
    """Either principal, for routes open to both roles."""
    if current_user.role == ROLE_TEACHER:
        return TeacherPrincipal(id=current_user.id)
    return require_student(current_user)


def require_teacher(current_user: User = Depends(get_current_user)) -> TeacherPrincipal:
    if current_user.role != ROLE_TEACHER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Teacher role required",
        )
    return TeacherPrincipal(id=current_user.id)


def require_student(current_user: User = Depends(get_current_user)) -> StudentPrincipal:
    if current_user.role != ROLE_STUDENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student role required",
        )
    if current_user.class_grade is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student is not enrolled in a class",
        )
    return StudentPrincipal(id=current_user.id, class_grade=current_user.class_grade)
