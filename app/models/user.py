from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base

ROLE_STUDENT = "student"
ROLE_TEACHER = "teacher"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    full_name: Mapped[str | None] = mapped_column(String(255))
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=ROLE_STUDENT)

    # students only: the class grade they attend
    class_grade: Mapped[int | None] = mapped_column(Integer, index=True)

    submissions = relationship(
        "Submission",
        back_populates="student",
        cascade="all, delete-orphan",
        foreign_keys="Submission.student_id",
    )
