from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    class_grade = Column(
        Integer,
        ForeignKey("classrooms.grade", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    total_marks = Column(Integer, nullable=False)
    due_at = Column(DateTime(timezone=True), nullable=False)  # UTC
    attachment_url = Column(String(1024), nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    classroom = relationship("Classroom")

    submissions = relationship(
        "Submission", back_populates="assignment", cascade="all, delete-orphan"
    )
    late_requests = relationship(
        "LateSubmissionRequest", back_populates="assignment", cascade="all, delete-orphan"
    )
