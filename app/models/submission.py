import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class SubmissionStatus(str, enum.Enum):
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)

    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    submission_text = Column(Text, nullable=True)
    attachment_url = Column(String(1024), nullable=True)

    submitted_at = Column(DateTime(timezone=True), nullable=False)
    is_late = Column(Boolean, nullable=False, default=False)

    status = Column(
        Enum(SubmissionStatus, native_enum=False, length=20),
        nullable=False,
        default=SubmissionStatus.SUBMITTED,
    )

    # Grading fields (nullable until graded)
    marks_obtained = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)
    graded_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),
    )

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("User", back_populates="submissions", foreign_keys=[student_id])

    # flattened for the teacher's review lists
    @property
    def student_name(self):
        return self.student.full_name if self.student else None

    @property
    def student_email(self):
        return self.student.email if self.student else None

    @property
    def assignment_title(self):
        return self.assignment.title if self.assignment else None
