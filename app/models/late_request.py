import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LateSubmissionRequest(Base):
    __tablename__ = "late_submission_requests"

    id = Column(Integer, primary_key=True, index=True)

    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    reason = Column(String(500), nullable=False)
    status = Column(
        Enum(RequestStatus, native_enum=False, length=20),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    requested_at = Column(DateTime(timezone=True), nullable=False)

    # set once, when the teacher responds
    responded_at = Column(DateTime(timezone=True), nullable=True)
    teacher_response = Column(Text, nullable=True)
    responded_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # one request per student per assignment, ever (no re-request after rejection)
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_late_request_assignment_student"),
    )

    assignment = relationship("Assignment", back_populates="late_requests")
    student = relationship("User", foreign_keys=[student_id])

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
