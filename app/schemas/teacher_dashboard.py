from pydantic import BaseModel


class TeacherClassStats(BaseModel):
    class_grade: int
    class_name: str
    total_students: int
    total_assignments: int
    total_submissions: int
    ungraded_submissions: int
    pending_late_requests: int
