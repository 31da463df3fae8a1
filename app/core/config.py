import os
from datetime import timedelta, timezone
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV default secret; set SECRET_KEY in the environment for real deployments.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE = timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")))

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/tuition_center.db")
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(BASE_DIR / "uploads")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Due dates are entered and displayed in India Standard Time, stored in UTC.
IST_OFFSET = timedelta(hours=5, minutes=30)
IST = timezone(IST_OFFSET, name="IST")

# Uploads
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
UPLOAD_FOLDERS = {"teacher": "assignments", "student": "submissions"}

# Late submission requests
LATE_REASON_MIN_LENGTH = 10
LATE_REASON_MAX_LENGTH = 500

# Assignment limits
MIN_CLASS_GRADE = 6
MAX_CLASS_GRADE = 10
MAX_TOTAL_MARKS = 200

# Teacher account created at startup when both are set; registration only makes students.
TEACHER_EMAIL = os.getenv("TEACHER_EMAIL")
TEACHER_PASSWORD = os.getenv("TEACHER_PASSWORD")
TEACHER_NAME = os.getenv("TEACHER_NAME", "Teacher")
