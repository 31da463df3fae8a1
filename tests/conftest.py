import os
import tempfile
from datetime import datetime, timezone

TEST_DB_FILE = "test_tuition_center.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", TEST_DB_URL)
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "tuition_center_uploads"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.clock import FixedClock, get_clock  # noqa: E402
from app.core.deps import get_db  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models.assignment import Assignment  # noqa: E402
from app.models.classroom import Classroom  # noqa: E402
from app.models.late_request import LateSubmissionRequest  # noqa: E402
from app.models.submission import Submission  # noqa: E402
from app.models.user import User  # noqa: E402
from app.routers.uploads import get_upload_dir  # noqa: E402

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)

# HW1 is due 2025-02-18 23:15 IST
DUE_AT = datetime(2025, 2, 18, 17, 45, tzinfo=timezone.utc)
BEFORE_DUE = datetime(2025, 2, 18, 17, 0, tzinfo=timezone.utc)
AFTER_DUE = datetime(2025, 2, 19, 9, 0, tzinfo=timezone.utc)

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed():
    """Seed two classes, each with its teacher and one student, and HW1 for grade 8."""
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(LateSubmissionRequest).delete()
        db.query(Submission).delete()
        db.query(Assignment).delete()
        db.query(Classroom).delete()
        db.query(User).delete()
        db.commit()

        teacher = User(email="teacher1@example.com", full_name="Teacher One", role="teacher", hashed_password=PASSWORD_HASH)
        other_teacher = User(email="teacher2@example.com", full_name="Teacher Two", role="teacher", hashed_password=PASSWORD_HASH)
        student = User(email="student1@example.com", full_name="Student One", role="student", class_grade=8, hashed_password=PASSWORD_HASH)
        other_student = User(email="student2@example.com", full_name="Student Two", role="student", class_grade=9, hashed_password=PASSWORD_HASH)
        db.add_all([teacher, other_teacher, student, other_student])
        db.commit()

        db.add_all(
            [
                Classroom(grade=8, name="Class 8", teacher_id=teacher.id),
                Classroom(grade=9, name="Class 9", teacher_id=other_teacher.id),
            ]
        )
        db.commit()

        hw1 = Assignment(
            class_grade=8,
            title="HW1",
            description="Fractions worksheet",
            total_marks=10,
            due_at=DUE_AT,
            created_by=teacher.id,
        )
        db.add(hw1)
        db.commit()

        yield {
            "teacher_id": teacher.id,
            "other_teacher_id": other_teacher.id,
            "student_id": student.id,
            "other_student_id": other_student.id,
            "assignment_id": hw1.id,
        }
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock():
    return FixedClock(BEFORE_DUE)


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture()
def client(clock, upload_dir):
    """Test client wired to the test DB, the frozen clock and a temp upload dir."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def student(client):
    return auth_header(login(client, "student1@example.com"))


@pytest.fixture()
def other_student(client):
    return auth_header(login(client, "student2@example.com"))


@pytest.fixture()
def teacher(client):
    return auth_header(login(client, "teacher1@example.com"))


@pytest.fixture()
def other_teacher(client):
    return auth_header(login(client, "teacher2@example.com"))
