# Import every model here so Base.metadata sees all tables
# (used by init_db, alembic env and the test suite).
from app.db.base_class import Base  # noqa: F401
from app.models.assignment import Assignment  # noqa: F401
from app.models.classroom import Classroom  # noqa: F401
from app.models.late_request import LateSubmissionRequest  # noqa: F401
from app.models.submission import Submission  # noqa: F401
from app.models.user import User  # noqa: F401
