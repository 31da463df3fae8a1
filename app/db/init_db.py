import logging

from sqlalchemy.orm import Session

from app.core.config import TEACHER_EMAIL, TEACHER_NAME, TEACHER_PASSWORD
from app.core.security import hash_password
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.user import ROLE_TEACHER, User

logger = logging.getLogger(__name__)


def ensure_teacher(db: Session, email: str, password: str, full_name: str | None = None) -> User:
    """Create the teacher account if missing. An existing account keeps its password."""
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            email=email,
            full_name=full_name,
            hashed_password=hash_password(password),
            role=ROLE_TEACHER,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("created teacher account %s", email)
        return user

    if user.role != ROLE_TEACHER:
        raise ValueError(f"{email} is registered as {user.role}, not a teacher")
    if full_name and user.full_name != full_name:
        user.full_name = full_name
        db.commit()
    return user


def init_db() -> None:
    Base.metadata.create_all(bind=engine)

    if TEACHER_EMAIL and TEACHER_PASSWORD:
        db = SessionLocal()
        try:
            ensure_teacher(db, TEACHER_EMAIL, TEACHER_PASSWORD, TEACHER_NAME)
        finally:
            db.close()
