from app.db.session import SessionLocal


# one session per request; anything left uncommitted by a failed request is rolled back.
def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
