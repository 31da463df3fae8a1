from pydantic import BaseModel, EmailStr, Field

from app.core.config import MAX_CLASS_GRADE, MIN_CLASS_GRADE


# public registration is for students only; teachers are seeded at startup
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    full_name: str | None = None
    class_grade: int = Field(ge=MIN_CLASS_GRADE, le=MAX_CLASS_GRADE)


class UserRead(BaseModel):
    id: int
    email: EmailStr
    full_name: str | None = None
    role: str
    class_grade: int | None = None

    class Config:
        from_attributes = True
