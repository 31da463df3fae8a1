from pydantic import BaseModel, Field

from app.core.config import MAX_CLASS_GRADE, MIN_CLASS_GRADE


class ClassroomCreate(BaseModel):
    grade: int = Field(ge=MIN_CLASS_GRADE, le=MAX_CLASS_GRADE)
    name: str = Field(min_length=1, max_length=255)


class ClassroomRead(BaseModel):
    id: int
    grade: int
    name: str
    teacher_id: int

    class Config:
        from_attributes = True
