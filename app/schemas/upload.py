from pydantic import BaseModel


class UploadRead(BaseModel):
    url: str
    filename: str
    content_type: str
    size: int
