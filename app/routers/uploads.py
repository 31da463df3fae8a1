from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.clock import Clock, get_clock
from app.core.config import UPLOAD_DIR, UPLOAD_FOLDERS
from app.core.current_user import get_current_user
from app.core.errors import ValidationError
from app.models.user import User
from app.schemas.upload import UploadRead
from app.services.storage import read_upload, store_upload

router = APIRouter()


def get_upload_dir() -> Path:
    return UPLOAD_DIR


@router.post("", response_model=UploadRead)
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(...),
    current_user: User = Depends(get_current_user),
    upload_dir: Path = Depends(get_upload_dir),
    clock: Clock = Depends(get_clock),
):
    # teachers attach to assignments, students to submissions
    if UPLOAD_FOLDERS.get(current_user.role) != folder:
        raise ValidationError("Invalid folder")

    data = await read_upload(file)
    url = await run_in_threadpool(
        store_upload,
        upload_dir,
        folder,
        file.filename,
        file.content_type,
        data,
        clock.now(),
    )
    return {
        "url": url,
        "filename": file.filename,
        "content_type": file.content_type,
        "size": len(data),
    }
