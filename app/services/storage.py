import logging
import uuid
from datetime import datetime
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from app.core.config import ALLOWED_CONTENT_TYPES, ALLOWED_EXTENSIONS, MAX_UPLOAD_BYTES
from app.core.errors import ValidationError

logger = logging.getLogger(__name__)

TOO_LARGE = "File size exceeds 10MB limit"


async def read_upload(file: UploadFile, limit: int = MAX_UPLOAD_BYTES) -> bytes:
    """Read at most ``limit`` bytes of the upload, failing as soon as it is known to be larger."""
    if file.size is not None and file.size > limit:
        raise ValidationError(TOO_LARGE)

    data = await file.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(TOO_LARGE)
    return data


def validate_upload(filename: str | None, content_type: str | None, data: bytes) -> str:
    """Check an uploaded document and return its lower-cased extension."""
    if not data:
        raise ValidationError("File is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise ValidationError(TOO_LARGE)
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Invalid file type. Only PDF and Word documents are allowed")

    extension = PurePosixPath(filename or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError("Invalid file type. Only PDF and Word documents are allowed")
    return extension


def store_upload(
    upload_dir: Path,
    folder: str,
    filename: str | None,
    content_type: str | None,
    data: bytes,
    now: datetime,
) -> str:
    """Write the file under ``upload_dir/folder`` and return its public URL."""
    extension = validate_upload(filename, content_type, data)

    stored_name = f"{now:%Y%m%d_%H%M%S}_{uuid.uuid4()}{extension}"
    target_dir = upload_dir / folder
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / stored_name).write_bytes(data)

    logger.info("stored upload %s/%s (%d bytes)", folder, stored_name, len(data))
    return f"/files/{folder}/{stored_name}"
