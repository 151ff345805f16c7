import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile

from learnhub.core.errors import NotFoundError, ValidationConflictError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def _safe_extension(filename: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    if not ext or len(ext) > 10 or not ext[1:].isalnum():
        return ""
    return ext


def save_upload(upload: UploadFile, settings) -> str:
    """
    Buffers an uploaded file to UPLOAD_DIR under a unique name and returns its
    public URL (UPLOAD_URL_PREFIX/<name>). Written synchronously before the
    handler continues.

    Raises:
        ValidationConflictError: the file is larger than MAX_UPLOAD_SIZE_BYTES.
    """
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}{_safe_extension(upload.filename)}"
    destination = os.path.join(settings.UPLOAD_DIR, stored_name)

    written = 0
    with open(destination, "wb") as out:
        while True:
            chunk = upload.file.read(_CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > settings.MAX_UPLOAD_SIZE_BYTES:
                break
            out.write(chunk)

    if written > settings.MAX_UPLOAD_SIZE_BYTES:
        os.remove(destination)
        logger.warning(f"Upload '{upload.filename}' rejected: larger than {settings.MAX_UPLOAD_SIZE_BYTES} bytes.")
        raise ValidationConflictError("Uploaded file is too large")

    logger.info(f"Stored upload '{upload.filename}' as {stored_name} ({written} bytes).")
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{stored_name}"


def resolve_upload_path(filename: str, settings) -> str:
    """
    Maps a served filename back to its path on disk.
    Raises NotFoundError for missing files and for names that escape UPLOAD_DIR.
    """
    upload_root = os.path.realpath(settings.UPLOAD_DIR)
    candidate = os.path.realpath(os.path.join(upload_root, filename))
    if os.path.commonpath([upload_root, candidate]) != upload_root or not os.path.isfile(candidate):
        logger.debug(f"Upload '{filename}' not found under {upload_root}")
        raise NotFoundError("File not found")
    return candidate
