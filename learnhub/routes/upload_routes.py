from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
import logging

from learnhub.core.dependencies import get_current_user, get_settings
from learnhub.models.user_model import User
from learnhub.services import storage_service

logger = logging.getLogger(__name__)
# Mounted by the app factory under settings.UPLOAD_URL_PREFIX, outside /api
router = APIRouter(tags=["Uploads"])


@router.get("/{filename}")
def serve_upload(
    filename: str,
    current_user: User = Depends(get_current_user),
    settings = Depends(get_settings)
):
    """
    Serve a previously uploaded file to any authenticated user.
    """
    path = storage_service.resolve_upload_path(filename, settings)
    logger.debug(f"Serving upload {filename} to user {current_user.id}")
    return FileResponse(path)
