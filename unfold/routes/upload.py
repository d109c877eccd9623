"""Image upload endpoint."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from unfold.dependencies import get_upload_service, require_admin
from unfold.models.response_models import ErrorResponse, UploadResponse
from unfold.services.upload_service import ImageUploadService
from unfold.utils.errors import UploadValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"], dependencies=[Depends(require_admin)])


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload an image",
    description="""
    Stores an image under the public uploads directory.

    Accepted formats: jpg, jpeg, png, webp, svg and gif, up to the configured
    size limit (5 MB by default). The stored name is prefixed with a timestamp.
    """,
    responses={
        400: {
            "description": "Bad request - missing file, not an image, too large or unsupported format",
            "model": ErrorResponse
        },
        403: {"description": "Admin mode is disabled", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def upload_image(
    image: Optional[UploadFile] = File(None, description="Image file"),
    uploads: ImageUploadService = Depends(get_upload_service)
):
    """
    Upload an image.

    **Returns:**
    - `path`: public path of the stored image
    - `fileName`: stored file name
    """
    try:
        if image is None:
            stored = uploads.save_image(None, None, b"")
        else:
            if image.size is not None:
                uploads.validate(image.filename, image.content_type, image.size)
            # One byte past the limit is enough for save_image to reject it
            data = await image.read(uploads.max_bytes + 1)
            stored = uploads.save_image(image.filename, image.content_type, data)
        return UploadResponse(success=True, path=stored.path, fileName=stored.fileName)
    except UploadValidationError:
        raise
    except Exception as e:
        logger.error("Upload error: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")
