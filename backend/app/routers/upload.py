"""
Upload router for storing a profile picture on its own.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.config import get_settings
from app.core.exceptions import ImageValidationError
from app.dependencies.services import read_image_upload
from app.models.image import UploadedImage
from app.services.image_host import (
    ImageHost,
    get_image_host,
    size_limit_transformation,
    validate_image,
)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


@router.post(
    "",
    response_model=UploadedImage,
    summary="Upload an image",
)
async def upload_image(
    image_host: Annotated[ImageHost, Depends(get_image_host)],
    image: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Upload an image to the image host and return its URL and public ID.

    Nothing is written to the user database.
    """
    settings = get_settings()
    try:
        upload = validate_image(await read_image_upload(image), settings.max_image_bytes)
    except ImageValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return await image_host.upload(
        upload,
        folder=settings.cloudinary_folder,
        transformation=size_limit_transformation(settings.image_max_dimension),
    )
