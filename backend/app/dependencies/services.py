"""
Service dependencies for route handlers.
"""
from typing import Annotated, Optional

from fastapi import Depends, UploadFile

from app.database.connections import get_database
from app.services.image_host import ImageHost, ImageUpload, get_image_host
from app.services.user_service import UserService


async def get_user_service(
    image_host: Annotated[ImageHost, Depends(get_image_host)],
) -> UserService:
    """Dependency to get UserService instance."""
    db = await get_database()
    return UserService(db, image_host)


async def read_image_upload(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """
    Read a multipart file into memory.

    Browsers send an empty part when no file was chosen; that counts as no image.
    """
    if file is None or not file.filename:
        return None
    data = await file.read()
    if not data:
        return None
    return ImageUpload(
        filename=file.filename,
        content_type=file.content_type or "",
        data=data,
    )


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
