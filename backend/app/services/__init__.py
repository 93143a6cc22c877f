"""
Service layer for business logic.
"""
from app.services.user_service import UserService
from app.services.image_host import CloudinaryImageHost, ImageHost, ImageUpload

__all__ = [
    "UserService",
    "CloudinaryImageHost",
    "ImageHost",
    "ImageUpload",
]
