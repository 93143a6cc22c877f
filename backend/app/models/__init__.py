"""
Pydantic models for database documents and data structures.
"""
from app.models.user import User
from app.models.image import UploadedImage

__all__ = [
    "User",
    "UploadedImage",
]
