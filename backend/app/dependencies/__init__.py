"""
Dependencies for dependency injection in routes.
"""
from app.dependencies.services import get_user_service, read_image_upload, UserServiceDep

__all__ = [
    "get_user_service",
    "read_image_upload",
    "UserServiceDep",
]
