"""
Request and response schemas for API endpoints.
"""
from app.schemas.user import (
    UserForm,
    UserResponse,
    UserStats,
    UserMutationResponse,
    MessageResponse,
    SessionStatus,
    field_errors,
)

__all__ = [
    "UserForm",
    "UserResponse",
    "UserStats",
    "UserMutationResponse",
    "MessageResponse",
    "SessionStatus",
    "field_errors",
]
