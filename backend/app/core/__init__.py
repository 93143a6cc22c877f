"""
Core module - Session gate and error types.
"""
from app.core.exceptions import (
    ConfigurationError,
    EmailAlreadyRegisteredError,
    ImageHostError,
    ImageValidationError,
    UserNotFoundError,
)
from app.core.session import (
    SessionGateMiddleware,
    has_session,
    issue_session,
    revoke_session,
)

__all__ = [
    "ConfigurationError",
    "EmailAlreadyRegisteredError",
    "ImageHostError",
    "ImageValidationError",
    "UserNotFoundError",
    "SessionGateMiddleware",
    "has_session",
    "issue_session",
    "revoke_session",
]
