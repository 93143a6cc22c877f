"""
Application error types.

Routers translate these into HTTP responses; services raise them.
"""


class ConfigurationError(RuntimeError):
    """Required configuration is missing. Fatal at startup."""


class UserNotFoundError(LookupError):
    """No user record matches the given id."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class EmailAlreadyRegisteredError(ValueError):
    """Another user record already owns this email."""

    def __init__(self, email: str):
        super().__init__("This email ID is already registered.")
        self.email = email


class ImageValidationError(ValueError):
    """Uploaded profile image is missing or unacceptable."""


class ImageHostError(RuntimeError):
    """The image host failed to store an image."""
