"""
User request/response schemas.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

PHONE_PATTERN = r"^\d{10}$"

# Messages shown next to each form field when its value is rejected
FIELD_ERROR_MESSAGES = {
    "full_name": "Full name must be at least 2 characters",
    "email": "Please enter a valid email address",
    "phone": "Phone number must be exactly 10 digits",
}


class UserForm(BaseModel):
    """Profile fields submitted on registration and on edit."""
    full_name: str = Field(..., min_length=2, description="Full name (min 2 characters)")
    email: EmailStr = Field(..., description="Email address (must be unique)")
    phone: str = Field(..., pattern=PHONE_PATTERN, description="Exactly 10 digits")

    @field_validator("full_name", "phone", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Collapse a ValidationError into one message per form field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        errors.setdefault(field, FIELD_ERROR_MESSAGES.get(field, error["msg"]))
    return errors


class UserResponse(BaseModel):
    """User information returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User ID")
    full_name: str = Field(..., description="Full name")
    email: EmailStr = Field(..., description="User email")
    phone: str = Field(..., description="Phone number")
    image_url: str = Field(..., description="Profile image URL")
    created_at: datetime = Field(..., description="Registration date")
    updated_at: datetime = Field(..., description="Last update")


class UserStats(BaseModel):
    """Registration counters shown on the dashboard."""
    total: int = Field(..., description="All registered users")
    recent: int = Field(..., description="Registered in the last 7 days")
    today: int = Field(..., description="Registered in the last 24 hours")


class UserMutationResponse(BaseModel):
    """Response for create/update operations."""
    success: bool = True
    user: UserResponse


class MessageResponse(BaseModel):
    """Plain message response."""
    message: str


class SessionStatus(BaseModel):
    """Whether the caller holds the registration marker."""
    authenticated: bool
