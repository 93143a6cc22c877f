"""
User model for the users database.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """
    User document model for MongoDB users_db.users collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    full_name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="Unique, lowercased email address")
    phone: str = Field(..., description="10-digit phone number")
    image_url: str = Field(..., description="Hosted profile image URL")
    image_public_id: str = Field(
        ...,
        description="Image host identifier, needed to delete the hosted image"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Record creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last modification timestamp"
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        """Build a User from a raw MongoDB document."""
        doc = dict(doc)
        doc["_id"] = str(doc["_id"])
        return cls(**doc)
