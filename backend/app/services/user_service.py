"""
User service for registration and profile management.
"""
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.config import get_settings
from app.core.exceptions import EmailAlreadyRegisteredError, UserNotFoundError
from app.database.databases import users_db
from app.models.image import UploadedImage
from app.models.user import User
from app.schemas.user import UserForm, UserStats
from app.services.image_host import (
    ImageHost,
    ImageUpload,
    size_limit_transformation,
    validate_image,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("full_name", "email", "phone")


class UserService:
    """Service for user record operations."""

    def __init__(self, db: AsyncIOMotorDatabase, image_host: ImageHost):
        """Initialize with users database and image host."""
        self.db = db
        self.users_collection = db[users_db.Collections.USERS]
        self.image_host = image_host
        self.settings = get_settings()

    async def register_user(self, data: UserForm, image: Optional[ImageUpload]) -> User:
        """
        Register a new user with a profile image.

        The email check runs before the upload so a rejected registration
        never leaves an image behind. If the insert fails after the upload,
        the hosted image is not removed.

        Raises:
            ImageValidationError: If the image is missing or unacceptable
            EmailAlreadyRegisteredError: If the email is taken
            ImageHostError: If the upload fails
        """
        image = validate_image(image, self.settings.max_image_bytes)

        if await self.users_collection.find_one({"email": data.email}):
            raise EmailAlreadyRegisteredError(data.email)

        uploaded = await self._upload(image)

        now = datetime.now(timezone.utc)
        user_doc = {
            **data.model_dump(),
            "image_url": uploaded.image_url,
            "image_public_id": uploaded.image_public_id,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration of the same email
            raise EmailAlreadyRegisteredError(data.email)

        user_doc["_id"] = result.inserted_id
        logger.info("Registered user %s", result.inserted_id)
        return User.from_document(user_doc)

    async def list_users(self, search: Optional[str] = None) -> list[User]:
        """
        List users, newest first.

        Args:
            search: Optional case-insensitive substring matched against
                name, email and phone
        """
        query: dict = {}
        term = (search or "").strip()
        if term:
            pattern = {"$regex": re.escape(term), "$options": "i"}
            query = {"$or": [{field: pattern} for field in SEARCH_FIELDS]}

        cursor = self.users_collection.find(query).sort("created_at", -1)
        return [User.from_document(doc) async for doc in cursor]

    async def get_user(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            UserNotFoundError: If the id is malformed or unknown
        """
        return User.from_document(await self._find_document(user_id))

    async def update_user(
        self,
        user_id: str,
        data: UserForm,
        image: Optional[ImageUpload] = None,
    ) -> User:
        """
        Update profile fields and optionally replace the profile image.

        The previous image is deleted (best effort) only after the record
        points at the new one.
        """
        existing = await self._find_document(user_id)

        if image is not None:
            image = validate_image(image, self.settings.max_image_bytes)

        owner = await self.users_collection.find_one(
            {"email": data.email, "_id": {"$ne": existing["_id"]}}
        )
        if owner:
            raise EmailAlreadyRegisteredError(data.email)

        changes = {**data.model_dump(), "updated_at": datetime.now(timezone.utc)}
        uploaded: Optional[UploadedImage] = None
        if image is not None:
            uploaded = await self._upload(image)
            changes["image_url"] = uploaded.image_url
            changes["image_public_id"] = uploaded.image_public_id

        try:
            updated = await self.users_collection.find_one_and_update(
                {"_id": existing["_id"]},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise EmailAlreadyRegisteredError(data.email)

        if updated is None:
            raise UserNotFoundError(user_id)

        if uploaded is not None:
            await self._delete_image(existing.get("image_public_id"))

        logger.info("Updated user %s", user_id)
        return User.from_document(updated)

    async def delete_user(self, user_id: str) -> None:
        """
        Delete a user and, best effort, its hosted image.

        Raises:
            UserNotFoundError: If the id is malformed or unknown
        """
        existing = await self._find_document(user_id)
        await self._delete_image(existing.get("image_public_id"))
        await self.users_collection.delete_one({"_id": existing["_id"]})
        logger.info("Deleted user %s", user_id)

    async def get_stats(self, now: Optional[datetime] = None) -> UserStats:
        """Count all users, users from the last 7 days, and from the last 24 hours."""
        now = now or datetime.now(timezone.utc)
        total = await self.users_collection.count_documents({})
        recent = await self.users_collection.count_documents(
            {"created_at": {"$gt": now - timedelta(days=7)}}
        )
        today = await self.users_collection.count_documents(
            {"created_at": {"$gt": now - timedelta(days=1)}}
        )
        return UserStats(total=total, recent=recent, today=today)

    async def _find_document(self, user_id: str) -> dict:
        if not ObjectId.is_valid(user_id):
            raise UserNotFoundError(user_id)
        doc = await self.users_collection.find_one({"_id": ObjectId(user_id)})
        if not doc:
            raise UserNotFoundError(user_id)
        return doc

    async def _upload(self, image: ImageUpload) -> UploadedImage:
        return await self.image_host.upload(
            image,
            folder=self.settings.cloudinary_folder,
            transformation=size_limit_transformation(self.settings.image_max_dimension),
        )

    async def _delete_image(self, public_id: Optional[str]) -> None:
        """Remove a hosted image; failures are logged and never raised."""
        if not public_id:
            return
        try:
            deleted = await self.image_host.delete(public_id)
        except Exception as e:
            logger.warning("Failed to delete hosted image %s: %s", public_id, e)
            return
        if not deleted:
            logger.warning("Image host did not delete %s", public_id)
