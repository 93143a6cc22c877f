"""
Image host client for profile pictures.

Profile pictures are stored on Cloudinary through its SDK. The SDK is
blocking, so uploads and deletions run in the threadpool.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi.concurrency import run_in_threadpool

from app.config import get_settings
from app.core.exceptions import ImageHostError, ImageValidationError
from app.models.image import UploadedImage

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """An image file received from a client, read fully into memory."""
    filename: str
    content_type: str
    data: bytes


class ImageHost(Protocol):
    """Interface for storing and deleting hosted images."""

    async def upload(
        self,
        upload: ImageUpload,
        folder: str,
        transformation: Optional[dict[str, Any]] = None,
    ) -> UploadedImage:
        """Store an image and return its URL and deletion handle."""

    async def delete(self, public_id: str) -> bool:
        """Remove a stored image. Returns False if the host did not delete it."""


def validate_image(image: Optional[ImageUpload], max_bytes: int) -> ImageUpload:
    """
    Check an uploaded profile image before it is sent anywhere.

    Raises:
        ImageValidationError: If the image is missing, not an image, or too large
    """
    if image is None or not image.data:
        raise ImageValidationError("Image is required")
    if not (image.content_type or "").startswith("image/"):
        raise ImageValidationError("Please select a valid image file (JPG, PNG, GIF)")
    if len(image.data) > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ImageValidationError(f"Image size should be less than {limit_mb:g}MB")
    return image


def size_limit_transformation(max_dimension: int) -> dict[str, Any]:
    """Shrink images larger than max_dimension on both sides, keeping aspect ratio."""
    return {"width": max_dimension, "height": max_dimension, "crop": "limit"}


class CloudinaryImageHost:
    """
    Async wrapper around the Cloudinary uploader.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
    ):
        self.configured = bool(cloud_name and api_key and api_secret)
        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )

    def _require_config(self) -> None:
        if not self.configured:
            raise ImageHostError("Cloudinary credentials are not configured")

    async def upload(
        self,
        upload: ImageUpload,
        folder: str,
        transformation: Optional[dict[str, Any]] = None,
    ) -> UploadedImage:
        self._require_config()
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                upload.data,
                folder=folder,
                resource_type="image",
                transformation=transformation,
            )
        except cloudinary.exceptions.Error as e:
            logger.exception("Cloudinary upload failed")
            raise ImageHostError("Upload failed") from e

        return UploadedImage(
            image_url=result["secure_url"],
            image_public_id=result["public_id"],
        )

    async def delete(self, public_id: str) -> bool:
        self._require_config()
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.destroy,
                public_id,
                invalidate=True,
            )
        except cloudinary.exceptions.Error as e:
            raise ImageHostError(f"Delete failed for {public_id}") from e
        return result.get("result") == "ok"


_image_host: Optional[CloudinaryImageHost] = None


def get_image_host() -> CloudinaryImageHost:
    """Get shared image host instance, configuring the SDK on first use."""
    global _image_host
    if _image_host is None:
        settings = get_settings()
        _image_host = CloudinaryImageHost(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )
    return _image_host
