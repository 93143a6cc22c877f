"""
Global test fixtures for the User Registry.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- A fake image host that records uploads and deletions
- Sample user documents and image files
- FastAPI test clients with dependencies overridden
"""

import sys
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Generator, Optional
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# Smallest valid PNG: 1x1 transparent pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000100e221bc33000000"
    "0049454e44ae426082"
)


# =============================================================================
# Image Host Fake
# =============================================================================

class FakeImageHost:
    """
    In-memory stand-in for the Cloudinary client.

    Set ``fail_upload`` / ``fail_delete`` to simulate an unavailable host.
    """

    def __init__(self):
        self.uploads: list[dict] = []
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False

    async def upload(self, upload, folder: str, transformation: Optional[dict] = None):
        from app.core.exceptions import ImageHostError
        from app.models.image import UploadedImage

        if self.fail_upload:
            raise ImageHostError("Upload failed")

        public_id = f"{folder}/image-{len(self.uploads) + 1}"
        self.uploads.append({
            "filename": upload.filename,
            "content_type": upload.content_type,
            "size": len(upload.data),
            "folder": folder,
            "transformation": transformation,
            "public_id": public_id,
        })
        return UploadedImage(
            image_url=f"https://res.cloudinary.com/demo/image/upload/{public_id}.png",
            image_public_id=public_id,
        )

    async def delete(self, public_id: str) -> bool:
        self.deleted.append(public_id)
        if self.fail_delete:
            raise RuntimeError("image host unavailable")
        return True


@pytest.fixture
def fake_image_host() -> FakeImageHost:
    """Fresh fake image host per test."""
    return FakeImageHost()


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
    except ImportError:
        pytest.skip("mongomock-motor not installed")
    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest_asyncio.fixture
async def mock_users_db(mock_async_mongo_client):
    """Provide mock users database with the application's indexes."""
    from app.database.databases.users_db import create_user_indexes

    db = mock_async_mongo_client["users_db"]
    await create_user_indexes(db)
    yield db


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Valid registration form fields."""
    return {
        "full_name": "Ada Lovelace",
        "email": "Ada@Example.com",
        "phone": "5551234567",
    }


@pytest.fixture
def png_image():
    """A small valid PNG as an ImageUpload."""
    from app.services.image_host import ImageUpload

    return ImageUpload(filename="avatar.png", content_type="image/png", data=PNG_BYTES)


@pytest.fixture
def png_file() -> dict:
    """Multipart `files` argument carrying a PNG profile picture."""
    return {"image": ("avatar.png", PNG_BYTES, "image/png")}


def make_user_doc(
    full_name: str,
    email: str,
    created_at: datetime,
    phone: str = "5550000000",
    image_public_id: Optional[str] = None,
) -> dict:
    """Build a user document as stored in MongoDB."""
    public_id = image_public_id or f"profiles/{email.split('@')[0]}"
    return {
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "image_url": f"https://res.cloudinary.com/demo/image/upload/{public_id}.png",
        "image_public_id": public_id,
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture
def user_doc_factory():
    """Factory for stored user documents."""
    return make_user_doc


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def sample_user_docs(now) -> list[dict]:
    """Three users registered 10 days ago, 2 days ago, and 1 hour ago."""
    return [
        make_user_doc("Grace Hopper", "grace@example.com", now - timedelta(days=10), phone="5551110000"),
        make_user_doc("Alan Turing", "alan@example.com", now - timedelta(days=2), phone="5552220000"),
        make_user_doc("Katherine Johnson", "katherine@example.com", now - timedelta(hours=1), phone="5553330000"),
    ]


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app_db(mock_async_mongo_client):
    """Database handed to the app; indexes are created by the app's lifespan."""
    return mock_async_mongo_client["users_db"]


@pytest.fixture
def app(app_db, fake_image_host):
    """
    FastAPI app with the database and image host replaced by in-memory fakes.
    """
    from app.dependencies.services import get_user_service
    from app.main import app as fastapi_app
    from app.services.image_host import get_image_host
    from app.services.user_service import UserService

    async def override_user_service():
        return UserService(app_db, fake_image_host)

    fastapi_app.dependency_overrides[get_user_service] = override_user_service
    fastapi_app.dependency_overrides[get_image_host] = lambda: fake_image_host

    with patch("app.main.get_database", AsyncMock(return_value=app_db)), \
         patch("app.main.close_connections", AsyncMock()):
        yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    The client keeps cookies between requests, like a browser.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered_client(client) -> TestClient:
    """A client that already holds the registration marker cookie."""
    client.cookies.set("registered", "true")
    return client
