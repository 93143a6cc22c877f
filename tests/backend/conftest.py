"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for seeding the
mock database and checking API responses.
"""

import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Seeding Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def seeded_users_db(mock_users_db, sample_user_docs):
    """Users database pre-populated with sample_user_docs."""
    await mock_users_db.users.insert_many([dict(doc) for doc in sample_user_docs])
    yield mock_users_db


@pytest.fixture
def seed_app_users(app_db, sample_user_docs):
    """
    Insert sample users into the app's database from a sync test.

    mongomock-motor is not tied to an event loop, so a throwaway loop is enough.
    """
    def _seed() -> list[str]:
        result = asyncio.run(
            app_db.users.insert_many([dict(doc) for doc in sample_user_docs])
        )
        return [str(_id) for _id in result.inserted_ids]
    return _seed


# =============================================================================
# User Service Fixtures
# =============================================================================

@pytest.fixture
def user_service(mock_users_db, fake_image_host):
    """UserService wired to the mock database and fake image host."""
    from app.services.user_service import UserService

    return UserService(mock_users_db, fake_image_host)


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert
