"""
API Routers module.
"""
from app.routers import health, pages, session, upload, users

__all__ = ["health", "pages", "session", "upload", "users"]
