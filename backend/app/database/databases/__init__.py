"""
Database definitions and collection constants.
"""
from app.database.databases import users_db

__all__ = ["users_db"]
