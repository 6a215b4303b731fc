"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db import json_codec
from db.connection import Database
from db.placeholders import QueryBuilder
from models.user import User
from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)

_USER_COLUMNS = (
    "id, email, password_hash, full_name, gender, age, "
    "profile_photo, interests, is_verified, created_at"
)


class UserRepository:
    """Repository for CRUD operations on the users table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    async def create(
        self,
        email: str,
        password_hash: str,
        full_name: str,
        age: int,
        gender: str,
        interests: Optional[list[str]] = None,
    ) -> User:
        """
        Insert a new user.

        Returns:
            The stored User, re-read so defaults (created_at, is_verified) are set.

        Raises:
            Conflict: If the email is already taken.
        """
        sql = """
            INSERT INTO users (email, password_hash, full_name, age, gender, interests)
            VALUES (%s, %s, %s, %s, %s, %s)
        """
        try:
            user_id = await self.db.insert(sql, (
                email, password_hash, full_name, age, gender,
                json_codec.encode(interests or []),
            ))
        except AppError as e:
            logger.error(f"Failed to create user {email}: {e}")
            raise
        return await self.get_by_id(user_id)

    # ── READ ──────────────────────────────────────────────

    async def get_by_id(self, user_id: int) -> Optional[User]:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"
        row = await self.db.fetch_one(sql, (user_id,))
        return User.from_row(row) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Fetch a user (including the password hash) by login email."""
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"
        row = await self.db.fetch_one(sql, (email,))
        return User.from_row(row) if row else None

    async def email_exists(self, email: str) -> bool:
        row = await self.db.fetch_one("SELECT id FROM users WHERE email = %s", (email,))
        return row is not None

    # ── UPDATE ────────────────────────────────────────────

    async def update_profile(
        self,
        user_id: int,
        full_name: Optional[str] = None,
        interests: Optional[list[str]] = None,
        profile_photo: Optional[str] = None,
    ) -> bool:
        """
        Update only the profile fields that were provided.

        Returns:
            True if a row was updated, False otherwise.
        """
        assignments = QueryBuilder()
        if full_name is not None:
            assignments.add("full_name = %s", full_name)
        if interests is not None:
            assignments.add("interests = %s", json_codec.encode(interests))
        if profile_photo is not None:
            assignments.add("profile_photo = %s", profile_photo)
        if not assignments:
            return False

        set_sql, set_params = assignments.build(", ")
        query = QueryBuilder(f"UPDATE users SET {set_sql}, updated_at = CURRENT_TIMESTAMP", *set_params)
        query.add("WHERE id = %s", user_id)

        sql, params = query.build()
        try:
            updated = await self.db.execute(sql, params)
        except AppError as e:
            logger.error(f"Failed to update profile of user {user_id}: {e}")
            raise
        return updated > 0
