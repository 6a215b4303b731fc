"""
services/auth_service.py
------------------------
Signup, login, password hashing and bearer-token issuance.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from config import JWT_ALGORITHM, JWT_EXPIRES_DAYS, JWT_SECRET
from models.user import User
from repositories.user_repo import UserRepository
from utils.errors import Conflict, Unauthorized
from utils.logger import get_logger

logger = get_logger(__name__)

_BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(_BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def issue_token(user: User) -> str:
    """Signed token carrying the user id and email, valid JWT_EXPIRES_DAYS days."""
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(days=JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Verify a bearer token.

    Raises:
        Unauthorized: If the token is expired, tampered with, or malformed.
    """
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")
    if not isinstance(payload.get("user_id"), int):
        raise Unauthorized("Invalid token")
    return payload


class AuthService:
    """Creates accounts and exchanges credentials for tokens."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def signup(
        self,
        email: str,
        password: str,
        full_name: str,
        age: int,
        gender: str,
        interests: Optional[list[str]] = None,
    ) -> tuple[str, User]:
        """
        Register a new user.

        Returns:
            ``(token, user)``.

        Raises:
            Conflict: If the email is already registered.
        """
        if await self.user_repo.email_exists(email):
            raise Conflict("User with this email already exists")

        user = await self.user_repo.create(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            age=age,
            gender=gender,
            interests=interests or [],
        )
        logger.info(f"✅ New user created: {email}")
        return issue_token(user), user

    async def login(self, email: str, password: str) -> tuple[str, User]:
        """
        Raises:
            Unauthorized: Unknown email or wrong password (same message for both).
        """
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise Unauthorized("Invalid email or password")
        logger.info(f"✅ User logged in: {email}")
        return issue_token(user), user

    async def authenticate(self, token: str) -> User:
        """Resolve a bearer token to the stored user."""
        payload = decode_token(token)
        user = await self.user_repo.get_by_id(payload["user_id"])
        if not user:
            raise Unauthorized("User no longer exists")
        return user
