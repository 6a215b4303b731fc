"""
security/auth.py
-----------------
Bearer-token authentication for protected routes.

Usage:
    @router.get("/profile")
    async def profile(user: User = Depends(get_current_user)):
        ...
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from handlers.dependencies import get_auth_service
from models.user import User
from services.auth_service import AuthService
from utils.errors import Unauthorized
from utils.logger import get_logger

logger = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the ``Authorization: Bearer <token>`` header to a stored user.

    Raises:
        Unauthorized: Missing header, invalid/expired token, or deleted user.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access token required")
    try:
        return await auth_service.authenticate(credentials.credentials)
    except Unauthorized as e:
        logger.warning(f"🚫 Rejected token: {e.message}")
        raise
