"""
handlers/user_handler.py
-------------------------
The authenticated user's profile, reviews and traveler connections.
"""

from fastapi import APIRouter, Depends

from handlers.dependencies import get_user_service
from models.user import User
from schemas import ProfileUpdateBody
from security.auth import get_current_user
from services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
async def get_profile(
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_profile(user.id)


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateBody,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.update_profile(
        user.id,
        full_name=body.full_name,
        interests=body.interests,
        profile_photo=str(body.profile_photo) if body.profile_photo else None,
    )
    return {"message": "Profile updated successfully"}


@router.get("/reviews")
async def my_reviews(
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.list_reviews(user.id)


@router.get("/connections")
async def my_connections(
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.list_connections(user.id)
