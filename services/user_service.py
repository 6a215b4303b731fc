"""
services/user_service.py
------------------------
Profile reads/updates and the current user's own reviews and connections.
"""

from typing import Optional

from repositories.review_repo import ReviewRepository
from repositories.traveler_repo import TravelerRepository
from repositories.user_repo import UserRepository
from utils.errors import NotFound, ValidationError


class UserService:

    def __init__(
        self,
        user_repo: UserRepository,
        review_repo: ReviewRepository,
        traveler_repo: TravelerRepository,
    ):
        self.user_repo = user_repo
        self.review_repo = review_repo
        self.traveler_repo = traveler_repo

    async def get_profile(self, user_id: int) -> dict:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user.to_profile()

    async def update_profile(
        self,
        user_id: int,
        full_name: Optional[str] = None,
        interests: Optional[list[str]] = None,
        profile_photo: Optional[str] = None,
    ) -> None:
        if full_name is None and interests is None and profile_photo is None:
            raise ValidationError("Nothing to update")
        updated = await self.user_repo.update_profile(
            user_id, full_name=full_name, interests=interests, profile_photo=profile_photo
        )
        if not updated:
            raise NotFound("User not found")

    async def list_reviews(self, user_id: int) -> list[dict]:
        return [r.to_dict() for r in await self.review_repo.list_for_user(user_id)]

    async def list_connections(self, user_id: int) -> list[dict]:
        return [c.to_dict() for c in await self.traveler_repo.list_for_user(user_id)]
