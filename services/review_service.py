"""
services/review_service.py
--------------------------
Business rules for reviews: one review per user and accommodation,
and the female-review flag taken from the reviewer at creation time.
"""

from typing import Optional

from models.user import User
from repositories.accommodation_repo import AccommodationRepository
from repositories.review_repo import ReviewRepository
from utils.errors import Conflict, NotFound
from utils.logger import get_logger

logger = get_logger(__name__)


class ReviewService:

    def __init__(self, review_repo: ReviewRepository, accommodation_repo: AccommodationRepository):
        self.review_repo = review_repo
        self.accommodation_repo = accommodation_repo

    async def create(
        self,
        user: User,
        accommodation_id: int,
        rating: int,
        safety_rating: int,
        review_text: Optional[str] = None,
    ) -> int:
        """
        Create a review by ``user``.

        The duplicate check and the insert are separate statements, so two
        concurrent submissions for the same pair can both succeed.

        Raises:
            NotFound: Unknown or inactive accommodation.
            Conflict: The user already reviewed this accommodation.
        """
        if not await self.accommodation_repo.exists(accommodation_id):
            raise NotFound("Accommodation not found")
        if await self.review_repo.exists_for(user.id, accommodation_id):
            raise Conflict("You have already reviewed this accommodation")

        return await self.review_repo.create(
            user_id=user.id,
            accommodation_id=accommodation_id,
            rating=rating,
            safety_rating=safety_rating,
            review_text=review_text,
            is_female_review=user.is_female,
        )

    async def list_for_accommodation(self, accommodation_id: int, female_only: bool = False) -> list[dict]:
        reviews = await self.review_repo.list_for_accommodation(accommodation_id, female_only=female_only)
        return [r.to_dict() for r in reviews]
