"""
repositories/review_repo.py
----------------------------
Data access layer for accommodation reviews.
"""

from typing import Optional

from db.connection import Database
from db.placeholders import QueryBuilder
from models.review import Review
from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)


class ReviewRepository:
    """Repository for CRUD operations on the reviews table."""

    def __init__(self, db: Database):
        self.db = db

    async def exists_for(self, user_id: int, accommodation_id: int) -> bool:
        """Has this user already reviewed this accommodation?"""
        sql = "SELECT id FROM reviews WHERE user_id = %s AND accommodation_id = %s"
        return await self.db.fetch_one(sql, (user_id, accommodation_id)) is not None

    async def create(
        self,
        user_id: int,
        accommodation_id: int,
        rating: int,
        safety_rating: int,
        review_text: Optional[str],
        is_female_review: bool,
    ) -> int:
        """
        Insert a review.

        Returns:
            The new review id.
        """
        sql = """
            INSERT INTO reviews
                (user_id, accommodation_id, rating, safety_rating, review_text, is_female_review)
            VALUES (%s, %s, %s, %s, %s, %s)
        """
        try:
            review_id = await self.db.insert(sql, (
                user_id, accommodation_id, rating, safety_rating, review_text, is_female_review,
            ))
        except AppError as e:
            logger.error(f"Failed to add review for accommodation {accommodation_id}: {e}")
            raise
        logger.info(f"Added review #{review_id} by user {user_id} for accommodation {accommodation_id}")
        return review_id

    async def list_for_accommodation(self, accommodation_id: int, female_only: bool = False) -> list[Review]:
        """Reviews of an accommodation with reviewer name and gender, newest first."""
        query = QueryBuilder(
            """
            SELECT r.id, r.user_id, r.accommodation_id, r.rating, r.safety_rating,
                   r.review_text, r.is_female_review, r.created_at, u.full_name, u.gender
            FROM reviews r
            JOIN users u ON r.user_id = u.id
            WHERE r.accommodation_id = %s
            """,
            accommodation_id,
        )
        if female_only:
            query.add("AND r.is_female_review = TRUE")
        query.add("ORDER BY r.created_at DESC, r.id DESC")

        sql, params = query.build()
        return [Review.from_row(r) for r in await self.db.fetch(sql, params)]

    async def list_for_user(self, user_id: int) -> list[Review]:
        """Reviews written by a user, with the accommodation name and city."""
        sql = """
            SELECT r.id, r.user_id, r.accommodation_id, r.rating, r.safety_rating,
                   r.review_text, r.is_female_review, r.created_at,
                   a.name AS accommodation_name, a.city
            FROM reviews r
            JOIN accommodations a ON r.accommodation_id = a.id
            WHERE r.user_id = %s
            ORDER BY r.created_at DESC, r.id DESC
        """
        return [Review.from_row(r) for r in await self.db.fetch(sql, (user_id,))]
