"""
handlers/review_handler.py
---------------------------
Creating and listing accommodation reviews.
"""

from fastapi import APIRouter, Depends, Query, status

from handlers.dependencies import get_review_service
from models.user import User
from schemas import ReviewCreateBody
from security.auth import get_current_user
from services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreateBody,
    user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    review_id = await service.create(
        user,
        accommodation_id=body.accommodation_id,
        rating=body.rating,
        safety_rating=body.safety_rating,
        review_text=body.review_text,
    )
    return {"message": "Review created successfully", "review_id": review_id}


@router.get("/accommodation/{accommodation_id}")
async def accommodation_reviews(
    accommodation_id: int,
    female_only: bool = Query(False),
    service: ReviewService = Depends(get_review_service),
):
    return await service.list_for_accommodation(accommodation_id, female_only=female_only)
