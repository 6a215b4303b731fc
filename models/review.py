"""
models/review.py
----------------
Domain model for accommodation reviews.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Review:
    """
    Represents one user's review of one accommodation.

    ``is_female_review`` is fixed from the reviewer's gender when the
    review is created and is never recomputed.

    The optional reviewer/accommodation fields are only filled when the
    row comes from a joined query.
    """
    user_id: int
    accommodation_id: int
    rating: int
    safety_rating: int
    review_text: Optional[str] = None
    is_female_review: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    full_name: Optional[str] = None
    gender: Optional[str] = None
    accommodation_name: Optional[str] = None
    city: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Review":
        return cls(
            id=row.get("id"),
            user_id=int(row["user_id"]),
            accommodation_id=int(row["accommodation_id"]),
            rating=int(row["rating"]),
            safety_rating=int(row["safety_rating"]),
            review_text=row.get("review_text"),
            is_female_review=bool(row.get("is_female_review") or False),
            created_at=row.get("created_at"),
            full_name=row.get("full_name"),
            gender=row.get("gender"),
            accommodation_name=row.get("accommodation_name"),
            city=row.get("city"),
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}
