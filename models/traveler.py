"""
models/traveler.py
------------------
Domain model for traveler connections: a user announcing a stay at an
accommodation and whether they are looking for company.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional

from db import json_codec


@dataclass
class TravelerConnection:
    """
    Attributes:
        user_id: The announcing traveler.
        accommodation_id: Where they stay.
        travel_dates: ``{"checkin": "YYYY-MM-DD", "checkout": "YYYY-MM-DD"}``.
        is_looking_for_company: Only these show up in traveler listings.
        message: Optional note to other travelers.
        full_name/gender/age/interests: Traveler details from joined queries.
        accommodation_name/city: Accommodation details from joined queries.
    """
    user_id: int
    accommodation_id: int
    travel_dates: dict = field(default_factory=dict)
    is_looking_for_company: bool = True
    message: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    full_name: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    interests: Optional[list] = None
    accommodation_name: Optional[str] = None
    city: Optional[str] = None

    @property
    def checkin(self) -> Optional[date]:
        return _parse_date(self.travel_dates.get("checkin"))

    @property
    def checkout(self) -> Optional[date]:
        return _parse_date(self.travel_dates.get("checkout"))

    @classmethod
    def from_row(cls, row: dict) -> "TravelerConnection":
        conn_id = row.get("id")
        interests = None
        if "interests" in row:
            interests = json_codec.decode_list(
                row.get("interests"), field="interests", record_id=row.get("user_id")
            )
        return cls(
            id=conn_id,
            user_id=int(row["user_id"]),
            accommodation_id=int(row["accommodation_id"]),
            travel_dates=json_codec.decode_object(
                row.get("travel_dates"), field="travel_dates", record_id=conn_id
            ),
            is_looking_for_company=bool(row.get("is_looking_for_company", True)),
            message=row.get("message"),
            created_at=row.get("created_at"),
            full_name=row.get("full_name"),
            gender=row.get("gender"),
            age=row.get("age"),
            interests=interests,
            accommodation_name=row.get("accommodation_name"),
            city=row.get("city"),
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


def _parse_date(value) -> Optional[date]:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
