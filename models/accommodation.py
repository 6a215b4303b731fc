"""
models/accommodation.py
-----------------------
Domain model for bookable places (hostels, hotels, guesthouses, homestays).
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional

from db import json_codec

ACCOMMODATION_TYPES = ("hostel", "hotel", "guesthouse", "homestay")


@dataclass
class Accommodation:
    """
    Represents a single accommodation listing.

    Attributes:
        id: Database primary key.
        name: Listing name.
        city: City used by search.
        address: Street address.
        price_per_night: Nightly price in whole currency units.
        accommodation_type: One of ACCOMMODATION_TYPES.
        description: Optional long description.
        latitude/longitude: Optional coordinates.
        amenities: List of amenity labels.
        photos: List of photo file names or URLs.
        contact_info: Free-form contact object (phone, email, ...).
        is_active: Inactive listings are hidden from every read.
        created_at: Timestamp when the record was created.
    """
    name: str
    city: str
    address: str
    price_per_night: int
    accommodation_type: str
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    amenities: list = field(default_factory=list)
    photos: list = field(default_factory=list)
    contact_info: dict = field(default_factory=dict)
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "Accommodation":
        acc_id = row.get("id")
        return cls(
            id=acc_id,
            name=row["name"],
            city=row["city"],
            address=row.get("address") or "",
            price_per_night=int(row["price_per_night"]),
            accommodation_type=row["accommodation_type"],
            description=row.get("description"),
            latitude=_to_float(row.get("latitude")),
            longitude=_to_float(row.get("longitude")),
            amenities=json_codec.decode_list(row.get("amenities"), field="amenities", record_id=acc_id),
            photos=json_codec.decode_list(row.get("photos"), field="photos", record_id=acc_id),
            contact_info=json_codec.decode_object(
                row.get("contact_info"), field="contact_info", record_id=acc_id
            ),
            is_active=bool(row.get("is_active", True)),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def _to_float(value) -> Optional[float]:
    return float(value) if value is not None else None
