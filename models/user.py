"""
models/user.py
--------------
Domain model for registered travelers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from db import json_codec

GENDERS = ("male", "female", "other")


@dataclass
class User:
    """
    Represents a registered traveler.

    Attributes:
        id: Database primary key (None for new records).
        email: Unique, lower-cased login email.
        full_name: Display name.
        gender: One of 'male', 'female', 'other'.
        age: Between 18 and 100.
        password_hash: bcrypt hash; never serialized to clients.
        profile_photo: Optional photo URL.
        interests: Ordered list of interest tags.
        is_verified: Whether the account has been verified.
        created_at: Timestamp when the record was created.
    """
    email: str
    full_name: str
    gender: str  # 'male' | 'female' | 'other'
    age: int
    password_hash: Optional[str] = None
    profile_photo: Optional[str] = None
    interests: list[str] = field(default_factory=list)
    is_verified: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_female(self) -> bool:
        return self.gender == "female"

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=row.get("id"),
            email=row["email"],
            full_name=row["full_name"],
            gender=row["gender"],
            age=int(row["age"]),
            password_hash=row.get("password_hash"),
            profile_photo=row.get("profile_photo"),
            interests=json_codec.decode_list(
                row.get("interests"), field="interests", record_id=row.get("id")
            ),
            is_verified=bool(row.get("is_verified") or False),
            created_at=row.get("created_at"),
        )

    def to_public(self) -> dict:
        """Short form returned by signup/login."""
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "age": self.age,
            "gender": self.gender,
        }

    def to_profile(self) -> dict:
        """Full profile, without the credential."""
        return {
            **self.to_public(),
            "profile_photo": self.profile_photo,
            "interests": self.interests,
            "is_verified": self.is_verified,
            "created_at": self.created_at,
        }
