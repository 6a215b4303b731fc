"""
Request schemas for the TravelEase API.

Each Pydantic model validates one JSON request body. Violations are
reported as 400 responses with one entry per offending field.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_validator, model_validator

from models.user import GENDERS


class SignupBody(BaseModel):
    email: EmailStr = Field(..., description="Login email, stored lower-cased")
    password: str = Field(..., min_length=6, description="Plain-text password, hashed with bcrypt")
    full_name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., ge=18, le=100)
    gender: str
    interests: List[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("gender")
    @classmethod
    def known_gender(cls, v: str) -> str:
        if v not in GENDERS:
            raise ValueError(f"gender must be one of: {', '.join(GENDERS)}")
        return v


class LoginBody(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ProfileUpdateBody(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    interests: Optional[List[str]] = None
    profile_photo: Optional[HttpUrl] = None


class ReviewCreateBody(BaseModel):
    accommodation_id: int
    rating: int = Field(..., ge=1, le=5)
    safety_rating: int = Field(..., ge=1, le=5)
    review_text: Optional[str] = Field(None, max_length=1000)


class TravelDates(BaseModel):
    checkin: date
    checkout: date

    @model_validator(mode="after")
    def checkout_not_before_checkin(self):
        if self.checkout < self.checkin:
            raise ValueError("checkout must be on or after checkin")
        return self


class ConnectBody(BaseModel):
    accommodation_id: int
    travel_dates: TravelDates
    message: Optional[str] = Field(None, max_length=500)
    is_looking_for_company: bool = True


class MessageBody(BaseModel):
    receiver_id: int
    message: str = Field(..., min_length=1, max_length=1000)
