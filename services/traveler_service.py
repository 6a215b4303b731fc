"""
services/traveler_service.py
----------------------------
Traveler connections and direct messages between travelers.
"""

from datetime import date
from typing import Optional

from models.user import User
from repositories.accommodation_repo import AccommodationRepository
from repositories.message_repo import MessageRepository
from repositories.traveler_repo import TravelerRepository
from repositories.user_repo import UserRepository
from utils.errors import NotFound, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class TravelerService:

    def __init__(
        self,
        traveler_repo: TravelerRepository,
        message_repo: MessageRepository,
        accommodation_repo: AccommodationRepository,
        user_repo: UserRepository,
    ):
        self.traveler_repo = traveler_repo
        self.message_repo = message_repo
        self.accommodation_repo = accommodation_repo
        self.user_repo = user_repo

    # ── Connections ───────────────────────────────────────

    async def connect(
        self,
        user: User,
        accommodation_id: int,
        checkin: date,
        checkout: date,
        message: Optional[str] = None,
        is_looking_for_company: bool = True,
    ) -> int:
        """
        Announce a stay at an accommodation.

        Raises:
            ValidationError: checkout before checkin.
            NotFound: Unknown or inactive accommodation.
        """
        _check_range(checkin, checkout)
        if not await self.accommodation_repo.exists(accommodation_id):
            raise NotFound("Accommodation not found")

        travel_dates = {"checkin": checkin.isoformat(), "checkout": checkout.isoformat()}
        return await self.traveler_repo.create(
            user_id=user.id,
            accommodation_id=accommodation_id,
            travel_dates=travel_dates,
            message=message,
            is_looking_for_company=is_looking_for_company,
        )

    async def list_for_accommodation(
        self,
        accommodation_id: int,
        checkin: Optional[date] = None,
        checkout: Optional[date] = None,
    ) -> list[dict]:
        """Travelers looking for company; the date filter applies only when both dates are given."""
        if checkin and checkout:
            _check_range(checkin, checkout)
        travelers = await self.traveler_repo.list_for_accommodation(
            accommodation_id, checkin=checkin, checkout=checkout
        )
        return [t.to_dict() for t in travelers]

    # ── Messages ──────────────────────────────────────────

    async def send_message(self, sender: User, receiver_id: int, body: str) -> int:
        body = body.strip()
        if not body:
            raise ValidationError("Message cannot be empty", errors=[{"field": "message", "msg": "empty"}])
        if not await self.user_repo.get_by_id(receiver_id):
            raise NotFound("Receiver not found")
        return await self.message_repo.create(sender.id, receiver_id, body)

    async def inbox(self, user: User) -> list[dict]:
        return [m.to_dict() for m in await self.message_repo.list_received(user.id)]

    async def mark_read(self, user: User, message_id: int) -> None:
        if not await self.message_repo.mark_read(message_id, user.id):
            raise NotFound("Message not found")


def _check_range(checkin: date, checkout: date) -> None:
    if checkout < checkin:
        raise ValidationError(
            "checkout must not be before checkin",
            errors=[{"field": "checkout", "msg": "must be on or after checkin"}],
        )
