"""
repositories/traveler_repo.py
------------------------------
Data access layer for traveler connections.
"""

from datetime import date
from typing import Optional

from db import json_codec
from db.connection import Database
from db.placeholders import QueryBuilder
from models.traveler import TravelerConnection
from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)

TRAVELERS_LIMIT = 10


class TravelerRepository:
    """Repository for CRUD operations on the traveler_connections table."""

    def __init__(self, db: Database):
        self.db = db

    async def create(
        self,
        user_id: int,
        accommodation_id: int,
        travel_dates: dict,
        message: Optional[str] = None,
        is_looking_for_company: bool = True,
    ) -> int:
        """Insert a traveler connection and return its id."""
        sql = """
            INSERT INTO traveler_connections
                (user_id, accommodation_id, travel_dates, message, is_looking_for_company)
            VALUES (%s, %s, %s, %s, %s)
        """
        try:
            connection_id = await self.db.insert(sql, (
                user_id, accommodation_id, json_codec.encode(travel_dates), message, is_looking_for_company,
            ))
        except AppError as e:
            logger.error(f"Failed to add traveler connection for user {user_id}: {e}")
            raise
        logger.info(f"Added traveler connection #{connection_id} for user {user_id}")
        return connection_id

    async def list_for_accommodation(
        self,
        accommodation_id: int,
        checkin: Optional[date] = None,
        checkout: Optional[date] = None,
    ) -> list[TravelerConnection]:
        """
        Travelers looking for company at an accommodation.

        When both dates are given, only stays overlapping [checkin, checkout]
        are returned. Newest first, at most TRAVELERS_LIMIT rows.
        """
        dialect = self.db.dialect
        query = QueryBuilder(
            """
            SELECT tc.id, tc.user_id, tc.accommodation_id, tc.travel_dates,
                   tc.is_looking_for_company, tc.message, tc.created_at,
                   u.full_name, u.gender, u.age, u.interests
            FROM traveler_connections tc
            JOIN users u ON tc.user_id = u.id
            WHERE tc.accommodation_id = %s AND tc.is_looking_for_company = TRUE
            """,
            accommodation_id,
        )
        if checkin and checkout:
            query.add(f"AND {dialect.json_text('tc.travel_dates', 'checkin')} <= %s", checkout.isoformat())
            query.add(f"AND {dialect.json_text('tc.travel_dates', 'checkout')} >= %s", checkin.isoformat())
        query.add(f"ORDER BY tc.created_at DESC, tc.id DESC LIMIT {TRAVELERS_LIMIT}")

        sql, params = query.build()
        return [TravelerConnection.from_row(r) for r in await self.db.fetch(sql, params)]

    async def list_for_user(self, user_id: int) -> list[TravelerConnection]:
        """A user's own connections, with the accommodation name and city."""
        sql = """
            SELECT tc.id, tc.user_id, tc.accommodation_id, tc.travel_dates,
                   tc.is_looking_for_company, tc.message, tc.created_at,
                   a.name AS accommodation_name, a.city
            FROM traveler_connections tc
            JOIN accommodations a ON tc.accommodation_id = a.id
            WHERE tc.user_id = %s
            ORDER BY tc.created_at DESC, tc.id DESC
        """
        return [TravelerConnection.from_row(r) for r in await self.db.fetch(sql, (user_id,))]
