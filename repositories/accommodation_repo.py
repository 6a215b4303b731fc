"""
repositories/accommodation_repo.py
-----------------------------------
Data access layer for accommodations. Only active listings are visible.
"""

from typing import Optional

from db.connection import Database
from db.placeholders import QueryBuilder
from models.accommodation import Accommodation
from utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_LIMIT = 50

_ORDERINGS = {
    "recent": "ORDER BY created_at DESC, id DESC",
    "price": "ORDER BY price_per_night ASC, id ASC",
}

_COLUMNS = (
    "id, name, description, city, address, latitude, longitude, price_per_night, "
    "accommodation_type, amenities, photos, contact_info, is_active, created_at"
)


def like_pattern(term: str) -> str:
    """Wrap a search term for a substring LIKE, escaping its wildcards."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class AccommodationRepository:
    """Repository for read operations on the accommodations table."""

    def __init__(self, db: Database):
        self.db = db

    async def search(
        self,
        city: Optional[str] = None,
        accommodation_type: Optional[str] = None,
        sort: str = "recent",
        limit: int = SEARCH_LIMIT,
    ) -> list[Accommodation]:
        """
        Search active accommodations.

        Args:
            city: Case-insensitive substring matched against city or name.
            accommodation_type: Exact type match.
            sort: 'recent' (newest first) or 'price' (cheapest first).
            limit: Maximum number of rows, capped at SEARCH_LIMIT.

        Returns:
            List of Accommodation objects.
        """
        like = self.db.dialect.like_operator
        query = QueryBuilder(f"SELECT {_COLUMNS} FROM accommodations WHERE is_active = TRUE")
        if city:
            pattern = like_pattern(city)
            query.add(f"AND (city {like} %s OR name {like} %s)", pattern, pattern)
        if accommodation_type:
            query.add("AND accommodation_type = %s", accommodation_type)
        query.add(_ORDERINGS.get(sort, _ORDERINGS["recent"]))
        query.add(f"LIMIT {min(int(limit), SEARCH_LIMIT)}")

        sql, params = query.build()
        rows = await self.db.fetch(sql, params)
        logger.info(f"Found {len(rows)} accommodations (city={city!r}, type={accommodation_type!r})")
        return [Accommodation.from_row(r) for r in rows]

    async def get_by_id(self, accommodation_id: int) -> Optional[Accommodation]:
        sql = f"SELECT {_COLUMNS} FROM accommodations WHERE id = %s AND is_active = TRUE"
        row = await self.db.fetch_one(sql, (accommodation_id,))
        return Accommodation.from_row(row) if row else None

    async def exists(self, accommodation_id: int) -> bool:
        sql = "SELECT id FROM accommodations WHERE id = %s AND is_active = TRUE"
        return await self.db.fetch_one(sql, (accommodation_id,)) is not None
