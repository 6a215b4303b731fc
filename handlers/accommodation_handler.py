"""
handlers/accommodation_handler.py
----------------------------------
Public accommodation search and detail.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from handlers.dependencies import get_accommodation_service
from services.accommodation_service import AccommodationService

router = APIRouter(prefix="/api/accommodations", tags=["accommodations"])


@router.get("/search")
async def search_accommodations(
    city: Optional[str] = Query(None, description="Substring of city or name"),
    type: Optional[str] = Query(None, description="hostel, hotel, guesthouse, homestay or all"),
    sort: Literal["recent", "price"] = Query("recent"),
    service: AccommodationService = Depends(get_accommodation_service),
):
    accommodations = await service.search(city=city, accommodation_type=type, sort=sort)
    return {
        "success": True,
        "count": len(accommodations),
        "accommodations": accommodations,
    }


@router.get("/{accommodation_id}")
async def get_accommodation(
    accommodation_id: int,
    service: AccommodationService = Depends(get_accommodation_service),
):
    return {"success": True, "accommodation": await service.get(accommodation_id)}
