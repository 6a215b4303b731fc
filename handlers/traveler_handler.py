"""
handlers/traveler_handler.py
-----------------------------
Traveler connections and messages between travelers.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from handlers.dependencies import get_traveler_service
from models.user import User
from schemas import ConnectBody, MessageBody
from security.auth import get_current_user
from services.traveler_service import TravelerService

router = APIRouter(prefix="/api/travelers", tags=["travelers"])


@router.post("/connect", status_code=status.HTTP_201_CREATED)
async def connect(
    body: ConnectBody,
    user: User = Depends(get_current_user),
    service: TravelerService = Depends(get_traveler_service),
):
    connection_id = await service.connect(
        user,
        accommodation_id=body.accommodation_id,
        checkin=body.travel_dates.checkin,
        checkout=body.travel_dates.checkout,
        message=body.message,
        is_looking_for_company=body.is_looking_for_company,
    )
    return {"message": "Traveler connection created successfully", "connection_id": connection_id}


@router.get("/accommodation/{accommodation_id}")
async def accommodation_travelers(
    accommodation_id: int,
    checkin: Optional[date] = Query(None),
    checkout: Optional[date] = Query(None),
    service: TravelerService = Depends(get_traveler_service),
):
    return await service.list_for_accommodation(accommodation_id, checkin=checkin, checkout=checkout)


@router.post("/message", status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageBody,
    user: User = Depends(get_current_user),
    service: TravelerService = Depends(get_traveler_service),
):
    message_id = await service.send_message(user, body.receiver_id, body.message)
    return {"message": "Message sent successfully", "message_id": message_id}


@router.get("/messages")
async def inbox(
    user: User = Depends(get_current_user),
    service: TravelerService = Depends(get_traveler_service),
):
    return await service.inbox(user)


@router.put("/messages/{message_id}/read")
async def mark_read(
    message_id: int,
    user: User = Depends(get_current_user),
    service: TravelerService = Depends(get_traveler_service),
):
    await service.mark_read(user, message_id)
    return {"message": "Message marked as read"}
