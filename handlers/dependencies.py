"""
handlers/dependencies.py
------------------------
FastAPI dependency providers wiring the shared Database into
repositories and services, one set per request.
"""

from fastapi import Depends

from db.connection import Database, get_database
from repositories.accommodation_repo import AccommodationRepository
from repositories.message_repo import MessageRepository
from repositories.review_repo import ReviewRepository
from repositories.traveler_repo import TravelerRepository
from repositories.user_repo import UserRepository
from services.accommodation_service import AccommodationService
from services.auth_service import AuthService
from services.review_service import ReviewService
from services.traveler_service import TravelerService
from services.user_service import UserService


def get_db() -> Database:
    return get_database()


# ── Repositories ──────────────────────────────────────────

def get_user_repo(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_accommodation_repo(db: Database = Depends(get_db)) -> AccommodationRepository:
    return AccommodationRepository(db)


def get_review_repo(db: Database = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


def get_traveler_repo(db: Database = Depends(get_db)) -> TravelerRepository:
    return TravelerRepository(db)


def get_message_repo(db: Database = Depends(get_db)) -> MessageRepository:
    return MessageRepository(db)


# ── Services ──────────────────────────────────────────────

def get_auth_service(user_repo: UserRepository = Depends(get_user_repo)) -> AuthService:
    return AuthService(user_repo)


def get_accommodation_service(
    accommodation_repo: AccommodationRepository = Depends(get_accommodation_repo),
) -> AccommodationService:
    return AccommodationService(accommodation_repo)


def get_user_service(
    user_repo: UserRepository = Depends(get_user_repo),
    review_repo: ReviewRepository = Depends(get_review_repo),
    traveler_repo: TravelerRepository = Depends(get_traveler_repo),
) -> UserService:
    return UserService(user_repo, review_repo, traveler_repo)


def get_review_service(
    review_repo: ReviewRepository = Depends(get_review_repo),
    accommodation_repo: AccommodationRepository = Depends(get_accommodation_repo),
) -> ReviewService:
    return ReviewService(review_repo, accommodation_repo)


def get_traveler_service(
    traveler_repo: TravelerRepository = Depends(get_traveler_repo),
    message_repo: MessageRepository = Depends(get_message_repo),
    accommodation_repo: AccommodationRepository = Depends(get_accommodation_repo),
    user_repo: UserRepository = Depends(get_user_repo),
) -> TravelerService:
    return TravelerService(traveler_repo, message_repo, accommodation_repo, user_repo)
