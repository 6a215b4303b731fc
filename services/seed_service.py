"""
services/seed_service.py
------------------------
Demo travelers, reviews and traveler connections for a fresh database.
Run from the command line with ``python main.py seed-demo``; never runs on boot.
"""

from db.connection import Database
from db.init_db import ensure_seed_data
from db.seed_data import DEMO_CONNECTIONS, DEMO_PASSWORD, DEMO_REVIEWS, DEMO_USERS
from repositories.accommodation_repo import AccommodationRepository
from repositories.review_repo import ReviewRepository
from repositories.traveler_repo import TravelerRepository
from repositories.user_repo import UserRepository
from services.auth_service import hash_password
from utils.logger import get_logger

logger = get_logger(__name__)


async def seed_demo_data(db: Database) -> bool:
    """
    Insert demo data when the users table is empty.

    Returns:
        True if data was inserted, False if users already existed.
    """
    existing = await db.fetch_value("SELECT COUNT(*) AS count FROM users")
    if int(existing or 0) > 0:
        logger.info("ℹ️ Users already exist, skipping demo data")
        return False

    await ensure_seed_data(db)

    user_repo = UserRepository(db)
    review_repo = ReviewRepository(db)
    traveler_repo = TravelerRepository(db)
    accommodations = await AccommodationRepository(db).search(sort="recent")
    # search returns newest first; demo rows refer to insertion order
    accommodation_ids = sorted(acc.id for acc in accommodations)
    if len(accommodation_ids) < 3:
        logger.warning("Demo data needs at least 3 accommodations, skipping")
        return False

    password_hash = hash_password(DEMO_PASSWORD)
    users = []
    for data in DEMO_USERS:
        users.append(await user_repo.create(password_hash=password_hash, **data))
    logger.info(f"✅ {len(users)} demo users created")

    for review in DEMO_REVIEWS:
        user = users[review["user"]]
        await review_repo.create(
            user_id=user.id,
            accommodation_id=accommodation_ids[review["accommodation"]],
            rating=review["rating"],
            safety_rating=review["safety_rating"],
            review_text=review["review_text"],
            is_female_review=user.is_female,
        )
    logger.info(f"✅ {len(DEMO_REVIEWS)} demo reviews created")

    for connection in DEMO_CONNECTIONS:
        await traveler_repo.create(
            user_id=users[connection["user"]].id,
            accommodation_id=accommodation_ids[connection["accommodation"]],
            travel_dates=dict(connection["travel_dates"]),
            message=connection["message"],
        )
    logger.info(f"✅ {len(DEMO_CONNECTIONS)} demo traveler connections created")
    return True
