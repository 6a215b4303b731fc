import asyncio
from datetime import date

import pytest

from db.dialect import MYSQL, POSTGRES
from fakes import RecordingDatabase
from repositories.accommodation_repo import AccommodationRepository, like_pattern
from repositories.message_repo import MessageRepository
from repositories.review_repo import ReviewRepository
from repositories.traveler_repo import TravelerRepository
from repositories.user_repo import UserRepository

ACCOMMODATION_ROW = {
    "id": 1, "name": "Cozy Central Hostel", "description": None, "city": "Bangalore",
    "address": "MG Road", "latitude": None, "longitude": None, "price_per_night": 2500,
    "accommodation_type": "hostel", "amenities": '["WiFi"]', "photos": "[]",
    "contact_info": "{}", "is_active": 1, "created_at": None,
}


# ── Accommodations ────────────────────────────────────────

def test_search_on_postgres_numbers_binds_in_filter_order():
    db = RecordingDatabase(POSTGRES, results=[[ACCOMMODATION_ROW]])
    repo = AccommodationRepository(db)

    results = asyncio.run(repo.search(city="Bangalore", accommodation_type="hostel"))

    assert [a.name for a in results] == ["Cozy Central Hostel"]
    assert results[0].amenities == ["WiFi"]
    assert "(city ILIKE $1 OR name ILIKE $2) AND accommodation_type = $3" in db.last_sql
    assert "ORDER BY created_at DESC, id DESC LIMIT 50" in db.last_sql
    assert db.last_params == ["%Bangalore%", "%Bangalore%", "hostel"]


def test_search_on_mysql_keeps_positional_markers():
    db = RecordingDatabase(MYSQL)
    asyncio.run(AccommodationRepository(db).search(city="Pune"))

    assert "(city LIKE %s OR name LIKE %s)" in db.last_sql
    assert "accommodation_type" not in db.last_sql.split("WHERE")[1]
    assert db.last_params == ["%Pune%", "%Pune%"]


def test_search_without_filters_binds_nothing():
    db = RecordingDatabase(POSTGRES)
    asyncio.run(AccommodationRepository(db).search())
    assert "$" not in db.last_sql
    assert db.last_params == []
    assert "is_active = TRUE" in db.last_sql


def test_search_price_ordering_and_limit_cap():
    db = RecordingDatabase(MYSQL)
    asyncio.run(AccommodationRepository(db).search(sort="price", limit=500))
    assert "ORDER BY price_per_night ASC, id ASC LIMIT 50" in db.last_sql


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off") == "%50\\%\\_off%"


def test_get_by_id_missing_returns_none():
    db = RecordingDatabase(POSTGRES)
    assert asyncio.run(AccommodationRepository(db).get_by_id(5)) is None
    assert db.last_sql.endswith("WHERE id = $1 AND is_active = TRUE")
    assert db.last_params == [5]


# ── Travelers ─────────────────────────────────────────────

def test_travelers_date_filter_on_postgres():
    db = RecordingDatabase(POSTGRES)
    asyncio.run(TravelerRepository(db).list_for_accommodation(
        5, checkin=date(2025, 7, 1), checkout=date(2025, 7, 3)
    ))

    assert "tc.accommodation_id = $1" in db.last_sql
    assert "tc.travel_dates->>'checkin' <= $2" in db.last_sql
    assert "tc.travel_dates->>'checkout' >= $3" in db.last_sql
    assert db.last_sql.endswith("LIMIT 10")
    assert db.last_params == [5, "2025-07-03", "2025-07-01"]


def test_travelers_date_filter_on_mysql_keeps_json_path_literal():
    db = RecordingDatabase(MYSQL)
    asyncio.run(TravelerRepository(db).list_for_accommodation(
        5, checkin=date(2025, 7, 1), checkout=date(2025, 7, 3)
    ))
    assert "JSON_UNQUOTE(JSON_EXTRACT(tc.travel_dates, '$.checkin')) <= %s" in db.last_sql
    assert db.last_params == [5, "2025-07-03", "2025-07-01"]


def test_travelers_without_both_dates_skip_the_filter():
    db = RecordingDatabase(POSTGRES, results=[[{
        "id": 4, "user_id": 2, "accommodation_id": 5,
        "travel_dates": '{"checkin":"2025-07-01","checkout":"2025-07-05"}',
        "is_looking_for_company": True, "message": "hi", "created_at": None,
        "full_name": "Priya", "gender": "female", "age": 24, "interests": '["Hiking"]',
    }]])
    travelers = asyncio.run(TravelerRepository(db).list_for_accommodation(5, checkin=date(2025, 7, 1)))

    assert "travel_dates" not in db.last_sql.split("WHERE")[1]
    assert db.last_params == [5]
    assert travelers[0].checkout == date(2025, 7, 5)
    assert travelers[0].interests == ["Hiking"]


def test_traveler_create_stores_dates_as_json():
    db = RecordingDatabase(MYSQL)
    new_id = asyncio.run(TravelerRepository(db).create(
        1, 5, {"checkin": "2025-07-01", "checkout": "2025-07-03"}, message="hello"
    ))
    assert new_id == 1
    assert db.last_params == [1, 5, '{"checkin":"2025-07-01","checkout":"2025-07-03"}', "hello", True]


# ── Reviews ───────────────────────────────────────────────

@pytest.mark.parametrize("female_only", [True, False])
def test_review_listing_female_filter(female_only):
    db = RecordingDatabase(POSTGRES)
    asyncio.run(ReviewRepository(db).list_for_accommodation(3, female_only=female_only))

    assert ("r.is_female_review = TRUE" in db.last_sql) is female_only
    assert db.last_sql.endswith("ORDER BY r.created_at DESC, r.id DESC")
    assert db.last_params == [3]


def test_review_exists_for_binds_user_then_accommodation():
    db = RecordingDatabase(POSTGRES, results=[[{"id": 8}]])
    assert asyncio.run(ReviewRepository(db).exists_for(2, 3)) is True
    assert "user_id = $1 AND accommodation_id = $2" in db.last_sql
    assert db.last_params == [2, 3]


# ── Users ─────────────────────────────────────────────────

def test_profile_update_sets_only_given_fields():
    db = RecordingDatabase(POSTGRES)
    assert asyncio.run(UserRepository(db).update_profile(9, full_name="New Name")) is True
    assert db.last_sql == "UPDATE users SET full_name = $1, updated_at = CURRENT_TIMESTAMP WHERE id = $2"
    assert db.last_params == ["New Name", 9]


def test_profile_update_with_several_fields_keeps_bind_order():
    db = RecordingDatabase(MYSQL)
    asyncio.run(UserRepository(db).update_profile(
        9, interests=["Food"], profile_photo="https://img.example.com/a.png"
    ))
    assert db.last_sql == (
        "UPDATE users SET interests = %s, profile_photo = %s, updated_at = CURRENT_TIMESTAMP WHERE id = %s"
    )
    assert db.last_params == ['["Food"]', "https://img.example.com/a.png", 9]


def test_profile_update_with_nothing_runs_no_query():
    db = RecordingDatabase(MYSQL)
    assert asyncio.run(UserRepository(db).update_profile(9)) is False
    assert db.calls == []


def test_user_create_encodes_interests_and_rereads():
    row = {
        "id": 1, "email": "a@x.com", "password_hash": "h", "full_name": "A", "gender": "female",
        "age": 25, "profile_photo": None, "interests": '["Hiking"]', "is_verified": 0, "created_at": None,
    }
    db = RecordingDatabase(POSTGRES, results=[[row]])
    user = asyncio.run(UserRepository(db).create("a@x.com", "h", "A", 25, "female", ["Hiking"]))

    kind, sql, params = db.calls[0]
    assert kind == "insert"
    assert params[-1] == '["Hiking"]'
    assert user.interests == ["Hiking"]
    assert user.is_female


# ── Messages ──────────────────────────────────────────────

def test_mark_read_is_scoped_to_receiver():
    db = RecordingDatabase(POSTGRES)
    assert asyncio.run(MessageRepository(db).mark_read(4, 2)) is True
    assert "id = $1 AND receiver_id = $2" in db.last_sql
    assert db.last_params == [4, 2]
