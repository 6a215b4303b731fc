"""HTTP flows through the SQL repositories, backed by a recording database."""

import pytest
from fastapi.testclient import TestClient

from conftest import bearer
from db.dialect import POSTGRES, DatabaseSettings
from fakes import RecordingDatabase
from handlers.dependencies import get_db
from main import create_app
from models.user import User
from services.auth_service import issue_token

PUNE_HOSTEL = {
    "id": 2, "name": "Backpacker's Paradise", "description": "Budget-friendly hostel", "city": "Pune",
    "address": "Koregaon Park", "latitude": "18.53620000", "longitude": "73.89400000",
    "price_per_night": 1800, "accommodation_type": "hostel", "amenities": '["WiFi","Lockers"]',
    "photos": "[]", "contact_info": '{"phone":"+91-20-12345678"}', "is_active": True, "created_at": None,
}

REVIEWER = {
    "id": 7, "email": "f@x.com", "password_hash": "x", "full_name": "Fatima", "gender": "female",
    "age": 29, "profile_photo": None, "interests": "[]", "is_verified": False, "created_at": None,
}


@pytest.fixture
def sql_client():
    db = RecordingDatabase(POSTGRES)
    app = create_app(settings=DatabaseSettings(dialect=POSTGRES), rate_limit=False)
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app), db
    app.dependency_overrides.clear()


def test_search_runs_translated_sql_and_shapes_rows(sql_client):
    client, db = sql_client
    db.results = [[PUNE_HOSTEL]]

    response = client.get("/api/accommodations/search", params={"city": "pune", "type": "hostel"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    listing = body["accommodations"][0]
    assert listing["amenities"] == ["WiFi", "Lockers"]
    assert listing["contact_info"] == {"phone": "+91-20-12345678"}
    assert listing["latitude"] == pytest.approx(18.5362)
    assert listing["average_rating"] == 4.2
    assert "(city ILIKE $1 OR name ILIKE $2) AND accommodation_type = $3" in db.last_sql
    assert db.last_params == ["%pune%", "%pune%", "hostel"]


def test_missing_accommodation_is_404(sql_client):
    client, db = sql_client
    response = client.get("/api/accommodations/99")
    assert response.status_code == 404
    assert db.last_params == [99]


def test_review_is_stored_with_reviewer_gender(sql_client):
    client, db = sql_client
    token = issue_token(User(id=7, email="f@x.com", full_name="Fatima", gender="female", age=29))
    # token lookup, accommodation exists, no earlier review
    db.results = [[REVIEWER], [{"id": 2}], []]

    response = client.post(
        "/api/reviews",
        json={"accommodation_id": 2, "rating": 5, "safety_rating": 4, "review_text": "Felt safe"},
        headers=bearer(token),
    )

    assert response.status_code == 201
    assert response.json()["review_id"] == 1
    kind, sql, params = db.calls[-1]
    assert kind == "insert"
    assert sql.startswith("INSERT INTO reviews")
    assert params == [7, 2, 5, 4, "Felt safe", True]


def test_duplicate_review_never_reaches_insert(sql_client):
    client, db = sql_client
    token = issue_token(User(id=7, email="f@x.com", full_name="Fatima", gender="female", age=29))
    db.results = [[REVIEWER], [{"id": 2}], [{"id": 11}]]

    response = client.post(
        "/api/reviews", json={"accommodation_id": 2, "rating": 3, "safety_rating": 3}, headers=bearer(token)
    )

    assert response.status_code == 400
    assert "already reviewed" in response.json()["message"]
    assert [kind for kind, _, _ in db.calls] == ["fetch", "fetch", "fetch"]
