import pytest
from fastapi.testclient import TestClient

from db.dialect import MYSQL, DatabaseSettings
from fakes import (
    InMemoryAccommodationRepository,
    InMemoryMessageRepository,
    InMemoryReviewRepository,
    InMemoryStore,
    InMemoryTravelerRepository,
    InMemoryUserRepository,
)
from handlers.dependencies import (
    get_accommodation_repo,
    get_message_repo,
    get_review_repo,
    get_traveler_repo,
    get_user_repo,
)
from main import create_app


@pytest.fixture
def store():
    store = InMemoryStore()
    store.add_accommodation(
        name="Cozy Central Hostel", city="Bangalore", address="MG Road",
        price_per_night=2500, accommodation_type="hostel", amenities=["WiFi"],
    )
    store.add_accommodation(
        name="Backpacker's Paradise", city="Pune", address="Koregaon Park",
        price_per_night=1800, accommodation_type="hostel",
    )
    store.add_accommodation(
        name="Urban Nomad Hub", city="Mumbai", address="Bandra West",
        price_per_night=3200, accommodation_type="hotel",
    )
    return store


@pytest.fixture
def app(store):
    """App wired to in-memory repositories; the lifespan (pool, migrations) is not run."""
    app = create_app(settings=DatabaseSettings(dialect=MYSQL), rate_limit=False)
    app.dependency_overrides[get_user_repo] = lambda: InMemoryUserRepository(store)
    app.dependency_overrides[get_accommodation_repo] = lambda: InMemoryAccommodationRepository(store)
    app.dependency_overrides[get_review_repo] = lambda: InMemoryReviewRepository(store)
    app.dependency_overrides[get_traveler_repo] = lambda: InMemoryTravelerRepository(store)
    app.dependency_overrides[get_message_repo] = lambda: InMemoryMessageRepository(store)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Create a user through the API and return (token, user json)."""

    def _signup(email="a@x.com", password="secret1", full_name="A", age=25, gender="female", **extra):
        response = client.post("/api/auth/signup", json={
            "email": email, "password": password, "full_name": full_name,
            "age": age, "gender": gender, **extra,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]

    return _signup


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
