"""
Driver-free test doubles.

RecordingDatabase runs the real Database pipeline (placeholder translation,
error mapping, scoped acquisition) and records the SQL that would reach the
driver. The in-memory repositories stand in for the SQL repositories in
end-to-end HTTP tests.
"""

import re
from datetime import datetime
from typing import Optional

from db.connection import Database
from db.dialect import MYSQL, DatabaseSettings, Dialect
from models.accommodation import Accommodation
from models.message import Message
from models.review import Review
from models.traveler import TravelerConnection
from models.user import User
from utils.errors import Conflict


class RecordingDatabase(Database):
    """Records (kind, sql, params) and replays scripted fetch results."""

    def __init__(self, dialect: Dialect = MYSQL, results: Optional[list] = None):
        super().__init__(DatabaseSettings(dialect=dialect, acquire_timeout=0.05), pool=None)
        self.calls: list[tuple[str, str, list]] = []
        self.results = list(results or [])
        self.next_id = 1
        self.released = 0

    async def _acquire(self, timeout):
        return object()

    async def _release(self, conn):
        self.released += 1

    async def _fetch(self, sql, params):
        self.calls.append(("fetch", sql, params))
        return self.results.pop(0) if self.results else []

    async def _execute(self, sql, params):
        self.calls.append(("execute", sql, params))
        return 1

    async def _insert(self, sql, params):
        self.calls.append(("insert", sql, params))
        new_id = self.next_id
        self.next_id += 1
        return new_id

    async def _close(self):
        pass

    @property
    def last_sql(self) -> str:
        return self.calls[-1][1]

    @property
    def last_params(self) -> list:
        return self.calls[-1][2]


class SchemaDatabase(RecordingDatabase):
    """
    Emulates just enough of a server for the migrator: tracks created
    tables and counts inserted accommodations.
    """

    def __init__(self, dialect: Dialect = MYSQL):
        super().__init__(dialect)
        self.tables: list[str] = []
        self.accommodation_rows = 0

    async def _execute(self, sql, params):
        await super()._execute(sql, params)
        match = re.search(r"CREATE TABLE (IF NOT EXISTS )?(\w+)", sql)
        if match:
            table = match.group(2)
            if table in self.tables:
                if not match.group(1):
                    raise RuntimeError(f"Table '{table}' already exists")
            else:
                self.tables.append(table)
        return 0

    async def _fetch(self, sql, params):
        self.calls.append(("fetch", sql, params))
        if "COUNT(*)" in sql and "accommodations" in sql:
            return [{"count": self.accommodation_rows}]
        return []

    async def _insert(self, sql, params):
        new_id = await super()._insert(sql, params)
        if "INSERT INTO accommodations" in sql:
            self.accommodation_rows += 1
        return new_id


# ── In-memory repositories ────────────────────────────────

class InMemoryStore:
    def __init__(self):
        self.users: dict[int, User] = {}
        self.accommodations: dict[int, Accommodation] = {}
        self.reviews: dict[int, Review] = {}
        self.connections: dict[int, TravelerConnection] = {}
        self.messages: dict[int, Message] = {}
        self._ids = 0

    def next_id(self) -> int:
        self._ids += 1
        return self._ids

    def add_accommodation(self, **fields) -> Accommodation:
        acc = Accommodation(id=self.next_id(), created_at=datetime.now(), **fields)
        self.accommodations[acc.id] = acc
        return acc


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, email, password_hash, full_name, age, gender, interests=None):
        if any(u.email == email for u in self.store.users.values()):
            raise Conflict("Resource already exists")
        user = User(
            id=self.store.next_id(), email=email, password_hash=password_hash,
            full_name=full_name, age=age, gender=gender, interests=list(interests or []),
            created_at=datetime.now(),
        )
        self.store.users[user.id] = user
        return user

    async def get_by_id(self, user_id):
        return self.store.users.get(user_id)

    async def get_by_email(self, email):
        return next((u for u in self.store.users.values() if u.email == email), None)

    async def email_exists(self, email):
        return await self.get_by_email(email) is not None

    async def update_profile(self, user_id, full_name=None, interests=None, profile_photo=None):
        user = self.store.users.get(user_id)
        if not user:
            return False
        if full_name is not None:
            user.full_name = full_name
        if interests is not None:
            user.interests = list(interests)
        if profile_photo is not None:
            user.profile_photo = profile_photo
        return True


class InMemoryAccommodationRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def search(self, city=None, accommodation_type=None, sort="recent", limit=50):
        rows = [a for a in self.store.accommodations.values() if a.is_active]
        if city:
            needle = city.lower()
            rows = [a for a in rows if needle in a.city.lower() or needle in a.name.lower()]
        if accommodation_type:
            rows = [a for a in rows if a.accommodation_type == accommodation_type]
        if sort == "price":
            rows.sort(key=lambda a: (a.price_per_night, a.id))
        else:
            rows.sort(key=lambda a: a.id, reverse=True)
        return rows[:min(limit, 50)]

    async def get_by_id(self, accommodation_id):
        acc = self.store.accommodations.get(accommodation_id)
        return acc if acc and acc.is_active else None

    async def exists(self, accommodation_id):
        return await self.get_by_id(accommodation_id) is not None


class InMemoryReviewRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def exists_for(self, user_id, accommodation_id):
        return any(
            r.user_id == user_id and r.accommodation_id == accommodation_id
            for r in self.store.reviews.values()
        )

    async def create(self, user_id, accommodation_id, rating, safety_rating, review_text, is_female_review):
        review = Review(
            id=self.store.next_id(), user_id=user_id, accommodation_id=accommodation_id,
            rating=rating, safety_rating=safety_rating, review_text=review_text,
            is_female_review=is_female_review, created_at=datetime.now(),
        )
        self.store.reviews[review.id] = review
        return review.id

    async def list_for_accommodation(self, accommodation_id, female_only=False):
        rows = []
        for r in sorted(self.store.reviews.values(), key=lambda r: r.id, reverse=True):
            if r.accommodation_id != accommodation_id or (female_only and not r.is_female_review):
                continue
            author = self.store.users[r.user_id]
            rows.append(Review(**{**r.__dict__, "full_name": author.full_name, "gender": author.gender}))
        return rows

    async def list_for_user(self, user_id):
        rows = []
        for r in sorted(self.store.reviews.values(), key=lambda r: r.id, reverse=True):
            if r.user_id != user_id:
                continue
            acc = self.store.accommodations[r.accommodation_id]
            rows.append(Review(**{**r.__dict__, "accommodation_name": acc.name, "city": acc.city}))
        return rows


class InMemoryTravelerRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, user_id, accommodation_id, travel_dates, message=None, is_looking_for_company=True):
        conn = TravelerConnection(
            id=self.store.next_id(), user_id=user_id, accommodation_id=accommodation_id,
            travel_dates=dict(travel_dates), message=message,
            is_looking_for_company=is_looking_for_company, created_at=datetime.now(),
        )
        self.store.connections[conn.id] = conn
        return conn.id

    async def list_for_accommodation(self, accommodation_id, checkin=None, checkout=None):
        rows = []
        for c in sorted(self.store.connections.values(), key=lambda c: c.id, reverse=True):
            if c.accommodation_id != accommodation_id or not c.is_looking_for_company:
                continue
            if checkin and checkout and not (c.checkin <= checkout and c.checkout >= checkin):
                continue
            user = self.store.users[c.user_id]
            rows.append(TravelerConnection(**{
                **c.__dict__, "full_name": user.full_name, "gender": user.gender,
                "age": user.age, "interests": user.interests,
            }))
        return rows[:10]

    async def list_for_user(self, user_id):
        rows = []
        for c in sorted(self.store.connections.values(), key=lambda c: c.id, reverse=True):
            if c.user_id != user_id:
                continue
            acc = self.store.accommodations[c.accommodation_id]
            rows.append(TravelerConnection(**{**c.__dict__, "accommodation_name": acc.name, "city": acc.city}))
        return rows


class InMemoryMessageRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, sender_id, receiver_id, body):
        msg = Message(
            id=self.store.next_id(), sender_id=sender_id, receiver_id=receiver_id,
            message=body, created_at=datetime.now(),
        )
        self.store.messages[msg.id] = msg
        return msg.id

    async def list_received(self, user_id):
        return [
            Message(**{**m.__dict__, "sender_name": self.store.users[m.sender_id].full_name})
            for m in sorted(self.store.messages.values(), key=lambda m: m.id, reverse=True)
            if m.receiver_id == user_id
        ]

    async def mark_read(self, message_id, receiver_id):
        msg = self.store.messages.get(message_id)
        if not msg or msg.receiver_id != receiver_id:
            return False
        msg.is_read = True
        return True
