"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist,
and inserts the sample accommodations into an empty database.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import asyncio
from decimal import Decimal

from db import json_codec
from db.connection import Database
from db.dialect import Dialect
from db.seed_data import SAMPLE_ACCOMMODATIONS
from utils.errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)

# Tables in dependency order: parents before the tables referencing them.
MYSQL_SCHEMA: list[tuple[str, str]] = [
    ("users", """
        CREATE TABLE IF NOT EXISTS users (
            id              INT AUTO_INCREMENT PRIMARY KEY,
            email           VARCHAR(255) UNIQUE NOT NULL,
            password_hash   VARCHAR(255),
            full_name       VARCHAR(255) NOT NULL,
            gender          ENUM('male', 'female', 'other') NOT NULL,
            age             INT NOT NULL CHECK (age >= 18 AND age <= 100),
            profile_photo   VARCHAR(500),
            interests       JSON,
            google_id       VARCHAR(255) UNIQUE,
            is_verified     BOOLEAN DEFAULT FALSE,
            created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """),
    ("accommodations", """
        CREATE TABLE IF NOT EXISTS accommodations (
            id                  INT AUTO_INCREMENT PRIMARY KEY,
            name                VARCHAR(255) NOT NULL,
            description         TEXT,
            city                VARCHAR(100) NOT NULL,
            address             TEXT NOT NULL,
            latitude            DECIMAL(10, 8),
            longitude           DECIMAL(11, 8),
            price_per_night     INT NOT NULL,
            accommodation_type  ENUM('hostel', 'hotel', 'guesthouse', 'homestay') NOT NULL,
            amenities           JSON,
            photos              JSON,
            contact_info        JSON,
            is_active           BOOLEAN DEFAULT TRUE,
            created_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
            INDEX idx_accommodations_city (city)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """),
    ("reviews", """
        CREATE TABLE IF NOT EXISTS reviews (
            id                  INT AUTO_INCREMENT PRIMARY KEY,
            user_id             INT NOT NULL,
            accommodation_id    INT NOT NULL,
            rating              INT NOT NULL CHECK (rating >= 1 AND rating <= 5),
            safety_rating       INT NOT NULL CHECK (safety_rating >= 1 AND safety_rating <= 5),
            review_text         TEXT,
            is_female_review    BOOLEAN DEFAULT FALSE,
            created_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY (accommodation_id) REFERENCES accommodations(id) ON DELETE CASCADE
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """),
    ("traveler_connections", """
        CREATE TABLE IF NOT EXISTS traveler_connections (
            id                      INT AUTO_INCREMENT PRIMARY KEY,
            user_id                 INT NOT NULL,
            accommodation_id        INT NOT NULL,
            travel_dates            JSON NOT NULL,
            is_looking_for_company  BOOLEAN DEFAULT TRUE,
            message                 TEXT,
            created_at              TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY (accommodation_id) REFERENCES accommodations(id) ON DELETE CASCADE
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """),
    ("messages", """
        CREATE TABLE IF NOT EXISTS messages (
            id              INT AUTO_INCREMENT PRIMARY KEY,
            sender_id       INT NOT NULL,
            receiver_id     INT NOT NULL,
            message         TEXT NOT NULL,
            is_read         BOOLEAN DEFAULT FALSE,
            created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (sender_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY (receiver_id) REFERENCES users(id) ON DELETE CASCADE
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """),
]

POSTGRES_SCHEMA: list[tuple[str, str]] = [
    ("users", """
        CREATE TABLE IF NOT EXISTS users (
            id              SERIAL PRIMARY KEY,
            email           VARCHAR(255) UNIQUE NOT NULL,
            password_hash   VARCHAR(255),
            full_name       VARCHAR(255) NOT NULL,
            gender          VARCHAR(20) NOT NULL CHECK (gender IN ('male', 'female', 'other')),
            age             INTEGER NOT NULL CHECK (age >= 18 AND age <= 100),
            profile_photo   VARCHAR(500),
            interests       JSONB,
            google_id       VARCHAR(255) UNIQUE,
            is_verified     BOOLEAN DEFAULT FALSE,
            created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    ("accommodations", """
        CREATE TABLE IF NOT EXISTS accommodations (
            id                  SERIAL PRIMARY KEY,
            name                VARCHAR(255) NOT NULL,
            description         TEXT,
            city                VARCHAR(100) NOT NULL,
            address             TEXT NOT NULL,
            latitude            DECIMAL(10, 8),
            longitude           DECIMAL(11, 8),
            price_per_night     INTEGER NOT NULL,
            accommodation_type  VARCHAR(50) NOT NULL
                CHECK (accommodation_type IN ('hostel', 'hotel', 'guesthouse', 'homestay')),
            amenities           JSONB,
            photos              JSONB,
            contact_info        JSONB,
            is_active           BOOLEAN DEFAULT TRUE,
            created_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    ("reviews", """
        CREATE TABLE IF NOT EXISTS reviews (
            id                  SERIAL PRIMARY KEY,
            user_id             INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            accommodation_id    INTEGER NOT NULL REFERENCES accommodations(id) ON DELETE CASCADE,
            rating              INTEGER NOT NULL CHECK (rating >= 1 AND rating <= 5),
            safety_rating       INTEGER NOT NULL CHECK (safety_rating >= 1 AND safety_rating <= 5),
            review_text         TEXT,
            is_female_review    BOOLEAN DEFAULT FALSE,
            created_at          TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    ("traveler_connections", """
        CREATE TABLE IF NOT EXISTS traveler_connections (
            id                      SERIAL PRIMARY KEY,
            user_id                 INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            accommodation_id        INTEGER NOT NULL REFERENCES accommodations(id) ON DELETE CASCADE,
            travel_dates            JSONB NOT NULL,
            is_looking_for_company  BOOLEAN DEFAULT TRUE,
            message                 TEXT,
            created_at              TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    ("messages", """
        CREATE TABLE IF NOT EXISTS messages (
            id              SERIAL PRIMARY KEY,
            sender_id       INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            receiver_id     INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            message         TEXT NOT NULL,
            is_read         BOOLEAN DEFAULT FALSE,
            created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
]

# MySQL declares its indexes inline and indexes foreign keys on its own.
POSTGRES_INDEXES: list[str] = [
    "CREATE INDEX IF NOT EXISTS idx_accommodations_city ON accommodations(city)",
    "CREATE INDEX IF NOT EXISTS idx_reviews_accommodation ON reviews(accommodation_id)",
    "CREATE INDEX IF NOT EXISTS idx_connections_accommodation ON traveler_connections(accommodation_id)",
    "CREATE INDEX IF NOT EXISTS idx_messages_receiver ON messages(receiver_id)",
]

_INSERT_ACCOMMODATION = """
    INSERT INTO accommodations
        (name, description, city, address, latitude, longitude, price_per_night,
         accommodation_type, amenities, photos, contact_info, is_active)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
"""


def schema_for(dialect: Dialect) -> tuple[list[tuple[str, str]], list[str]]:
    """Return ``(tables, indexes)`` DDL for the dialect."""
    if dialect.is_postgres:
        return POSTGRES_SCHEMA, POSTGRES_INDEXES
    return MYSQL_SCHEMA, []


async def ensure_schema(db: Database) -> None:
    """
    Create every table (and index) that does not exist yet.
    Safe to call multiple times (uses IF NOT EXISTS).

    Raises:
        StorageError: On any DDL failure; startup should abort.
    """
    tables, indexes = schema_for(db.dialect)
    try:
        for table, ddl in tables:
            await db.execute(ddl)
            logger.info(f"✅ {table} table ready")
        for ddl in indexes:
            await db.execute(ddl)
    except AppError as e:
        logger.error(f"❌ Failed to initialize schema: {e}")
        raise
    logger.info(f"Database schema initialized successfully ({db.dialect}).")


async def ensure_seed_data(db: Database) -> int:
    """
    Insert the sample accommodations when the table is empty.

    Failures are logged and swallowed: the service stays usable against
    whatever data already exists.

    Returns:
        Number of rows inserted (0 when skipped or failed).
    """
    try:
        existing = await db.fetch_value("SELECT COUNT(*) AS count FROM accommodations")
        if int(existing or 0) > 0:
            logger.info("ℹ️ Accommodations already exist, skipping sample data")
            return 0

        for acc in SAMPLE_ACCOMMODATIONS:
            await db.insert(_INSERT_ACCOMMODATION, (
                acc["name"], acc["description"], acc["city"], acc["address"],
                Decimal(str(acc["latitude"])), Decimal(str(acc["longitude"])), acc["price_per_night"],
                acc["accommodation_type"],
                json_codec.encode(acc["amenities"]),
                json_codec.encode(acc["photos"]),
                json_codec.encode(acc["contact_info"]),
                True,
            ))
    except AppError as e:
        logger.error(f"⚠️ Sample data insert failed, continuing without it: {e}")
        return 0

    logger.info(f"📦 Inserted {len(SAMPLE_ACCOMMODATIONS)} sample accommodations")
    return len(SAMPLE_ACCOMMODATIONS)


async def run_migrations(db: Database) -> None:
    """Schema first (fatal on failure), then sample data (best effort)."""
    logger.info(f"🚀 Running {db.dialect} auto-migration...")
    await ensure_schema(db)
    await ensure_seed_data(db)
    logger.info("🎉 Auto-migration completed")


async def _main() -> None:
    from db.connection import close_pool, init_pool
    from db.dialect import resolve_database_settings

    db = await init_pool(resolve_database_settings())
    try:
        await run_migrations(db)
    finally:
        await close_pool()


if __name__ == "__main__":
    asyncio.run(_main())
    print("✅ Database schema created successfully.")
