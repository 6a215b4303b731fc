"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Application ───────────────────────────────────────────
APP_NAME: str = "TravelEase API"
APP_ENV: str = os.getenv("APP_ENV", "development")
PORT: int = int(os.getenv("PORT", "3000"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Database ──────────────────────────────────────────────
# When DATABASE_URL is set the service talks to PostgreSQL,
# otherwise it falls back to the local MySQL settings below.
DATABASE_URL: str = os.getenv("DATABASE_URL", "")

DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "3306"))
DB_USER: str = os.getenv("DB_USER", "travelease_user")
DB_PASSWORD: str = os.getenv("DB_PASSWORD", "travelease123")
DB_NAME: str = os.getenv("DB_NAME", "travelease")

# ── Connection pool ───────────────────────────────────────
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
DB_IDLE_TIMEOUT_SECONDS: float = float(os.getenv("DB_IDLE_TIMEOUT_SECONDS", "30"))
DB_CONNECT_TIMEOUT_SECONDS: float = float(os.getenv("DB_CONNECT_TIMEOUT_SECONDS", "2"))
DB_ACQUIRE_TIMEOUT_SECONDS: float = float(os.getenv("DB_ACQUIRE_TIMEOUT_SECONDS", "10"))

# ── Security ──────────────────────────────────────────────
JWT_SECRET: str = os.getenv("JWT_SECRET", "travelease-dev-secret-change-me")
JWT_ALGORITHM: str = "HS256"
JWT_EXPIRES_DAYS: int = int(os.getenv("JWT_EXPIRES_DAYS", "7"))

FRONTEND_URL: str = os.getenv("FRONTEND_URL", "")
CORS_ORIGINS: list[str] = [
    origin
    for origin in ("http://localhost:8080", "http://127.0.0.1:8080", FRONTEND_URL)
    if origin
]

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))


def is_development() -> bool:
    """True when error details may be exposed in API responses."""
    return APP_ENV == "development"
