"""
main.py
-------
Entry point for the TravelEase API.

Responsibilities:
    - Resolve the database engine once and open the connection pool.
    - Create/verify the schema on boot (fatal on failure) and seed sample data.
    - Build the FastAPI application with all routers and error handlers.

Usage:
    python main.py              → serve the API
    python main.py migrate      → create tables + sample data, then exit
    python main.py seed-demo    → insert demo users, reviews and connections
"""

import argparse
import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import APP_ENV, APP_NAME, CORS_ORIGINS, PORT, is_development
from db.connection import close_pool, init_pool
from db.dialect import DatabaseSettings, resolve_database_settings
from db.init_db import run_migrations
from handlers import accommodation_handler, auth_handler, health_handler, review_handler, traveler_handler, user_handler
from security.headers import SecurityHeadersMiddleware
from security.rate_limiter import RateLimitMiddleware
from services.seed_service import seed_demo_data
from utils.errors import AppError, StorageError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool and migrate before serving; close the pool on shutdown."""
    settings: DatabaseSettings = app.state.db_settings
    db = await init_pool(settings)
    try:
        await run_migrations(db)
    except AppError:
        await close_pool()
        raise
    logger.info(f"🚀 {APP_NAME} ready ({APP_ENV}, {settings.dialect})")
    yield
    await close_pool()
    logger.info(f"{APP_NAME} stopped.")


# ── Error handlers ────────────────────────────────────────

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "message": "Something went wrong!",
                "error": exc.message if is_development() else "Internal server error",
            },
        )
    content = {"success": False, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or "body",
            "msg": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Server error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Something went wrong!",
            "error": str(exc) if is_development() else "Internal server error",
        },
    )


# ── Application factory ───────────────────────────────────

def create_app(settings: Optional[DatabaseSettings] = None, rate_limit: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Database settings; resolved from the environment when omitted.
        rate_limit: Install the per-client rate limiter.
    """
    app = FastAPI(title=APP_NAME, version="1.0.0", lifespan=lifespan)
    app.state.db_settings = settings or resolve_database_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    if rate_limit:
        app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    for module in (health_handler, auth_handler, accommodation_handler, user_handler, review_handler, traveler_handler):
        app.include_router(module.router)
    return app


# ── Command line ──────────────────────────────────────────

async def _with_database(task) -> None:
    db = await init_pool(resolve_database_settings())
    try:
        await task(db)
    finally:
        await close_pool()


async def _migrate_and_seed_demo(db) -> None:
    await run_migrations(db)
    await seed_demo_data(db)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=f"{APP_NAME} server")
    parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=("serve", "migrate", "seed-demo"),
    )
    args = parser.parse_args(argv)

    if args.command == "serve":
        logger.info(f"🌐 Starting {APP_NAME} on port {PORT}")
        uvicorn.run(create_app(), host="0.0.0.0", port=PORT, log_config=None)
        return 0

    task = run_migrations if args.command == "migrate" else _migrate_and_seed_demo
    try:
        asyncio.run(_with_database(task))
    except AppError as e:
        logger.error(f"❌ {args.command} failed: {e.message}")
        return 1
    logger.info(f"✅ {args.command} completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
