"""
handlers/health_handler.py
--------------------------
Liveness endpoint reporting the active database engine.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from config import APP_ENV, APP_NAME

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    return {
        "status": "OK",
        "message": f"{APP_NAME} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": request.app.state.db_settings.dialect.label,
        "environment": APP_ENV,
    }
