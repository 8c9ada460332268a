"""
Health check endpoints.

Provides basic health and status information about the server.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone

from app.database import get_engine
from app.config import get_settings

router = APIRouter()
settings = get_settings()


def check_database(engine: Engine) -> str:
    """Run a trivial query and describe the outcome."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "connected"
    except SQLAlchemyError as e:
        return f"error: {str(e)}"


@router.get("/health")
async def health_check(engine: Engine = Depends(get_engine)) -> dict:
    """
    Basic health check endpoint.

    Returns:
        dict: Server status information including version.

    Example response:
        {
            "status": "healthy",
            "app_name": "CodeBattle",
            "version": "0.1.0",
            "timestamp": "2024-12-11T23:00:00Z",
            "database": "connected"
        }
    """
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
        "database": check_database(engine),
    }


@router.get("/health/ready")
async def readiness_check(engine: Engine = Depends(get_engine)) -> dict:
    """
    Readiness check for the service.

    Verifies that the database is reachable before accepting requests.

    Returns:
        dict: Readiness status.
    """
    db_status = check_database(engine)
    if db_status == "connected":
        return {
            "ready": True,
            "checks": {
                "database": "ok"
            }
        }

    return {
        "ready": False,
        "checks": {
            "database": f"failed: {db_status}"
        }
    }
