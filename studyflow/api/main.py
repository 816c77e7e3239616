"""
FastAPI application for the StudyFlow quiz service.

Provides REST API for:
- Quiz generation mixing new and review material
- Self-assessed result submission
- Quiz history
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from studyflow import __version__
from studyflow.config import get_settings
from studyflow.db.database import get_engine, init_db
from studyflow.logging_config import configure_logging

settings = get_settings()


def _check_database_health() -> tuple[str, str | None]:
    """
    Check database connectivity.

    Returns:
        Tuple of (status, error_message). Status is "ok" or "error".
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return "ok", None
    except SQLAlchemyError as e:
        return "error", str(e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging(settings)
    logger.info("Starting StudyFlow quiz service...")
    init_db()
    logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

    yield

    logger.info("Shutting down StudyFlow quiz service...")


app = FastAPI(
    title="StudyFlow Quiz Engine",
    description="""
    Quiz generation and spaced-repetition review for uploaded courses.

    ## Flow

    ```
    POST /api/quiz/generate   -> new + review questions, study session recorded
        ↓ learner answers and self-assesses
    POST /api/quiz/submit     -> score, quiz result recorded
        ↓ chapters answered in the last results
    next generate resurfaces them as review material
    ```
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", settings.user_id_header],
)


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "studyflow",
        "version": __version__,
        "status": "ok",
    }


@app.get("/health", tags=["Health"])
def health_check() -> dict[str, Any]:
    """Health check with an actual database round-trip."""
    db_status, db_error = _check_database_health()

    result: dict[str, Any] = {
        "status": "healthy" if db_status == "ok" else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {"database": db_status},
    }
    if db_error:
        result["errors"] = {"database": db_error}

    return result


@app.get("/config", tags=["Health"])
def get_config() -> dict[str, Any]:
    """Get current configuration (non-sensitive)."""
    return {
        "database_url": settings.database_url.split("@")[-1]
        if "@" in settings.database_url
        else "configured",
        "user_id_header": settings.user_id_header,
        "quiz": settings.get_quiz_config(),
    }


# ========================================
# Import and mount routers
# ========================================

from studyflow.api.routers import quiz_router  # noqa: E402

app.include_router(quiz_router.router, prefix="/api/quiz", tags=["Quiz"])
