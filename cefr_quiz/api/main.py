"""
FastAPI application for the cefr-quiz assessment service.

Provides REST API for:
- Sampling leveled quizzes from the question bank
- Scoring submitted answers
- Adaptive CEFR level recommendation
- Question bank maintenance
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from config import get_settings
from cefr_quiz import __version__
from cefr_quiz.core.exceptions import DataIntegrityError, NotFoundError, QuizValidationError
from cefr_quiz.logging_setup import configure_logging

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    from cefr_quiz.db.database import init_db

    configure_logging(settings.log_level, settings.log_file)
    logger.info("Starting cefr-quiz service...")
    init_db()
    logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

    yield

    logger.info("Shutting down cefr-quiz service...")


app = FastAPI(
    title="CEFR Quiz",
    description="""
    Adaptive quiz assessment for language learners.

    ## Flow

    ```
    POST /api/quiz/attempts/start   -> sampled questions
    POST /api/quiz/attempts/submit  -> scored attempt
    POST /api/quiz/assessment       -> baseline + recommended level
    ```
    """,
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========================================
# Error Mapping
# ========================================


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(QuizValidationError)
async def validation_handler(request: Request, exc: QuizValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(DataIntegrityError)
async def integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "cefr-quiz",
        "version": __version__,
        "status": "ok",
    }


@app.get("/health", tags=["Health"])
def health_check() -> dict[str, Any]:
    """Health check with an actual database connectivity test."""
    from cefr_quiz.db.database import check_database_health

    db_status, db_error = check_database_health()
    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "database": db_status,
        "database_error": db_error,
        "timestamp": datetime.now().isoformat(),
    }


# ========================================
# Import and mount routers
# ========================================

from cefr_quiz.api.routers import quiz_router

app.include_router(quiz_router.router, prefix="/api/quiz", tags=["Quiz"])
