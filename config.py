"""
Configuration settings for the cefr-quiz assessment service.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Database
    # ========================================
    database_url: str = Field(
        default="sqlite:///./cefr_quiz.db",
        description="SQLAlchemy connection string for the question bank",
    )

    # ========================================
    # Quiz Defaults
    # ========================================
    default_target_level: ProficiencyLevel = Field(
        default=ProficiencyLevel.B1,
        description="Level used when a quiz request names no target level",
    )
    default_question_type: QuestionType = Field(
        default=QuestionType.MULTIPLE_CHOICE,
        description="Question type used when a quiz request names none",
    )
    default_question_count: int = Field(
        default=10,
        ge=1,
        description="Questions per attempt when the request names no count",
    )
    max_question_count: int = Field(
        default=50,
        ge=1,
        description="Upper bound accepted for a requested question count",
    )
    sampling_seed: int | None = Field(
        default=None,
        description="Seed for the question bank's random generator (None = OS entropy)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # API Server
    # ========================================
    api_host: str = Field(
        default="127.0.0.1",
        description="API server host",
    )
    api_port: int = Field(
        default=8100,
        description="API server port",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
