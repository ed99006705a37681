"""API routers for cefr-quiz."""

from cefr_quiz.api.routers import quiz_router

__all__ = [
    "quiz_router",
]
