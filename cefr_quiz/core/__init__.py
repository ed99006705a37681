"""
Core Module - Shared domain models and errors.

Components:
- levels: CEFR scale (ProficiencyLevel) and QuestionType
- models: Question, Answer and the attempt/assessment value types
- exceptions: NotFoundError, QuizValidationError, DataIntegrityError
"""

from cefr_quiz.core.exceptions import (
    DataIntegrityError,
    NotFoundError,
    QuizEngineError,
    QuizValidationError,
)
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import (
    AdaptiveAssessmentResult,
    Answer,
    AttemptAnswer,
    Question,
    QuestionEvaluation,
    QuizAttemptResult,
)

__all__ = [
    # Levels
    "ProficiencyLevel",
    "QuestionType",
    # Models
    "Question",
    "Answer",
    "AttemptAnswer",
    "QuestionEvaluation",
    "QuizAttemptResult",
    "AdaptiveAssessmentResult",
    # Errors
    "QuizEngineError",
    "NotFoundError",
    "QuizValidationError",
    "DataIntegrityError",
]
