"""Question bank persistence: the store port and its implementations."""

from cefr_quiz.db.store import InMemoryQuestionStore, IQuestionStore

__all__ = [
    "IQuestionStore",
    "InMemoryQuestionStore",
]
