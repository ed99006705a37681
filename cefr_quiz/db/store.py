"""
Question store port and in-memory implementation.

The quiz components only talk to the question pool through IQuestionStore,
so they run unchanged against the SQL store in production and the
in-memory store in tests or offline tooling.
"""

from __future__ import annotations

import itertools
import threading
from typing import Protocol

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import Answer, Question


class IQuestionStore(Protocol):
    """Read/write access to the question and answer pool."""

    def find_by_id(self, question_id: int) -> Question | None:
        ...

    def find_by_level(self, level: ProficiencyLevel) -> list[Question]:
        ...

    def find_by_level_and_type(
        self, level: ProficiencyLevel, question_type: QuestionType
    ) -> list[Question]:
        ...

    def find_answer(self, answer_id: int, question_id: int) -> Answer | None:
        """Answer ``answer_id`` only if it belongs to ``question_id``."""
        ...

    def find_answers(self, question_id: int) -> list[Answer]:
        ...

    def count_by_level(self, level: ProficiencyLevel) -> int:
        ...

    def save(self, question: Question) -> Question:
        ...

    def delete(self, question_id: int) -> None:
        ...

    def exists(self, question_id: int) -> bool:
        ...


class InMemoryQuestionStore:
    """Dict-backed IQuestionStore. Assigns integer ids on save."""

    def __init__(self, questions: list[Question] | None = None):
        self._questions: dict[int, Question] = {}
        self._question_ids = itertools.count(1)
        self._answer_ids = itertools.count(1)
        self._lock = threading.RLock()
        for question in questions or []:
            self.save(question)

    def find_by_id(self, question_id: int) -> Question | None:
        with self._lock:
            return self._questions.get(question_id)

    def find_by_level(self, level: ProficiencyLevel) -> list[Question]:
        with self._lock:
            return [q for q in self._questions.values() if q.level == level]

    def find_by_level_and_type(
        self, level: ProficiencyLevel, question_type: QuestionType
    ) -> list[Question]:
        with self._lock:
            return [
                q
                for q in self._questions.values()
                if q.level == level and q.question_type == question_type
            ]

    def find_answer(self, answer_id: int, question_id: int) -> Answer | None:
        with self._lock:
            question = self._questions.get(question_id)
            if question is None:
                return None
            return next((a for a in question.answers if a.id == answer_id), None)

    def find_answers(self, question_id: int) -> list[Answer]:
        with self._lock:
            question = self._questions.get(question_id)
            return list(question.answers) if question else []

    def count_by_level(self, level: ProficiencyLevel) -> int:
        return len(self.find_by_level(level))

    def save(self, question: Question) -> Question:
        with self._lock:
            if question.id is None:
                question.id = self._next_free(self._question_ids, self._questions)
            used_answer_ids = {
                a.id for q in self._questions.values() if q.id != question.id for a in q.answers
            }
            for answer in question.answers:
                if answer.id is None:
                    answer.id = self._next_free(self._answer_ids, used_answer_ids)
                used_answer_ids.add(answer.id)
                answer.question_id = question.id
            self._questions[question.id] = question
            return question

    def delete(self, question_id: int) -> None:
        with self._lock:
            self._questions.pop(question_id, None)

    def exists(self, question_id: int) -> bool:
        with self._lock:
            return question_id in self._questions

    @staticmethod
    def _next_free(counter: itertools.count, taken) -> int:
        while True:
            candidate = next(counter)
            if candidate not in taken:
                return candidate
