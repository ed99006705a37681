"""
Attempt Evaluator - scores a learner's submitted answers.

Every (question, answer) pair is checked against the bank with a lookup
scoped to the question, so an answer id taken from another question is
reported as a data-integrity failure instead of being scored.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from loguru import logger

from cefr_quiz.core.exceptions import DataIntegrityError, NotFoundError, QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import (
    Answer,
    AttemptAnswer,
    Question,
    QuestionEvaluation,
    QuizAttemptResult,
)
from cefr_quiz.db.store import IQuestionStore
from cefr_quiz.quiz.question_bank import QuestionBank


class AttemptEvaluator:
    """Turns raw submissions into verified per-question outcomes and totals."""

    def __init__(self, bank: QuestionBank, store: IQuestionStore | None = None):
        self.bank = bank
        self.store = store or bank.store

    def evaluate(self, submitted_answers: Sequence[AttemptAnswer]) -> QuizAttemptResult:
        """
        Score a batch of answers.

        Args:
            submitted_answers: Non-empty, in submission order

        Returns:
            QuizAttemptResult with one evaluation per submitted answer

        Raises:
            QuizValidationError: Empty submission
            NotFoundError: Unknown question id
            DataIntegrityError: Answer does not belong to its question
        """
        if not submitted_answers:
            raise QuizValidationError("Submitted answers must not be empty")

        evaluations: List[QuestionEvaluation] = []
        correct_count = 0

        for attempt in submitted_answers:
            question = self._resolve_question(attempt.question_id)
            answer = self._resolve_answer(attempt.answer_id, question.id)

            if answer.is_correct:
                correct_count += 1
            evaluations.append(
                QuestionEvaluation(
                    question_id=question.id,
                    level=question.level,
                    correct=answer.is_correct,
                )
            )

        total = len(submitted_answers)
        accuracy = correct_count / total

        logger.debug(f"Evaluated attempt: {correct_count}/{total} correct")
        return QuizAttemptResult(
            evaluations=tuple(evaluations),
            correct_answers=correct_count,
            total_questions=total,
            accuracy=accuracy,
        )

    def is_answer_correct(self, question_id: int, answer_id: int) -> bool:
        if question_id is None or answer_id is None:
            raise QuizValidationError("Question id and answer id must not be None")
        return self._resolve_answer(answer_id, question_id).is_correct

    def pick_next_question(
        self,
        target_level: ProficiencyLevel,
        question_type: QuestionType | None = None,
        asked_question_ids: Iterable[int] | None = None,
    ) -> Question:
        """Next unseen question at ``target_level``."""
        return self.bank.sample(
            target_level, question_type, count=1, excluded_ids=asked_question_ids
        )[0]

    def _resolve_question(self, question_id: int) -> Question:
        question = self.store.find_by_id(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found")
        return question

    def _resolve_answer(self, answer_id: int, question_id: int) -> Answer:
        answer = self.store.find_answer(answer_id, question_id)
        if answer is None:
            logger.warning(f"Answer {answer_id} submitted for question {question_id} it does not belong to")
            raise DataIntegrityError(
                f"Answer {answer_id} does not belong to question {question_id}"
            )
        return answer
