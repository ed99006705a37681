"""
Question Bank for leveled question sampling and bank maintenance.

Handles randomized quiz selection by CEFR level and question type,
exclusion of already-asked questions, coverage checks, and the
"at least one correct answer" write rule.
"""
from __future__ import annotations

import hashlib
import random
import threading
from typing import Dict, Iterable, List

from loguru import logger

from cefr_quiz.core.exceptions import NotFoundError, QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import Answer, Question
from cefr_quiz.db.store import IQuestionStore


class QuestionBank:
    """
    Filtered, randomized view over the question pool.

    Handles:
    - Sampling by level/type with exclusions (never duplicates)
    - Answer lookup and per-level counts
    - Coverage checks for bank readiness
    - Validated save/delete
    """

    def __init__(
        self,
        store: IQuestionStore,
        rng: random.Random | None = None,
        rng_lock: threading.Lock | None = None,
    ):
        # A generator shared between banks must come with its shared lock
        self.store = store
        self._rng = rng or random.Random()
        self._rng_lock = rng_lock or threading.Lock()

    # ========================================
    # Sampling
    # ========================================

    def sample(
        self,
        level: ProficiencyLevel,
        question_type: QuestionType | None = None,
        count: int = 1,
        excluded_ids: Iterable[int] | None = None,
        seed: str | int | None = None,
    ) -> List[Question]:
        """
        Select up to ``count`` distinct questions at ``level``.

        Args:
            level: Required CEFR level
            question_type: Optional type filter (None = any type)
            count: Number of questions wanted, must be > 0
            excluded_ids: Question IDs that must not be returned
            seed: Optional seed making this one call reproducible

        Returns:
            The whole remaining pool when it holds ``count`` or fewer
            questions, otherwise ``count`` questions chosen uniformly.

        Raises:
            NotFoundError: Nothing left after filtering and exclusion
        """
        if level is None:
            raise QuizValidationError("Proficiency level must not be None")
        if count <= 0:
            raise QuizValidationError("Count must be greater than zero")

        if question_type is not None:
            candidates = self.store.find_by_level_and_type(level, question_type)
        else:
            candidates = self.store.find_by_level(level)

        excluded = set(excluded_ids or ())
        pool: Dict[int, Question] = {}
        for question in candidates:
            if question.id not in excluded and question.id not in pool:
                pool[question.id] = question

        if not pool:
            logger.warning(
                f"No questions available for level {level.value}"
                f" (type={question_type.value if question_type else 'any'}, excluded={len(excluded)})"
            )
            raise NotFoundError(f"No questions available for level {level.value}")

        questions = list(pool.values())
        if len(questions) <= count:
            return questions

        if seed is not None:
            selected = random.Random(self._create_seed(seed)).sample(questions, count)
        else:
            with self._rng_lock:
                selected = self._rng.sample(questions, count)

        logger.debug(f"Sampled {len(selected)} of {len(questions)} questions at {level.value}")
        return selected

    def random_question(
        self,
        level: ProficiencyLevel,
        question_type: QuestionType | None = None,
    ) -> Question:
        """Pick a single random question at ``level``."""
        return self.sample(level, question_type, count=1)[0]

    def _create_seed(self, seed: str | int) -> int:
        """Create a reproducible integer seed from string or int."""
        if isinstance(seed, int):
            return seed

        hash_bytes = hashlib.sha256(str(seed).encode()).digest()
        return int.from_bytes(hash_bytes[:8], byteorder="big")

    # ========================================
    # Lookups & Statistics
    # ========================================

    def get_question(self, question_id: int) -> Question:
        if question_id is None:
            raise QuizValidationError("Question id must not be None")
        question = self.store.find_by_id(question_id)
        if question is None:
            raise NotFoundError(f"Question {question_id} not found")
        return question

    def questions_by_level(self, level: ProficiencyLevel) -> List[Question]:
        if level is None:
            raise QuizValidationError("Proficiency level must not be None")
        return self.store.find_by_level(level)

    def answers_for(self, question_id: int) -> List[Answer]:
        """Answers of an existing question."""
        self._ensure_exists(question_id)
        return self.store.find_answers(question_id)

    def count_by_level(self, level: ProficiencyLevel) -> int:
        return self.store.count_by_level(level)

    def counts_by_level(self) -> Dict[ProficiencyLevel, int]:
        return {level: self.store.count_by_level(level) for level in ProficiencyLevel}

    def coverage_check(self, minimum_per_level: int) -> bool:
        """
        True iff every CEFR level holds at least ``minimum_per_level`` questions.

        Readiness check for the bank, not part of quiz serving.
        """
        if minimum_per_level <= 0:
            raise QuizValidationError("Minimum per level must be greater than zero")
        return all(
            self.store.count_by_level(level) >= minimum_per_level for level in ProficiencyLevel
        )

    # ========================================
    # Maintenance
    # ========================================

    def save(self, question: Question) -> Question:
        """
        Persist a question after checking its answer set.

        Answers are re-parented to ``question``. A question carrying answers
        must have at least one marked correct.
        """
        if question is None:
            raise QuizValidationError("Question must not be None")
        if question.answers and question.correct_answer_count == 0:
            raise QuizValidationError("Question must have at least one correct answer")
        for answer in question.answers:
            answer.question_id = question.id

        saved = self.store.save(question)
        logger.info(f"Saved {saved.level.value} question {saved.id}")
        return saved

    def delete(self, question_id: int) -> None:
        self._ensure_exists(question_id)
        self.store.delete(question_id)
        logger.info(f"Deleted question {question_id}")

    def _ensure_exists(self, question_id: int) -> None:
        if question_id is None:
            raise QuizValidationError("Question id must not be None")
        if not self.store.exists(question_id):
            raise NotFoundError(f"Question {question_id} not found")
