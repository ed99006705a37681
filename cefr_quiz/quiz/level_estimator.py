"""
Level Estimator - two-phase CEFR level recommendation.

Phase 1 walks the scored answers in order: a correct answer moves the
learner one level up, a wrong one moves them one level down (clamped at
C2 and A1). The result is the baseline level.

Phase 2 applies one correction from overall accuracy:
    accuracy >= 0.80  -> one level up
    accuracy >= 0.50  -> unchanged
    otherwise         -> one level down

The two phases can compound: a learner already pushed up by the walk is
pushed up again by high accuracy. They are kept as separate steps.
"""
from __future__ import annotations

from typing import Iterable

from loguru import logger

from cefr_quiz.core.exceptions import QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel
from cefr_quiz.core.models import AdaptiveAssessmentResult, QuestionEvaluation, QuizAttemptResult


class LevelEstimator:
    """Pure function object; holds no state between calls."""

    HIGH_ACCURACY_THRESHOLD = 0.80
    MEDIUM_ACCURACY_THRESHOLD = 0.50

    def estimate(
        self,
        starting_level: ProficiencyLevel,
        attempt_result: QuizAttemptResult,
    ) -> AdaptiveAssessmentResult:
        if starting_level is None:
            raise QuizValidationError("Starting level must not be None")
        if attempt_result is None:
            raise QuizValidationError("Attempt result must not be None")

        baseline = self.walk(starting_level, attempt_result.evaluations)
        recommended = self.adjust_for_accuracy(baseline, attempt_result.accuracy)

        logger.debug(
            f"Assessment: {starting_level.value} -> baseline {baseline.value}"
            f" -> recommended {recommended.value} (accuracy {attempt_result.accuracy:.2f})"
        )
        return AdaptiveAssessmentResult(
            starting_level=starting_level,
            baseline_level=baseline,
            recommended_level=recommended,
            total_questions=attempt_result.total_questions,
            correct_answers=attempt_result.correct_answers,
            accuracy=attempt_result.accuracy,
        )

    @staticmethod
    def walk(
        starting_level: ProficiencyLevel,
        evaluations: Iterable[QuestionEvaluation] | None,
    ) -> ProficiencyLevel:
        """Phase 1: one step per evaluation. Only correctness matters."""
        current = starting_level
        for evaluation in evaluations or ():
            current = current.step_up() if evaluation.correct else current.step_down()
        return current

    @classmethod
    def adjust_for_accuracy(cls, baseline: ProficiencyLevel, accuracy: float) -> ProficiencyLevel:
        """Phase 2: single correction from overall accuracy."""
        if accuracy >= cls.HIGH_ACCURACY_THRESHOLD:
            return baseline.step_up()
        if accuracy >= cls.MEDIUM_ACCURACY_THRESHOLD:
            return baseline
        return baseline.step_down()
