"""
Unit tests for LevelEstimator.

Covers the per-answer walk, the accuracy correction, and end-to-end
scenarios on the two combined.
"""

import pytest

from cefr_quiz.core.exceptions import QuizValidationError
from cefr_quiz.core.levels import ProficiencyLevel as L
from cefr_quiz.core.models import QuestionEvaluation, QuizAttemptResult
from cefr_quiz.quiz import LevelEstimator


def attempt(*outcomes: bool, level: L = L.B1) -> QuizAttemptResult:
    evaluations = tuple(
        QuestionEvaluation(question_id=i + 1, level=level, correct=correct)
        for i, correct in enumerate(outcomes)
    )
    correct = sum(outcomes)
    total = len(outcomes)
    return QuizAttemptResult(
        evaluations=evaluations,
        correct_answers=correct,
        total_questions=total,
        accuracy=correct / total if total else 0.0,
    )


class TestWalk:
    def test_empty_sequence_keeps_starting_level(self):
        assert LevelEstimator.walk(L.B2, ()) == L.B2
        assert LevelEstimator.walk(L.B2, None) == L.B2

    def test_walk_follows_outcomes_in_order(self):
        evaluations = attempt(True, True, False).evaluations
        assert LevelEstimator.walk(L.B1, evaluations) == L.B2

    def test_order_matters_at_the_boundary(self):
        # Clamping makes the walk order-sensitive
        assert LevelEstimator.walk(L.C2, attempt(True, False).evaluations) == L.C1
        assert LevelEstimator.walk(L.C2, attempt(False, True).evaluations) == L.C2

    def test_question_level_does_not_affect_walk(self):
        low = attempt(True, False, True, level=L.A1).evaluations
        high = attempt(True, False, True, level=L.C2).evaluations
        assert LevelEstimator.walk(L.B1, low) == LevelEstimator.walk(L.B1, high) == L.B2

    @pytest.mark.parametrize("n", [1, 5, 12])
    def test_all_wrong_clamps_at_a1(self, n):
        assert LevelEstimator.walk(L.B1, attempt(*([False] * n)).evaluations) == (
            L.A2 if n == 1 else L.A1
        )

    def test_walk_always_lands_on_a_valid_level(self):
        outcomes = [True, False, True, True, True, True, True, False, False, False, False, False, False]
        for start in L:
            for n in range(len(outcomes) + 1):
                assert LevelEstimator.walk(start, attempt(*outcomes[:n]).evaluations) in list(L)


class TestAccuracyCorrection:
    @pytest.mark.parametrize(
        "accuracy,expected",
        [
            (1.0, L.B2),
            (0.80, L.B2),
            (0.7999, L.B1),
            (0.50, L.B1),
            (0.4999, L.A2),
            (0.0, L.A2),
        ],
    )
    def test_thresholds_are_inclusive_on_lower_bound(self, accuracy, expected):
        assert LevelEstimator.adjust_for_accuracy(L.B1, accuracy) == expected

    def test_correction_clamps(self):
        assert LevelEstimator.adjust_for_accuracy(L.C2, 0.95) == L.C2
        assert LevelEstimator.adjust_for_accuracy(L.A1, 0.10) == L.A1


class TestEstimate:
    def test_scenario_mixed_answers_from_b1(self, estimator):
        result = estimator.estimate(L.B1, attempt(True, True, False))

        assert result.starting_level == L.B1
        assert result.baseline_level == L.B2
        assert result.accuracy == pytest.approx(2 / 3)
        assert result.recommended_level == L.B2

    def test_scenario_all_wrong_from_a1(self, estimator):
        result = estimator.estimate(L.A1, attempt(False, False))

        assert result.baseline_level == L.A1
        assert result.accuracy == 0.0
        assert result.recommended_level == L.A1

    def test_scenario_all_right_from_c1(self, estimator):
        result = estimator.estimate(L.C1, attempt(True, True, True, True))

        assert result.baseline_level == L.C2
        assert result.accuracy == 1.0
        assert result.recommended_level == L.C2

    def test_phases_compound(self, estimator):
        # Walk: A2 -> B1 -> B2 -> C1 -> B2 -> C1; accuracy 0.8 adds one more step
        result = estimator.estimate(L.A2, attempt(True, True, True, False, True))
        assert result.baseline_level == L.C1
        assert result.recommended_level == L.C2

    def test_totals_are_echoed(self, estimator):
        scored = attempt(True, False, False, True)
        result = estimator.estimate(L.B2, scored)

        assert result.total_questions == scored.total_questions == 4
        assert result.correct_answers == scored.correct_answers == 2
        assert result.accuracy == scored.accuracy

    def test_empty_attempt_uses_starting_level_as_baseline(self, estimator):
        result = estimator.estimate(L.B1, attempt())
        assert result.baseline_level == L.B1

    def test_missing_inputs_rejected(self, estimator):
        with pytest.raises(QuizValidationError):
            estimator.estimate(None, attempt(True))
        with pytest.raises(QuizValidationError):
            estimator.estimate(L.B1, None)

    def test_result_serializes(self, estimator):
        payload = estimator.estimate(L.B1, attempt(True, True, False)).to_dict()
        assert payload["baseline_level"] == "B2"
        assert payload["recommended_level"] == "B2"
        assert payload["total_questions"] == 3
