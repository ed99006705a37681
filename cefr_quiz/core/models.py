"""
Core Quiz Models.

Domain values shared by the question bank, the attempt evaluator and the
level estimator.

Design:
- Question / Answer: long-lived bank content (mutable, owned by the store)
- AttemptAnswer: one submitted (question, answer) pair
- QuestionEvaluation / QuizAttemptResult: scoring output
- AdaptiveAssessmentResult: level recommendation output

Everything except Question/Answer is a frozen, request-scoped value.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType


@dataclass
class Answer:
    """One answer option. Correctness only means something for its own question."""

    text: str
    is_correct: bool = False
    id: int | None = None
    question_id: int | None = None


@dataclass
class Question:
    """A bank question with the answers it exclusively owns."""

    text: str
    level: ProficiencyLevel
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    topic: str | None = None
    answers: list[Answer] = field(default_factory=list)
    id: int | None = None

    def add_answer(self, answer: Answer | None) -> None:
        if answer is None:
            return
        self.answers.append(answer)
        answer.question_id = self.id

    def remove_answer(self, answer: Answer | None) -> None:
        if answer is None:
            return
        self.answers.remove(answer)
        answer.question_id = None

    @property
    def correct_answer_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)


@dataclass(frozen=True)
class AttemptAnswer:
    """A learner's submitted choice for one question."""

    question_id: int
    answer_id: int


@dataclass(frozen=True)
class QuestionEvaluation:
    """Outcome for one submitted answer. ``level`` is informational only."""

    question_id: int
    level: ProficiencyLevel
    correct: bool


@dataclass(frozen=True)
class QuizAttemptResult:
    """Scored attempt: per-question outcomes in submission order plus totals."""

    evaluations: tuple[QuestionEvaluation, ...]
    correct_answers: int
    total_questions: int
    accuracy: float

    def to_dict(self) -> dict:
        return {
            "evaluations": [
                {"question_id": e.question_id, "level": e.level.value, "correct": e.correct}
                for e in self.evaluations
            ],
            "correct_answers": self.correct_answers,
            "total_questions": self.total_questions,
            "accuracy": self.accuracy,
        }


@dataclass(frozen=True)
class AdaptiveAssessmentResult:
    """Level recommendation for one attempt."""

    starting_level: ProficiencyLevel
    baseline_level: ProficiencyLevel
    recommended_level: ProficiencyLevel
    total_questions: int
    correct_answers: int
    accuracy: float

    def to_dict(self) -> dict:
        return {
            "starting_level": self.starting_level.value,
            "baseline_level": self.baseline_level.value,
            "recommended_level": self.recommended_level.value,
            "total_questions": self.total_questions,
            "correct_answers": self.correct_answers,
            "accuracy": self.accuracy,
        }
