"""
Quiz router for adaptive level assessment.

Endpoints for:
- Starting an attempt (sampled questions with answer options)
- Submitting answers for scoring
- Turning a scored attempt into a recommended CEFR level
- Question bank maintenance (counts, coverage, create, delete)
"""
from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from pydantic import BaseModel, Field

from config import get_settings
from cefr_quiz.api.dependencies import (
    get_attempt_evaluator,
    get_level_estimator,
    get_question_bank,
)
from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import (
    Answer,
    AttemptAnswer,
    Question,
    QuestionEvaluation,
    QuizAttemptResult,
)
from cefr_quiz.quiz import AttemptEvaluator, LevelEstimator, QuestionBank

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class StartQuizAttemptRequest(BaseModel):
    """Request model for starting a quiz attempt."""

    target_level: Optional[ProficiencyLevel] = Field(None, description="CEFR level to sample from")
    question_type: Optional[QuestionType] = Field(None, description="Question type filter")
    question_count: Optional[int] = Field(None, ge=1, le=50, description="Number of questions")
    exclude_question_ids: List[int] = Field(
        default_factory=list, description="Question IDs already asked"
    )


class AnswerOption(BaseModel):
    id: int
    text: str


class QuestionItem(BaseModel):
    id: int
    text: str
    level: ProficiencyLevel
    topic_area: Optional[str]
    answers: List[AnswerOption]


class StartQuizAttemptResponse(BaseModel):
    """Response model for a started attempt. Correctness is never exposed here."""

    target_level: ProficiencyLevel
    question_type: QuestionType
    question_count: int
    questions: List[QuestionItem]


class AttemptAnswerPayload(BaseModel):
    question_id: int
    answer_id: int


class SubmitQuizAnswersRequest(BaseModel):
    """Request model for submitting answers."""

    answers: List[AttemptAnswerPayload] = Field(default_factory=list)


class QuestionEvaluationPayload(BaseModel):
    question_id: int
    level: ProficiencyLevel
    correct: bool


class QuizAttemptResultResponse(BaseModel):
    """Response model for a scored attempt."""

    evaluations: List[QuestionEvaluationPayload]
    correct_answers: int
    total_questions: int
    accuracy: float


class AttemptResultPayload(BaseModel):
    evaluations: List[QuestionEvaluationPayload] = Field(..., min_length=1)
    correct_answers: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    accuracy: float = Field(..., ge=0.0, le=1.0)


class AdaptiveAssessmentRequest(BaseModel):
    """Request model for a level assessment."""

    starting_level: ProficiencyLevel
    attempt_result: AttemptResultPayload


class AdaptiveAssessmentResponse(BaseModel):
    """Response model for a level assessment."""

    starting_level: ProficiencyLevel
    baseline_level: ProficiencyLevel
    recommended_level: ProficiencyLevel
    total_questions: int
    correct_answers: int
    accuracy: float


class AnswerCreateRequest(BaseModel):
    text: str = Field(..., min_length=1)
    is_correct: bool = False


class QuestionCreateRequest(BaseModel):
    """Request model for adding a question to the bank."""

    text: str = Field(..., min_length=1, description="Question text")
    level: ProficiencyLevel
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    topic_area: Optional[str] = Field(None, max_length=50)
    answers: List[AnswerCreateRequest] = Field(default_factory=list)


class AnswerResponse(BaseModel):
    id: int
    text: str
    is_correct: bool


class QuestionResponse(BaseModel):
    """Response model for a bank question (admin view, includes correctness)."""

    id: int
    text: str
    level: ProficiencyLevel
    question_type: QuestionType
    topic_area: Optional[str]
    answers: List[AnswerResponse]


class CoverageResponse(BaseModel):
    minimum_per_level: int
    coverage_met: bool
    counts: Dict[ProficiencyLevel, int]


# ========================================
# Attempt Endpoints
# ========================================


def _question_item(bank: QuestionBank, question: Question) -> QuestionItem:
    answers = bank.answers_for(question.id)
    return QuestionItem(
        id=question.id,
        text=question.text,
        level=question.level,
        topic_area=question.topic,
        answers=[AnswerOption(id=a.id, text=a.text) for a in answers],
    )


@router.post("/attempts/start", response_model=StartQuizAttemptResponse)
def start_attempt(
    request: StartQuizAttemptRequest,
    bank: QuestionBank = Depends(get_question_bank),
) -> StartQuizAttemptResponse:
    """Sample a quiz for the requested level and type."""
    settings = get_settings()
    target_level = request.target_level or settings.default_target_level
    question_type = request.question_type or settings.default_question_type
    count = min(request.question_count or settings.default_question_count, settings.max_question_count)

    logger.info(f"Starting {question_type.value} attempt at {target_level.value} ({count} questions)")
    questions = bank.sample(
        target_level,
        question_type,
        count=count,
        excluded_ids=set(request.exclude_question_ids),
    )
    items = [_question_item(bank, q) for q in questions]

    return StartQuizAttemptResponse(
        target_level=target_level,
        question_type=question_type,
        question_count=len(items),
        questions=items,
    )


@router.post("/attempts/submit", response_model=QuizAttemptResultResponse)
def submit_answers(
    request: SubmitQuizAnswersRequest,
    evaluator: AttemptEvaluator = Depends(get_attempt_evaluator),
) -> QuizAttemptResultResponse:
    """Score submitted answers."""
    result = evaluator.evaluate(
        [AttemptAnswer(question_id=a.question_id, answer_id=a.answer_id) for a in request.answers]
    )
    return QuizAttemptResultResponse(**result.to_dict())


@router.post("/assessment", response_model=AdaptiveAssessmentResponse)
def assess_level(
    request: AdaptiveAssessmentRequest,
    estimator: LevelEstimator = Depends(get_level_estimator),
) -> AdaptiveAssessmentResponse:
    """Recommend a level from a scored attempt."""
    payload = request.attempt_result
    attempt = QuizAttemptResult(
        evaluations=tuple(
            QuestionEvaluation(question_id=e.question_id, level=e.level, correct=e.correct)
            for e in payload.evaluations
        ),
        correct_answers=payload.correct_answers,
        total_questions=payload.total_questions,
        accuracy=payload.accuracy,
    )
    result = estimator.estimate(request.starting_level, attempt)
    return AdaptiveAssessmentResponse(**result.to_dict())


# ========================================
# Bank Maintenance Endpoints
# ========================================


@router.get("/bank/counts", response_model=Dict[ProficiencyLevel, int])
def bank_counts(bank: QuestionBank = Depends(get_question_bank)) -> Dict[ProficiencyLevel, int]:
    return bank.counts_by_level()


@router.get("/bank/coverage", response_model=CoverageResponse)
def bank_coverage(
    minimum: int = Query(1, description="Minimum questions required per level"),
    bank: QuestionBank = Depends(get_question_bank),
) -> CoverageResponse:
    coverage_met = bank.coverage_check(minimum)
    return CoverageResponse(
        minimum_per_level=minimum,
        coverage_met=coverage_met,
        counts=bank.counts_by_level(),
    )


@router.post("/bank/questions", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(
    request: QuestionCreateRequest,
    bank: QuestionBank = Depends(get_question_bank),
) -> QuestionResponse:
    question = Question(
        text=request.text,
        level=request.level,
        question_type=request.question_type,
        topic=request.topic_area,
    )
    for answer in request.answers:
        question.add_answer(Answer(text=answer.text, is_correct=answer.is_correct))

    saved = bank.save(question)
    return QuestionResponse(
        id=saved.id,
        text=saved.text,
        level=saved.level,
        question_type=saved.question_type,
        topic_area=saved.topic,
        answers=[AnswerResponse(id=a.id, text=a.text, is_correct=a.is_correct) for a in saved.answers],
    )


@router.delete("/bank/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: int,
    bank: QuestionBank = Depends(get_question_bank),
) -> None:
    bank.delete(question_id)
