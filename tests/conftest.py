"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cefr_quiz.core.levels import ProficiencyLevel, QuestionType
from cefr_quiz.core.models import Answer, Question
from cefr_quiz.db.store import InMemoryQuestionStore
from cefr_quiz.quiz import AttemptEvaluator, LevelEstimator, QuestionBank


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (SQLite / API client)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_question(
    level: ProficiencyLevel,
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE,
    text: str | None = None,
    correct_index: int | None = 0,
    n_answers: int = 3,
    topic: str | None = "grammar",
) -> Question:
    """Build an unsaved question with ``n_answers`` options, one of them correct."""
    question = Question(
        text=text or f"{level.value} {question_type.value} question",
        level=level,
        question_type=question_type,
        topic=topic,
    )
    for i in range(n_answers):
        question.add_answer(Answer(text=f"option {i}", is_correct=(i == correct_index)))
    return question


@pytest.fixture
def store() -> InMemoryQuestionStore:
    """
    Bank with two multiple-choice and one fill-in-blank question per level,
    plus five C2 fill-in-blank questions used by the sampling scenarios.
    """
    questions = []
    for level in ProficiencyLevel:
        questions.append(make_question(level, text=f"{level.value} mc 1"))
        questions.append(make_question(level, text=f"{level.value} mc 2"))
        questions.append(make_question(level, QuestionType.FILL_IN_BLANK, text=f"{level.value} fib 1"))
    for i in range(2, 6):
        questions.append(
            make_question(ProficiencyLevel.C2, QuestionType.FILL_IN_BLANK, text=f"C2 fib {i}")
        )
    return InMemoryQuestionStore(questions)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def bank(store, rng) -> QuestionBank:
    return QuestionBank(store, rng=rng)


@pytest.fixture
def evaluator(bank) -> AttemptEvaluator:
    return AttemptEvaluator(bank)


@pytest.fixture
def estimator() -> LevelEstimator:
    return LevelEstimator()


@pytest.fixture
def question_factory():
    return make_question
