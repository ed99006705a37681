"""FastAPI dependencies wiring the quiz components over the configured store."""
from __future__ import annotations

import random
import threading
from functools import lru_cache

from fastapi import Depends

from config import get_settings
from cefr_quiz.db.store import IQuestionStore
from cefr_quiz.quiz import AttemptEvaluator, LevelEstimator, QuestionBank


@lru_cache
def _shared_rng() -> tuple[random.Random, threading.Lock]:
    """Process-wide generator and the lock every bank must sample it under."""
    return random.Random(get_settings().sampling_seed), threading.Lock()


def get_question_store() -> IQuestionStore:
    """Default store: the SQL question bank."""
    from cefr_quiz.db.database import SessionLocal
    from cefr_quiz.db.sql_store import SqlQuestionStore

    return SqlQuestionStore(SessionLocal)


def get_question_bank(store: IQuestionStore = Depends(get_question_store)) -> QuestionBank:
    rng, rng_lock = _shared_rng()
    return QuestionBank(store, rng=rng, rng_lock=rng_lock)


def get_attempt_evaluator(bank: QuestionBank = Depends(get_question_bank)) -> AttemptEvaluator:
    return AttemptEvaluator(bank)


def get_level_estimator() -> LevelEstimator:
    return LevelEstimator()
