"""
Quiz module for leveled sampling, attempt scoring and level estimation.

This module provides:
- QuestionBank: Sampling and maintenance over the question pool
- AttemptEvaluator: Scores submitted (question, answer) pairs
- LevelEstimator: Random walk + accuracy correction over a scored attempt

Control flow:
    QuestionBank.sample -> learner answers -> AttemptEvaluator.evaluate
        -> LevelEstimator.estimate
"""

from .attempt_evaluator import AttemptEvaluator
from .level_estimator import LevelEstimator
from .question_bank import QuestionBank

__all__ = [
    "QuestionBank",
    "AttemptEvaluator",
    "LevelEstimator",
]
