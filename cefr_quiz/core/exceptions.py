"""
Quiz engine error taxonomy.

All failures are local to one call. Nothing here is retried; callers (the
HTTP layer, the CLI) decide how to present them.
"""


class QuizEngineError(Exception):
    """Base class for assessment engine failures."""


class NotFoundError(QuizEngineError):
    """A question or answer does not exist, or a sampling pool is empty."""


class QuizValidationError(QuizEngineError, ValueError):
    """Invalid arguments or a question that breaks the bank's write rules."""


class DataIntegrityError(QuizEngineError):
    """A submitted answer does not belong to the submitted question."""
