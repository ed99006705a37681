"""cefr-quiz: adaptive CEFR quiz assessment engine."""

__version__ = "0.1.0"
