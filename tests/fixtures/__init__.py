"""Shared testing fixtures for the quiz_engine test suite."""

from .bank import QuizBankBuilder, build_tree  # noqa: F401
from .documents import (  # noqa: F401
    choice_questions,
    document_with,
    sample_document,
)
from .rng import FixedRandom, identity_random  # noqa: F401

__all__ = [
    "QuizBankBuilder",
    "build_tree",
    "choice_questions",
    "document_with",
    "sample_document",
    "FixedRandom",
    "identity_random",
]
