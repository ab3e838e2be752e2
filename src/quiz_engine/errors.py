"""Exception types raised by the quiz engine."""

from __future__ import annotations

__all__ = [
    "QuizEngineError",
    "EmptyPoolError",
    "SessionStateError",
    "QuizLoadError",
    "QuizConfigError",
]


class QuizEngineError(RuntimeError):
    """Base class for recoverable quiz engine failures."""


class EmptyPoolError(QuizEngineError):
    """Raised when a session is started without any available question."""


class SessionStateError(QuizEngineError):
    """Raised when a session operation is called in the wrong state."""


class QuizLoadError(QuizEngineError):
    """Raised when a quiz document or index cannot be read."""


class QuizConfigError(QuizEngineError):
    """Raised when configuration parsing or validation fails."""
