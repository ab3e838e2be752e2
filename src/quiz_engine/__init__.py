"""Quiz engine: question pools, answer validation and scored sessions."""

from .errors import (
    EmptyPoolError,
    QuizConfigError,
    QuizEngineError,
    QuizLoadError,
    SessionStateError,
)
from .loader import count_question_types, load_document, load_index
from .models import (
    KeywordHit,
    KeywordSpec,
    Question,
    QuestionType,
    QuizDocument,
    Section,
    ValidationResult,
    parse_document,
)
from .pool import flatten, shuffle
from .session import (
    NavigationOutcome,
    QuizResults,
    QuizSession,
    ReviewItem,
    SessionAnswer,
    SessionState,
    StartOutcome,
)
from .text import extract_words, normalize
from .validator import check_choice, validate, validate_keywords

__all__ = [
    "normalize",
    "extract_words",
    "validate",
    "validate_keywords",
    "check_choice",
    "flatten",
    "shuffle",
    "parse_document",
    "load_document",
    "load_index",
    "count_question_types",
    "Question",
    "QuestionType",
    "KeywordSpec",
    "KeywordHit",
    "Section",
    "QuizDocument",
    "ValidationResult",
    "QuizSession",
    "SessionState",
    "SessionAnswer",
    "StartOutcome",
    "NavigationOutcome",
    "QuizResults",
    "ReviewItem",
    "QuizEngineError",
    "EmptyPoolError",
    "SessionStateError",
    "QuizLoadError",
    "QuizConfigError",
]
