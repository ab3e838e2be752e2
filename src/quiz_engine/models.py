"""Quiz document data model and the JSON field mapping it is built from.

Source documents use Spanish keys (``cuestionario``, ``secciones``,
``preguntas`` …). Parsing is lenient: absent or mistyped fields degrade to
empty values so a malformed document yields fewer questions instead of an
exception. Only the engine-facing dataclasses leave this module.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_MIN_THRESHOLD = 0.6


class QuestionType(Enum):
    """Answer-shape variants a question can declare."""

    MULTIPLE_CHOICE = "multiple_choice"
    SINGLE_WORD = "single_word"
    TRUE_FALSE = "true_false"
    FILL_BLANK = "fill_blank"
    MULTIPLE_KEYWORDS = "multiple_keywords"
    OPEN_ENDED = "open_ended"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: object) -> "QuestionType":
        if tag is None or tag == "":
            return cls.MULTIPLE_CHOICE
        normalized = str(tag).strip().lower()
        for member in cls:
            if member is not cls.UNKNOWN and member.value == normalized:
                return member
        return cls.UNKNOWN

    @property
    def uses_keywords(self) -> bool:
        return self in KEYWORD_TYPES


KEYWORD_TYPES = frozenset(
    {
        QuestionType.FILL_BLANK,
        QuestionType.MULTIPLE_KEYWORDS,
        QuestionType.OPEN_ENDED,
    }
)


@dataclass(frozen=True)
class KeywordSpec:
    """Weighted keyword requirements for free-text question types."""

    words: tuple[str, ...] = ()
    weights: tuple[float, ...] = ()
    synonyms_by_word: Mapping[str, tuple[str, ...]] = field(
        default_factory=dict
    )
    min_threshold: float = DEFAULT_MIN_THRESHOLD

    def weight_for(self, index: int) -> float:
        """Weight of the word at ``index``; missing or null weights count 1."""

        if 0 <= index < len(self.weights):
            return self.weights[index] or 1
        return 1

    def synonyms_for(self, word: str) -> tuple[str, ...]:
        return tuple(self.synonyms_by_word.get(word, ()))


@dataclass(frozen=True)
class Question:
    """Immutable question as declared in a quiz document."""

    text: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: Mapping[str, str] = field(default_factory=dict)
    correct_answer: str = ""
    synonyms: tuple[str, ...] = ()
    keyword_spec: Optional[KeywordSpec] = None
    reference: str = ""
    raw_type: Optional[str] = None


@dataclass(frozen=True)
class Section:
    title: str
    questions: tuple[Question, ...] = ()


@dataclass(frozen=True)
class QuizDocument:
    title: str = ""
    author: str = ""
    description: str = ""
    sections: tuple[Section, ...] = ()

    @property
    def question_count(self) -> int:
        return sum(len(section.questions) for section in self.sections)


@dataclass(frozen=True)
class KeywordHit:
    word: str
    weight: float


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one answer.

    Choice, boolean and single-word checks fill ``expected_answer``; keyword
    checks fill the match lists and scores. An unknown question type yields
    only ``is_correct=False``.
    """

    is_correct: bool
    expected_answer: Optional[str] = None
    matched_words: tuple[KeywordHit, ...] = ()
    missing_words: tuple[KeywordHit, ...] = ()
    score_obtained: Optional[float] = None
    score_total: Optional[float] = None
    ratio: Optional[float] = None

    @property
    def is_keyword_result(self) -> bool:
        return self.score_total is not None


def parse_document(data: object) -> QuizDocument:
    """Build a :class:`QuizDocument` from a decoded JSON payload."""

    if not isinstance(data, Mapping):
        return QuizDocument()
    root = data.get("cuestionario")
    if not isinstance(root, Mapping):
        return QuizDocument()
    raw_sections = root.get("secciones")
    sections: list[Section] = []
    if isinstance(raw_sections, Sequence) and not isinstance(
        raw_sections, (str, bytes)
    ):
        for raw_section in raw_sections:
            if isinstance(raw_section, Mapping):
                sections.append(parse_section(raw_section))
    return QuizDocument(
        title=_text(root.get("titulo")),
        author=_text(root.get("autor")),
        description=_text(root.get("descripcion")),
        sections=tuple(sections),
    )


def parse_section(data: Mapping[str, Any]) -> Section:
    title = _text(data.get("titulo"))
    raw_questions = data.get("preguntas")
    if not isinstance(raw_questions, list):
        return Section(title=title)
    questions: list[Question] = []
    for position, raw in enumerate(raw_questions):
        if not isinstance(raw, Mapping):
            logger.warning(
                "Skipping malformed question entry",
                extra={"section": title, "position": position},
            )
            continue
        questions.append(parse_question(raw))
    return Section(title=title, questions=tuple(questions))


def parse_question(data: Mapping[str, Any]) -> Question:
    raw_tag = data.get("tipo")
    qtype = QuestionType.from_tag(raw_tag)
    keyword_spec = None
    if qtype.uses_keywords:
        keyword_spec = parse_keyword_spec(data.get("palabras_clave"))
    options = data.get("opciones")
    return Question(
        text=_text(data.get("pregunta")),
        type=qtype,
        options=(
            {str(key): _text(value) for key, value in options.items()}
            if isinstance(options, Mapping)
            else {}
        ),
        correct_answer=_text(data.get("respuesta_correcta")),
        synonyms=_string_tuple(data.get("sinonimos")),
        keyword_spec=keyword_spec,
        reference=_text(data.get("referencia")),
        raw_type=None if raw_tag is None else str(raw_tag),
    )


def parse_keyword_spec(data: object) -> KeywordSpec:
    if not isinstance(data, Mapping):
        return KeywordSpec()
    raw_synonyms = data.get("sinonimos")
    synonyms: dict[str, tuple[str, ...]] = {}
    if isinstance(raw_synonyms, Mapping):
        synonyms = {
            str(word): _string_tuple(values)
            for word, values in raw_synonyms.items()
        }
    threshold = data.get("umbral_minimo")
    return KeywordSpec(
        words=_string_tuple(data.get("palabras")),
        weights=_weight_tuple(data.get("pesos")),
        synonyms_by_word=synonyms,
        min_threshold=(
            float(threshold)
            if isinstance(threshold, (int, float))
            and not isinstance(threshold, bool)
            else DEFAULT_MIN_THRESHOLD
        ),
    )


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _string_tuple(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _weight_tuple(value: object) -> tuple[float, ...]:
    if not isinstance(value, list):
        return ()
    weights: list[float] = []
    for item in value:
        if isinstance(item, (int, float)) and not isinstance(item, bool):
            weights.append(item)
        else:
            weights.append(0)
    return tuple(weights)
