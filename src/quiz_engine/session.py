"""Quiz session state machine and scoring.

A :class:`QuizSession` owns one attempt: the sampled questions, one answer
slot per question and the current position. Front ends drive it through
``start``, ``record_answer``, ``advance``, ``retreat`` and
``compute_results`` and render whatever plain data comes back.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import EmptyPoolError, SessionStateError
from .models import Question, QuestionType, ValidationResult
from .pool import shuffle
from .validator import check_choice, validate

__all__ = [
    "SessionState",
    "SessionAnswer",
    "StartOutcome",
    "NavigationOutcome",
    "QuizResults",
    "ReviewItem",
    "QuizSession",
    "score_message",
]

logger = logging.getLogger(__name__)


class SessionState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionAnswer:
    """A recorded answer: the raw input and its validation outcome.

    For multiple-choice questions ``raw_text`` is the selected letter.
    """

    raw_text: str
    result: ValidationResult


@dataclass(frozen=True)
class StartOutcome:
    effective_count: int
    requested_count: int
    was_clamped: bool


@dataclass(frozen=True)
class NavigationOutcome:
    """Where navigation left the session; ``index`` is None once completed."""

    state: SessionState
    index: Optional[int]

    @property
    def completed(self) -> bool:
        return self.state is SessionState.COMPLETED


@dataclass(frozen=True)
class QuizResults:
    correct_count: int
    total: int
    percentage: int
    answered_count: int = 0

    @property
    def incorrect_count(self) -> int:
        return self.total - self.correct_count

    @property
    def message(self) -> str:
        return score_message(self.percentage)


@dataclass(frozen=True)
class ReviewItem:
    number: int
    question: Question
    answer: Optional[SessionAnswer]
    is_correct: bool


def score_message(percentage: int) -> str:
    """Encouragement line for a final percentage."""

    if percentage >= 90:
        return "Excellent work! You have mastered the topic."
    if percentage >= 70:
        return "Very good! Solid knowledge of the topic."
    if percentage >= 50:
        return "Good attempt! Keep studying."
    return "Don't give up! Practice makes perfect."


def _round_percentage(correct: int, total: int) -> int:
    # integer round-half-up of correct / total * 100
    return (correct * 200 + total) // (2 * total)


@dataclass
class QuizSession:
    """Mutable state for a single quiz attempt."""

    rng: Optional[random.Random] = field(default=None, repr=False)
    questions: List[Question] = field(default_factory=list)
    answers: List[Optional[SessionAnswer]] = field(default_factory=list)
    current_index: int = 0
    state: SessionState = SessionState.NOT_STARTED

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        self._require(SessionState.IN_PROGRESS, "read the current question")
        return self.questions[self.current_index]

    @property
    def current_answer(self) -> Optional[SessionAnswer]:
        self._require(SessionState.IN_PROGRESS, "read the current answer")
        return self.answers[self.current_index]

    def answered_count(self) -> int:
        return sum(1 for answer in self.answers if answer is not None)

    def is_answered(self, index: int) -> bool:
        return self.answers[index] is not None

    def start(
        self, pool: Sequence[Question], requested_count: int
    ) -> StartOutcome:
        """Sample ``requested_count`` questions from ``pool`` and begin.

        The count is clamped to the pool size; ``was_clamped`` tells the
        caller to let the user know. An empty pool raises
        :class:`EmptyPoolError` and leaves the session untouched.
        """

        if pool is None:
            raise TypeError("pool must be a sequence of questions, not None")
        if not pool:
            raise EmptyPoolError("No questions available in this quiz.")
        if requested_count <= 0:
            raise ValueError("requested_count must be a positive integer")

        effective = min(requested_count, len(pool))
        was_clamped = effective < requested_count
        if was_clamped:
            logger.info(
                "Requested question count clamped to pool size",
                extra={"requested": requested_count, "available": len(pool)},
            )

        self.questions = shuffle(pool, self.rng)[:effective]
        self.answers = [None] * effective
        self.current_index = 0
        self.state = SessionState.IN_PROGRESS
        logger.info("Session started", extra={"questions": effective})
        return StartOutcome(
            effective_count=effective,
            requested_count=requested_count,
            was_clamped=was_clamped,
        )

    def record_answer(
        self, index: int, value: Optional[str]
    ) -> Optional[ValidationResult]:
        """Store the answer for ``index`` once and return its validation.

        A second answer for the same question is rejected: the first answer
        stays and ``None`` is returned.
        """

        self._require(SessionState.IN_PROGRESS, "record an answer")
        if not 0 <= index < len(self.questions):
            raise IndexError(f"question index out of range: {index}")
        if self.answers[index] is not None:
            logger.info(
                "Ignoring duplicate answer", extra={"question_index": index}
            )
            return None

        question = self.questions[index]
        raw = "" if value is None else str(value)
        if question.type is QuestionType.MULTIPLE_CHOICE:
            result = check_choice(raw, question)
        else:
            result = validate(raw, question)
        self.answers[index] = SessionAnswer(raw_text=raw, result=result)
        logger.debug(
            "Answer recorded",
            extra={
                "question_index": index,
                "question_type": question.type.value,
                "correct": result.is_correct,
            },
        )
        return result

    def advance(self) -> NavigationOutcome:
        self._require(SessionState.IN_PROGRESS, "advance")
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            return NavigationOutcome(self.state, self.current_index)
        self.state = SessionState.COMPLETED
        logger.info(
            "Session completed",
            extra={
                "answered": self.answered_count(),
                "questions": len(self.questions),
            },
        )
        return NavigationOutcome(self.state, None)

    def retreat(self) -> NavigationOutcome:
        self._require(SessionState.IN_PROGRESS, "go back")
        if self.current_index > 0:
            self.current_index -= 1
        return NavigationOutcome(self.state, self.current_index)

    def reset(self) -> None:
        self.questions = []
        self.answers = []
        self.current_index = 0
        self.state = SessionState.NOT_STARTED

    def exit(self) -> None:
        if self.state is SessionState.IN_PROGRESS:
            logger.info(
                "Session abandoned",
                extra={"answered": self.answered_count()},
            )
        self.reset()

    def compute_results(self) -> QuizResults:
        """Score the completed attempt; unanswered questions are incorrect."""

        self._require(SessionState.COMPLETED, "compute results")
        correct = sum(1 for item in self.review() if item.is_correct)
        total = len(self.questions)
        return QuizResults(
            correct_count=correct,
            total=total,
            percentage=_round_percentage(correct, total),
            answered_count=self.answered_count(),
        )

    def review(self) -> List[ReviewItem]:
        items: List[ReviewItem] = []
        for idx, (question, answer) in enumerate(
            zip(self.questions, self.answers)
        ):
            items.append(
                ReviewItem(
                    number=idx + 1,
                    question=question,
                    answer=answer,
                    is_correct=answer is not None
                    and answer.result.is_correct,
                )
            )
        return items

    def _require(self, expected: SessionState, action: str) -> None:
        if self.state is not expected:
            raise SessionStateError(
                f"Cannot {action} while the session is "
                f"{self.state.value.replace('_', ' ')}."
            )
