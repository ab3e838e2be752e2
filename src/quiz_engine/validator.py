"""Answer checking for every question type.

Keyword scoring uses substring containment on normalised text rather than
whole-word matching. Inflected forms ("planetas" for "planeta") therefore
match, and so does a short variant buried in an unrelated word ("sol" in
"consolidar"). Weights and synonym lists in existing quiz banks are tuned
against this behaviour.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import (
    KeywordHit,
    KeywordSpec,
    Question,
    QuestionType,
    ValidationResult,
)
from .text import normalize

__all__ = [
    "check_choice",
    "validate",
    "validate_keywords",
]

logger = logging.getLogger(__name__)


def validate(raw_answer: Optional[str], question: Question) -> ValidationResult:
    """Check ``raw_answer`` against ``question`` according to its type.

    Never raises: an unrecognised type produces ``is_correct=False`` with no
    detail so the caller can flag the content.
    """

    qtype = question.type
    if qtype is QuestionType.MULTIPLE_CHOICE:
        return check_choice(raw_answer, question)
    if qtype is QuestionType.SINGLE_WORD:
        return _validate_single_word(raw_answer, question)
    if qtype is QuestionType.TRUE_FALSE:
        return _validate_true_false(raw_answer, question)
    if qtype.uses_keywords:
        return validate_keywords(
            raw_answer, question.keyword_spec or KeywordSpec()
        )
    logger.warning(
        "Unknown question type",
        extra={"question_type": question.raw_type, "question": question.text},
    )
    return ValidationResult(is_correct=False)


def check_choice(letter: Optional[str], question: Question) -> ValidationResult:
    return ValidationResult(
        is_correct=bool(letter) and letter == question.correct_answer,
        expected_answer=question.correct_answer,
    )


def _validate_single_word(
    raw_answer: Optional[str], question: Question
) -> ValidationResult:
    answer = normalize(raw_answer)
    accepted = {normalize(question.correct_answer)}
    accepted.update(normalize(synonym) for synonym in question.synonyms)
    return ValidationResult(
        is_correct=answer in accepted,
        expected_answer=question.correct_answer,
    )


def _validate_true_false(
    raw_answer: Optional[str], question: Question
) -> ValidationResult:
    return ValidationResult(
        is_correct=normalize(raw_answer) == normalize(question.correct_answer),
        expected_answer=question.correct_answer,
    )


def validate_keywords(
    raw_answer: Optional[str], spec: KeywordSpec
) -> ValidationResult:
    """Score ``raw_answer`` against weighted required keywords.

    A word counts as matched when the normalised answer contains the
    normalised word or one of its synonyms. ``ratio`` is the matched weight
    over the total weight (0 for an empty word list) and the answer passes
    when ``ratio >= spec.min_threshold``.
    """

    answer = normalize(raw_answer)
    matched: list[KeywordHit] = []
    missing: list[KeywordHit] = []
    obtained = 0.0
    total = 0.0
    for index, word in enumerate(spec.words):
        weight = spec.weight_for(index)
        hit = KeywordHit(word=word, weight=weight)
        total += weight
        if _contains_variant(answer, word, spec):
            matched.append(hit)
            obtained += weight
        else:
            missing.append(hit)

    ratio = obtained / total if total else 0.0
    return ValidationResult(
        is_correct=bool(spec.words) and ratio >= spec.min_threshold,
        matched_words=tuple(matched),
        missing_words=tuple(missing),
        score_obtained=obtained,
        score_total=total,
        ratio=ratio,
    )


def _contains_variant(answer: str, word: str, spec: KeywordSpec) -> bool:
    variants = {normalize(word)}
    variants.update(normalize(synonym) for synonym in spec.synonyms_for(word))
    # an empty variant would match every answer
    variants.discard("")
    return any(variant in answer for variant in variants)
