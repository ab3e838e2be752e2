"""Question pool assembly and random sampling order."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from typing import List, Optional, TypeVar, Union

from .models import Question, QuizDocument, parse_document

__all__ = ["flatten", "shuffle"]

T = TypeVar("T")

logger = logging.getLogger(__name__)


def flatten(
    doc: Union[QuizDocument, Mapping[str, object], None],
) -> List[Question]:
    """Concatenate the questions of every section in document order.

    Accepts a parsed :class:`QuizDocument` or the raw decoded JSON. Missing
    documents, sections or question lists contribute nothing.
    """

    if doc is None:
        return []
    if not isinstance(doc, QuizDocument):
        doc = parse_document(doc)
    questions: List[Question] = []
    for section in doc.sections:
        questions.extend(section.questions)
    logger.debug(
        "Flattened question pool",
        extra={"sections": len(doc.sections), "questions": len(questions)},
    )
    return questions


def shuffle(
    items: Sequence[T], rng: Optional[random.Random] = None
) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    ``rng`` defaults to the process-wide ``random`` source; the input
    sequence is never modified.
    """

    source = rng if rng is not None else random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(source.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
