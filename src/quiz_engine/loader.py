"""Question bank discovery and quiz document loading.

A bank is laid out as ``<root>/<folder>/<index file>`` next to the quiz
documents it lists. The index file name is built from a pattern whose
``{numero}`` placeholder receives the first run of digits in the folder
name, so ``Lectura-5`` with ``index{numero}.json`` reads ``index5.json``.
"""

from __future__ import annotations

import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List

from .errors import QuizLoadError
from .models import Question, QuestionType, QuizDocument, parse_document

__all__ = [
    "extract_number",
    "index_path",
    "load_index",
    "load_document",
    "display_name",
    "count_question_types",
    "TYPE_LABELS",
]

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"\d+")

TYPE_LABELS: Dict[QuestionType, str] = {
    QuestionType.MULTIPLE_CHOICE: "Multiple choice",
    QuestionType.SINGLE_WORD: "Single word",
    QuestionType.TRUE_FALSE: "True/False",
    QuestionType.FILL_BLANK: "Fill in the blank",
    QuestionType.MULTIPLE_KEYWORDS: "Keywords",
    QuestionType.OPEN_ENDED: "Open ended",
    QuestionType.UNKNOWN: "Unrecognised",
}


def extract_number(text: str) -> str:
    match = _DIGITS_RE.search(text or "")
    return match.group(0) if match else ""


def index_path(bank_root: Path, folder: str, pattern: str) -> Path:
    name = pattern.replace("{numero}", extract_number(folder))
    return Path(bank_root) / folder / name


def _read_json(path: Path, label: str) -> object:
    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise QuizLoadError(f"{label} not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise QuizLoadError(f"{label} is not valid UTF-8: {path}") from exc
    except json.JSONDecodeError as exc:
        raise QuizLoadError(f"{label} is not valid JSON: {path} ({exc})") from exc
    except OSError as exc:
        raise QuizLoadError(f"Could not read {label.lower()} {path}: {exc}") from exc


def load_index(path: Path) -> List[str]:
    """Return the quiz file names listed in a bank index."""

    data = _read_json(path, "Quiz index")
    entries = data.get("cuestionarios") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        logger.warning("Index lists no quizzes", extra={"path": str(path)})
        return []
    names = [str(entry) for entry in entries if entry]
    logger.info(
        "Loaded quiz index", extra={"path": str(path), "quizzes": len(names)}
    )
    return names


def load_document(path: Path) -> QuizDocument:
    data = _read_json(path, "Quiz document")
    document = parse_document(data)
    logger.info(
        "Loaded quiz document",
        extra={
            "path": str(path),
            "sections": len(document.sections),
            "questions": document.question_count,
        },
    )
    return document


def display_name(filename: str) -> str:
    """Human label for a quiz file: ``cuestionario-1.json`` -> ``Cuestionario 1``."""

    stem = filename.replace(".json", "").replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), stem)


def count_question_types(
    questions: Iterable[Question],
) -> Dict[QuestionType, int]:
    counts = Counter(question.type for question in questions)
    return dict(counts)
