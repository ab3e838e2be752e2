from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Make src/ importable without an editable install
ROOT = TESTS_DIR.parent
for extra in (ROOT / "src",):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import QuizBankBuilder, sample_document  # noqa: E402

from quiz_engine.models import Question  # noqa: E402
from quiz_engine.pool import flatten  # noqa: E402


@pytest.fixture
def sample_doc() -> Dict[str, Any]:
    """Raw two-section document with one question of each main type."""

    return sample_document()


@pytest.fixture
def sample_pool(sample_doc: Dict[str, Any]) -> List[Question]:
    return flatten(sample_doc)


@pytest.fixture
def bank(tmp_path: Path) -> QuizBankBuilder:
    """Question bank rooted in pytest's per-test tmp directory."""

    return QuizBankBuilder(tmp_path / "bd-preguntas")


@pytest.fixture(autouse=True)
def _reset_quiz_engine_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("quiz_engine")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
