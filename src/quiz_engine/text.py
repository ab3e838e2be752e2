"""Free-text canonicalisation used when comparing typed answers."""

from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

__all__ = ["normalize", "extract_words"]

_NON_WORD_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """Return ``text`` lower-cased, without diacritics or punctuation.

    Steps run in a fixed order: case-fold, NFD decomposition with combining
    marks dropped, removal of anything that is not a word character or
    whitespace, whitespace collapsing, and a final strip.
    """

    if not text:
        return ""
    lowered = str(text).lower()
    decomposed = unicodedata.normalize("NFD", lowered)
    stripped = "".join(
        ch for ch in decomposed if not unicodedata.combining(ch)
    )
    cleaned = _NON_WORD_RE.sub("", stripped)
    return _SPACE_RE.sub(" ", cleaned).strip()


def extract_words(text: Optional[str]) -> List[str]:
    return [word for word in normalize(text).split(" ") if word]
